"""
Linear algebra kernels.

Exact-arithmetic solvers shared by the regression backends.
"""

from pypolyreg.core.compute.linalg.gauss_jordan import (
    GaussJordanResult,
    gauss_jordan_solve,
)

__all__ = [
    "GaussJordanResult",
    "gauss_jordan_solve",
]
