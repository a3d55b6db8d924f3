"""
pypolyreg: streaming weighted polynomial regression in decimal arithmetic.

Power sums are accumulated point by point, the normal equations are solved
by Gauss-Jordan elimination, and nothing touches binary floating point
until the caller asks for a float.

Submodules:
    regression: Polynomial design, solvers, weighting and evaluation
    core: Exceptions, result envelope, validation, compute kernels
"""

__version__ = "0.1.0"

from pypolyreg import core
from pypolyreg import regression
from pypolyreg.regression import (
    PolynomialDesign,
    fit,
    get_coefficients,
    interpolate,
    solve,
)

__all__ = [
    "__version__",
    "core",
    "regression",
    "PolynomialDesign",
    "fit",
    "solve",
    "get_coefficients",
    "interpolate",
]
