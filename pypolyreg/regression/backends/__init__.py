"""
Polynomial regression backends.

Available backends:
    CPUGaussJordanBackend: decimal Gauss-Jordan reference implementation
"""

from pypolyreg.regression.backends.cpu import CPUGaussJordanBackend

__all__ = [
    "CPUGaussJordanBackend",
]
