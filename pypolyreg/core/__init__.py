"""
Core infrastructure for pypolyreg.

Shared abstractions and utilities used by the regression package.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators and scalar conversion
    compute: Decimal precision, timing, Gauss-Jordan elimination
"""

from pypolyreg.core.protocols import Backend
from pypolyreg.core.result import Result
from pypolyreg.core.exceptions import (
    PyPolyRegError,
    ValidationError,
    DimensionError,
    OutOfRangeError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyPolyRegError",
    "ValidationError",
    "DimensionError",
    "OutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
]
