"""
Exception hierarchy for pypolyreg.

All exceptions inherit from PyPolyRegError so callers can catch any
library-specific error with a single clause. Domain code raises the most
specific class available here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyPolyRegError(Exception):
    """Base exception for all pypolyreg errors."""
    pass


class ValidationError(PyPolyRegError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when x and y arrays handed to batch ingestion have
    different lengths or are not one-dimensional.
    """
    pass


class OutOfRangeError(ValidationError):
    """
    A coefficient index or count lies outside what the design covers.

    Raised when a forced coefficient index is not in [0, n_coefficients),
    or when a solve requests more coefficients than the accumulated power
    sums can support.

    Attributes:
        name: Which argument was out of range
        value: The offending value
        limit: Exclusive upper bound that was exceeded, if any
    """

    def __init__(
        self,
        message: str,
        name: str | None = None,
        value: int | None = None,
        limit: int | None = None,
    ):
        super().__init__(message)
        self.name = name
        self.value = value
        self.limit = limit


class NumericalError(PyPolyRegError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Normal-equation matrix has no pivot for some column.

    Raised by Gauss-Jordan elimination when every remaining row holds an
    exact zero in the column being reduced. Typical causes are too few
    distinct x values for the requested degree, or no data at all.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        column: Column index for which no pivot row was found
        rank: Number of pivots found before failing
        expected_rank: Number of pivots a full solve needs
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        column: int | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.column = column
        self.rank = rank
        self.expected_rank = expected_rank
