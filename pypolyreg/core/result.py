"""
Generic result container for pypolyreg computations.

Every solve wraps its parameter payload in a Result so that timing,
diagnostics and warnings travel with the numbers that produced them.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (method, pivot order, precision)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so a solution never drifts from its design
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for a solve.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific parameters (coefficients, sums of squares)
        info: Structured metadata (method, pivot order, precision)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=PolynomialParams(coefficients=(Decimal(1), Decimal(2)), ...),
        ...     info={'method': 'gauss_jordan', 'pivot_order': (0, 1)},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_gauss_jordan'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
