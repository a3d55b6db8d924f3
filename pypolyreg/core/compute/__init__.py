"""
Shared compute infrastructure for pypolyreg.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    precision: Decimal context defaults and construction
    timing: Execution timing utilities
    linalg: Exact linear algebra kernels (Gauss-Jordan)
"""

from pypolyreg.core.compute.precision import (
    DEFAULT_PRECISION,
    DEFAULT_ROUNDING,
    make_context,
)
from pypolyreg.core.compute.timing import Timer

__all__ = [
    # Precision
    "DEFAULT_PRECISION",
    "DEFAULT_ROUNDING",
    "make_context",
    # Timing
    "Timer",
]
