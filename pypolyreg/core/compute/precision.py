"""
Decimal precision configuration.

Power sums of high-degree polynomials over many samples overflow the
53-bit mantissa of a float long before they overflow anything else, so all
accumulation and elimination runs on decimal.Decimal under an explicit
context. This module owns the defaults and builds those contexts.
"""

import decimal
from decimal import Decimal


# Significant digits carried through accumulation and elimination
DEFAULT_PRECISION: int = 50

# Rounding applied when a result exceeds the context precision
DEFAULT_ROUNDING: str = decimal.ROUND_HALF_EVEN

# Smallest precision accepted; below this the elimination is meaningless
MIN_PRECISION: int = 8

ZERO = Decimal(0)
ONE = Decimal(1)


def make_context(precision: int = DEFAULT_PRECISION) -> decimal.Context:
    """
    Build the arithmetic context for a design or an evaluation.

    Overflow, division by zero and invalid operations trap; Infinity and
    NaN never reach the coefficients.

    Args:
        precision: Number of significant decimal digits

    Returns:
        A fresh decimal.Context
    """
    return decimal.Context(
        prec=precision,
        rounding=DEFAULT_ROUNDING,
        traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
    )
