"""
Evaluation of a coefficient vector.

Stateless: safe to call from any thread with any coefficient vector.
"""

from __future__ import annotations

from decimal import Decimal, localcontext
from typing import Any, Sequence

from pypolyreg.core.compute.precision import DEFAULT_PRECISION, ONE, ZERO, make_context
from pypolyreg.core.validation import check_decimal, check_precision


def evaluate(
    coefficients: Sequence[Any],
    x: Any,
    *,
    precision: int | None = None,
) -> Decimal:
    """
    Evaluate sum(coefficients[i] * x**i) in decimal arithmetic.

    Args:
        coefficients: Coefficients, lowest power first (Decimal, int, float
                      or numeric string)
        x: Point at which to evaluate
        precision: Significant digits; DEFAULT_PRECISION if None

    Returns:
        Polynomial value as a Decimal. An empty vector evaluates to 0.
    """
    precision = DEFAULT_PRECISION if precision is None else check_precision(precision)
    x = check_decimal(x, 'x')
    terms = [check_decimal(c, f'coefficients[{i}]') for i, c in enumerate(coefficients)]

    with localcontext(make_context(precision)):
        y = ZERO
        xk = ONE
        for c in terms:
            y += c * xk
            xk *= x
    return y


def interpolate(
    coefficients: Sequence[Any],
    x: Any,
    *,
    precision: int | None = None,
) -> float:
    """
    Return y for a given x and coefficient set, as a float.

    The sum is formed exactly (see evaluate) and only the final value is
    rounded to binary floating point.
    """
    return float(evaluate(coefficients, x, precision=precision))
