"""
Weighted polynomial least squares.

Public API:
    PolynomialDesign(n)            - streaming accumulator of power sums
    solve(design, n=None)          -> PolynomialSolution
    get_coefficients(design, n=None) -> tuple of Decimal
    fit(x, y, ...)                 -> PolynomialSolution (one-shot)
    evaluate(coefficients, x)      -> Decimal
    interpolate(coefficients, x)   -> float

Example:
    >>> from pypolyreg.regression import PolynomialDesign, interpolate
    >>> design = PolynomialDesign(3)
    >>> for x, y in [(0, 1), (1, 2), (2, 5)]:
    ...     design.add_data(x, y)
    >>> coefficients = design.get_coefficients()
    >>> interpolate(coefficients, 3)
    13.0
"""

from pypolyreg.regression.design import PolynomialDesign
from pypolyreg.regression.solution import PolynomialSolution, PolynomialParams
from pypolyreg.regression.solvers import fit, solve, get_coefficients
from pypolyreg.regression._interpolate import evaluate, interpolate
from pypolyreg.regression.weighting import (
    Weighting,
    ConstantWeighting,
    CallableWeighting,
    ExponentialDecayWeighting,
    resolve_weighting,
)

__all__ = [
    "fit",
    "solve",
    "get_coefficients",
    "evaluate",
    "interpolate",
    "PolynomialDesign",
    "PolynomialSolution",
    "PolynomialParams",
    "Weighting",
    "ConstantWeighting",
    "CallableWeighting",
    "ExponentialDecayWeighting",
    "resolve_weighting",
]
