"""
Solver dispatch for polynomial regression.

This module provides the public solve entry points and backend selection.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal, Mapping

from numpy.typing import ArrayLike

from pypolyreg.core.compute.precision import DEFAULT_PRECISION
from pypolyreg.core.exceptions import ValidationError
from pypolyreg.core.protocols import Backend
from pypolyreg.core.validation import check_coefficient_count
from pypolyreg.regression.design import PolynomialDesign
from pypolyreg.regression.solution import PolynomialParams, PolynomialSolution
from pypolyreg.regression.backends.cpu import CPUGaussJordanBackend


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_gauss_jordan']


def solve(
    design: PolynomialDesign,
    n_coefficients: int | None = None,
    *,
    backend: BackendChoice = 'auto',
) -> PolynomialSolution:
    """
    Solve a design for its polynomial coefficients.

    Args:
        design: Design with data already added
        n_coefficients: Number of coefficients to solve for. Defaults to the
            design's configured count; may be smaller for a lower-degree
            fit from the same sums.
        backend: Computational backend ('auto', 'cpu', 'cpu_gauss_jordan')

    Returns:
        PolynomialSolution with coefficients, diagnostics and evaluation

    Raises:
        ValidationError: If n_coefficients is not a positive integer or the
            backend is unknown
        OutOfRangeError: If the design's sums don't cover n_coefficients
        SingularMatrixError: If the normal equations have no pivot for some
            column (too few distinct x values, or no data)
    """
    if not isinstance(design, PolynomialDesign):
        raise ValidationError(
            f"design: expected PolynomialDesign, got {type(design).__name__}"
        )
    if n_coefficients is None:
        n_coefficients = design.n_coefficients
    n_coefficients = check_coefficient_count(n_coefficients, 'n_coefficients')

    backend_impl = _get_backend(backend)
    result = backend_impl.solve(design, n_coefficients)
    return PolynomialSolution(_result=result)


def get_coefficients(
    design: PolynomialDesign,
    n_coefficients: int | None = None,
) -> tuple[Decimal, ...]:
    """
    Calculate coefficients based on the design's current data.

    Same as solve(design, n_coefficients).coefficients.

    Returns:
        Coefficients as Decimals, lowest power first
    """
    return solve(design, n_coefficients).coefficients


def fit(
    x: ArrayLike,
    y: ArrayLike,
    *,
    n_coefficients: int = 3,
    forced: Mapping[int, Any] | None = None,
    weighting: Any = None,
    precision: int = DEFAULT_PRECISION,
    backend: BackendChoice = 'auto',
) -> PolynomialSolution:
    """
    Fit a polynomial to paired observations in one call.

    Builds a PolynomialDesign, applies forced coefficients and weighting,
    adds the data in order and solves. Use PolynomialDesign directly to
    stream data or to re-solve as points arrive.

    Args:
        x: Predictor values (1D array-like)
        y: Responses (1D array-like, same length as x)
        n_coefficients: Polynomial degree + 1
        forced: Mapping of coefficient index -> pinned value
        weighting: None, Weighting, constant number or callable of the
            1-based sample index
        precision: Significant decimal digits for the computation
        backend: Computational backend

    Returns:
        PolynomialSolution

    Example:
        >>> from pypolyreg.regression import fit
        >>> result = fit([0, 1, 2], [1, 2, 5], n_coefficients=3)
        >>> result.as_array()
        array([1., 1., 1.])
        >>> result.predict(3)
        13.0
    """
    design = PolynomialDesign(n_coefficients, precision=precision)
    for index, value in (forced or {}).items():
        design.set_forced_coefficient(index, value)
    design.set_weighting(weighting)
    design.add_arrays(x, y)
    return solve(design, backend=backend)


def _get_backend(choice: BackendChoice) -> Backend[PolynomialDesign, PolynomialParams]:
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValidationError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_gauss_jordan'):
        return CPUGaussJordanBackend()

    raise ValidationError(f"Unknown backend: {choice!r}")
