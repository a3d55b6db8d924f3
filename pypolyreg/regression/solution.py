"""
Polynomial regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pypolyreg.core.compute.precision import make_context
from pypolyreg.core.result import Result
from pypolyreg.regression._interpolate import evaluate, interpolate


@dataclass(frozen=True)
class PolynomialParams:
    """
    Parameter payload for a polynomial fit.

    This is the immutable data computed by backends. Sums of squares are
    exact to the precision of the design that produced them.
    """
    coefficients: tuple[Decimal, ...]
    forced: tuple[int, ...]
    pivot_order: tuple[int, ...]
    n_observations: int
    sum_weights: Decimal
    rss: Decimal
    tss: Decimal
    df_residual: int
    precision: int


@dataclass
class PolynomialSolution:
    """
    User-facing polynomial fit results.

    Wraps the backend Result and provides accessors for the coefficients,
    goodness of fit and evaluation of the fitted polynomial.
    """
    _result: Result[PolynomialParams]

    @property
    def coefficients(self) -> tuple[Decimal, ...]:
        """Coefficients, lowest power first."""
        return self._result.params.coefficients

    def as_array(self) -> NDArray[np.floating[Any]]:
        """Coefficients as a float64 array, lowest power first."""
        return np.array([float(c) for c in self.coefficients], dtype=np.float64)

    @property
    def n_coefficients(self) -> int:
        return len(self.coefficients)

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    @property
    def forced(self) -> tuple[int, ...]:
        """Indices of coefficients pinned by the design."""
        return self._result.params.forced

    @property
    def n_observations(self) -> int:
        return self._result.params.n_observations

    @property
    def rss(self) -> float:
        return float(self._result.params.rss)

    @property
    def tss(self) -> float:
        return float(self._result.params.tss)

    @property
    def r_squared(self) -> float:
        if self.tss == 0:
            return 1.0 if self.rss == 0 else 0.0
        return 1.0 - (self.rss / self.tss)

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def residual_std_error(self) -> float:
        """
        sqrt(RSS / df) computed in the design's precision.

        Weighted fits report the weighted residual scale. Zero when there
        are no residual degrees of freedom.
        """
        df = self.df_residual
        if df <= 0:
            return 0.0
        params = self._result.params
        if params.rss <= 0:
            return 0.0
        context = make_context(params.precision)
        return float(context.sqrt(context.divide(params.rss, df)))

    def evaluate(self, x: Any) -> Decimal:
        """Fitted polynomial at a scalar x, as an exact Decimal."""
        return evaluate(self.coefficients, x, precision=self._result.params.precision)

    def predict(self, x: ArrayLike) -> float | NDArray[np.floating[Any]]:
        """
        Fitted polynomial at x, as float.

        Scalars give a float; array-likes give a float64 array of the
        same shape.
        """
        precision = self._result.params.precision
        if np.ndim(x) == 0:
            return interpolate(self.coefficients, x, precision=precision)
        x_arr = np.asarray(x)
        values = [
            interpolate(self.coefficients, xi, precision=precision)
            for xi in x_arr.ravel().tolist()
        ]
        return np.array(values, dtype=np.float64).reshape(x_arr.shape)

    def __call__(self, x: ArrayLike) -> float | NDArray[np.floating[Any]]:
        return self.predict(x)

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate a plain-text summary of the fit."""
        lines = [
            "Polynomial Regression Results",
            "=" * 60,
            f"Observations: {self.n_observations}",
            f"Degree: {self.degree}",
            f"Forced: {list(self.forced) if self.forced else 'none'}",
            f"R-squared: {self.r_squared:.6f}",
            f"Residual Std. Error: {self.residual_std_error:.6f} on {self.df_residual} DF",
            "",
            "Coefficients:",
            "-" * 60,
        ]

        forced = set(self.forced)
        for i, coef in enumerate(self.coefficients):
            marker = "  (forced)" if i in forced else ""
            lines.append(f"  x^{i}: {float(coef):20.10g}{marker}")

        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PolynomialSolution(n={self.n_observations}, degree={self.degree}, "
            f"r_squared={self.r_squared:.4f})"
        )
