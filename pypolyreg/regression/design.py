"""
Polynomial regression design.

The design is the only stateful object in the package. It never stores the
observations themselves: each (x, y) pair is folded into running power sums
as it arrives, which is all the normal equations of a polynomial fit need.

    power_sums[k]          = sum_i w_i * x_i^k
    weighted_power_sums[k] = sum_i w_i * y'_i * x_i^k

for k = 0 .. 2*(n_coefficients - 1), where y'_i is y_i minus the contribution
of every forced coefficient. Both sequences are sized when the design is
reset; changing n_coefficients afterwards does not resize them.

Not thread-safe. Concurrent add_data/reset calls on one design must be
serialised by the caller; solving only reads.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from decimal import Context, Decimal, Overflow, localcontext
from typing import Any

from numpy.typing import ArrayLike

from pypolyreg.core.compute.precision import DEFAULT_PRECISION, ONE, ZERO, make_context
from pypolyreg.core.exceptions import NumericalError
from pypolyreg.core.validation import (
    check_coefficient_count,
    check_consistent_length,
    check_decimal,
    check_decimal_array,
    check_index,
    check_precision,
)
from pypolyreg.regression.weighting import Weighting, resolve_weighting


@dataclass(frozen=True)
class ResponseSums:
    """
    Weighted response moments, used only for goodness-of-fit diagnostics.

    Attributes:
        sum_y: sum of w * y over raw responses
        sum_yy: sum of w * y^2 over raw responses
        sum_net_yy: sum of w * y'^2 over responses net of forced terms
    """
    sum_y: Decimal
    sum_yy: Decimal
    sum_net_yy: Decimal


def _power(x: Decimal, k: int) -> Decimal:
    # Decimal(0) ** 0 is an invalid operation; the polynomial wants 1.
    return ONE if k == 0 else x ** k


class PolynomialDesign:
    """
    Streaming accumulator for a weighted polynomial least-squares fit.

    Construction:
        design = PolynomialDesign(3)               # quadratic, 50 digits
        design = PolynomialDesign(5, precision=80) # quartic, 80 digits

    Typical use:
        design.set_forced_coefficient(0, 0)        # fit through the origin
        for x, y in points:
            design.add_data(x, y)
        coefficients = design.get_coefficients()

    Caller obligations:
        - Call reset() after set_coefficient_count() if data was already
          added; the accumulated sums keep the length they had at the last
          reset.
        - Set forced coefficients before adding data; they are netted out of
          y as each point arrives.
    """

    def __init__(
        self,
        n_coefficients: int = 3,
        *,
        precision: int = DEFAULT_PRECISION,
    ):
        self._n_coefficients = check_coefficient_count(n_coefficients, 'n_coefficients')
        self._precision = check_precision(precision)
        self._context = make_context(self._precision)
        self.reset()

    # === State management ===

    def reset(self) -> None:
        """
        Clear all accumulated data, forced coefficients and the weighting.

        Power sums are resized for the current n_coefficients.
        """
        n_terms = 2 * (self._n_coefficients - 1) + 1
        power_sums = [ZERO] * n_terms
        weighted_power_sums = [ZERO] * n_terms

        self._power_sums = power_sums
        self._weighted_power_sums = weighted_power_sums
        self._sum_y = ZERO
        self._sum_yy = ZERO
        self._sum_net_yy = ZERO
        self._forced: dict[int, Decimal] = {}
        self._n_observations = 0
        self._weighting: Weighting | None = None

    def set_coefficient_count(self, n_coefficients: int) -> None:
        """
        Change the number of coefficients to fit (degree + 1).

        Takes full effect at the next reset(). Solves may request fewer
        coefficients than the sums were built for, never more.
        """
        n_coefficients = check_coefficient_count(n_coefficients, 'n_coefficients')
        if self._n_observations > 0 and n_coefficients != self._n_coefficients:
            warnings.warn(
                f"n_coefficients changed from {self._n_coefficients} to "
                f"{n_coefficients} after {self._n_observations} observations; "
                f"power sums still cover {self.coverage} coefficients. "
                f"Call reset() and add the data again.",
                RuntimeWarning,
                stacklevel=2,
            )
        self._n_coefficients = n_coefficients

    def set_forced_coefficient(self, index: int, value: Any) -> None:
        """
        Pin coefficient `index` (of x**index) to `value`.

        Most often used to force a zero offset, but any known coefficient
        can be fixed.

        Raises:
            OutOfRangeError: If index is not in [0, n_coefficients)
            ValidationError: If value is not a finite number
        """
        index = check_index(index, self._n_coefficients, 'coefficient index')
        value = check_decimal(value, 'value')
        self._warn_if_data_present('forced coefficient changed')
        self._forced[index] = value

    def get_forced_coefficient(self, index: int) -> Decimal | None:
        """Value coefficient `index` is forced to, or None if it is free."""
        return self._forced.get(index)

    def clear_forced_coefficient(self, index: int) -> None:
        """Release a forced coefficient. No-op if it was not forced."""
        if index in self._forced:
            self._warn_if_data_present('forced coefficient cleared')
            del self._forced[index]

    def set_weighting(self, weighting: Any) -> None:
        """
        Set the per-sample weighting used by subsequent add_data calls.

        Accepts a Weighting, a constant number, a callable of the 1-based
        sample index, or None for unweighted. The weighting is shared, not
        copied.
        """
        self._weighting = resolve_weighting(weighting)

    def get_weighting(self) -> Weighting | None:
        """Current weighting, or None if unweighted."""
        return self._weighting

    def _warn_if_data_present(self, what: str) -> None:
        if self._n_observations > 0:
            warnings.warn(
                f"{what} after {self._n_observations} observations; points "
                f"already added were netted against the previous forced "
                f"values. Call reset() and add the data again.",
                RuntimeWarning,
                stacklevel=3,
            )

    # === Accumulation ===

    def add_data(self, x: Any, y: Any) -> None:
        """
        Fold one observation into the power sums.

        Args:
            x: Some real value
            y: Some real value corresponding to x

        Raises:
            ValidationError: If x or y is not a finite number
            NumericalError: If the point overflows the decimal exponent range
        """
        x = check_decimal(x, 'x')
        y = check_decimal(y, 'y')
        index = self._n_observations + 1

        # Sums are built aside and committed together; a failed point leaves
        # the design untouched.
        power_sums = list(self._power_sums)
        weighted_power_sums = list(self._weighted_power_sums)

        with localcontext(self._context):
            weight = None
            if self._weighting is not None:
                weight = self._weighting.get_weight(index)

            try:
                net_y = y
                if self._forced:
                    forced_part = sum(
                        (value * _power(x, k) for k, value in sorted(self._forced.items())),
                        ZERO,
                    )
                    net_y = y - forced_part

                # Running x^k, starting with x^0 = 1.
                xk = ONE
                for k in range(len(power_sums)):
                    term = xk if weight is None else xk * weight
                    power_sums[k] += term
                    weighted_power_sums[k] += net_y * term
                    xk *= x

                w = ONE if weight is None else weight
                sum_y = self._sum_y + w * y
                sum_yy = self._sum_yy + w * y * y
                sum_net_yy = self._sum_net_yy + w * net_y * net_y
            except Overflow as e:
                raise NumericalError(
                    f"add_data: point x={x}, y={y} overflows the decimal "
                    f"exponent range (Emax {self._context.Emax}) at "
                    f"{len(power_sums)} power sums; rescale the data"
                ) from e

        self._power_sums = power_sums
        self._weighted_power_sums = weighted_power_sums
        self._sum_y = sum_y
        self._sum_yy = sum_yy
        self._sum_net_yy = sum_net_yy
        self._n_observations = index

    def add_arrays(self, x: ArrayLike, y: ArrayLike) -> None:
        """
        Add paired observations from two array-likes, in order.

        Integer arrays are taken exactly and float arrays through each
        value's repr. Sequences of Decimals or numeric strings are accepted
        too. Both arrays are fully validated before any point is added.

        Raises:
            ValidationError: If either array holds non-numeric or
                non-finite values
            DimensionError: If arrays are not 1D or differ in length
        """
        x_values = check_decimal_array(x, 'x')
        y_values = check_decimal_array(y, 'y')
        check_consistent_length(x_values, y_values, names=('x', 'y'))

        for xi, yi in zip(x_values, y_values):
            self.add_data(xi, yi)

    # === Solving ===

    def get_coefficients(self, n_coefficients: int | None = None) -> tuple[Decimal, ...]:
        """
        Solve for the polynomial coefficients, lowest power first.

        Shorthand for pypolyreg.regression.get_coefficients(self, n).
        """
        from pypolyreg.regression.solvers import get_coefficients
        return get_coefficients(self, n_coefficients)

    # === Properties ===

    @property
    def n_coefficients(self) -> int:
        """Configured number of coefficients (degree + 1)."""
        return self._n_coefficients

    @property
    def coverage(self) -> int:
        """Largest coefficient count the accumulated power sums support."""
        return (len(self._power_sums) + 1) // 2

    @property
    def n_observations(self) -> int:
        """Observations added since the last reset."""
        return self._n_observations

    @property
    def precision(self) -> int:
        """Significant decimal digits used for accumulation and solving."""
        return self._precision

    @property
    def context(self) -> Context:
        """Decimal context for arithmetic on this design's sums."""
        return self._context

    @property
    def forced_coefficients(self) -> dict[int, Decimal]:
        """Copy of the forced coefficient mapping."""
        return dict(self._forced)

    @property
    def power_sums(self) -> tuple[Decimal, ...]:
        """sum(w * x^k) for k = 0 .. 2*(coverage - 1)."""
        return tuple(self._power_sums)

    @property
    def weighted_power_sums(self) -> tuple[Decimal, ...]:
        """sum(w * y' * x^k), with y' net of forced terms."""
        return tuple(self._weighted_power_sums)

    @property
    def response_sums(self) -> ResponseSums:
        """Weighted response moments for goodness of fit."""
        return ResponseSums(
            sum_y=self._sum_y,
            sum_yy=self._sum_yy,
            sum_net_yy=self._sum_net_yy,
        )

    @property
    def metadata(self) -> dict[str, Any]:
        """Summary of the design's configuration and size."""
        return {
            'n_observations': self._n_observations,
            'n_coefficients': self._n_coefficients,
            'coverage': self.coverage,
            'forced': sorted(self._forced),
            'weighting': None if self._weighting is None else self._weighting.name,
            'precision': self._precision,
        }

    def __repr__(self) -> str:
        return (
            f"PolynomialDesign(n_coefficients={self._n_coefficients}, "
            f"n_observations={self._n_observations}, "
            f"forced={sorted(self._forced)}, precision={self._precision})"
        )
