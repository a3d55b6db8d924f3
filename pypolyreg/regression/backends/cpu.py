"""
CPU reference backend for polynomial regression.

Builds the normal equations from the design's power sums and solves them by
Gauss-Jordan elimination in decimal arithmetic. This is the reference
implementation; no floating point is involved until the caller asks for it.
"""

from decimal import Decimal, localcontext
from typing import Any

from pypolyreg.core.compute.linalg.gauss_jordan import gauss_jordan_solve
from pypolyreg.core.compute.precision import ONE, ZERO
from pypolyreg.core.compute.timing import Timer
from pypolyreg.core.exceptions import OutOfRangeError
from pypolyreg.core.result import Result
from pypolyreg.regression.design import PolynomialDesign
from pypolyreg.regression.solution import PolynomialParams


class CPUGaussJordanBackend:
    """
    CPU backend using Gauss-Jordan elimination with free pivot order.

    Implements the Backend protocol for PolynomialDesign -> PolynomialParams.
    Reads the design only; a failed solve leaves it untouched.
    """

    @property
    def name(self) -> str:
        return 'cpu_gauss_jordan'

    def solve(self, design: PolynomialDesign, n_coefficients: int) -> Result[PolynomialParams]:
        """
        Solve the weighted normal equations for n_coefficients unknowns.

        Algorithm:
            1. Hankel matrix of power sums, m[r][c] = S[r + c], augmented
               with the weighted power sums as right hand side
            2. Forced coefficients below n_coefficients replace their row
               and column with the identity equation c_k = value
            3. Gauss-Jordan elimination (forward then backward pass)
            4. Residual and total sums of squares from the same power sums

        Args:
            design: Design holding the accumulated sums
            n_coefficients: Number of coefficients to solve for

        Returns:
            Result containing PolynomialParams

        Raises:
            OutOfRangeError: If the sums don't cover n_coefficients, or a
                forced index is beyond the design's coefficient count
            SingularMatrixError: If some column has no pivot
        """
        self._check_coverage(design, n_coefficients)

        timer = Timer()
        timer.start()

        forced = {
            k: v for k, v in design.forced_coefficients.items() if k < n_coefficients
        }

        # === Build Augmented Matrix ===
        with timer.section('build_matrix'):
            augmented = _build_augmented(design, n_coefficients)
            _apply_forced(augmented, forced)

        # === Eliminate ===
        with timer.section('elimination'):
            gj = gauss_jordan_solve(
                augmented,
                context=design.context,
                matrix_name='normal equations',
            )

        # === Goodness of Fit ===
        with timer.section('diagnostics'):
            free = [k for k in range(n_coefficients) if k not in forced]
            rss = _residual_sum_of_squares(design, gj.solution, free)
            tss = _total_sum_of_squares(design)
            df_residual = design.n_observations - len(free)

        timer.stop()

        warnings: list[str] = []
        if df_residual <= 0:
            warnings.append(
                f"No residual degrees of freedom: {design.n_observations} "
                f"observations for {len(free)} free coefficients"
            )

        params = PolynomialParams(
            coefficients=gj.solution,
            forced=tuple(sorted(forced)),
            pivot_order=gj.order,
            n_observations=design.n_observations,
            sum_weights=design.power_sums[0],
            rss=rss,
            tss=tss,
            df_residual=df_residual,
            precision=design.precision,
        )

        weighting = design.get_weighting()
        info: dict[str, Any] = {
            'method': 'gauss_jordan',
            'pivot_order': gj.order,
            'precision': design.precision,
            'n_coefficients': n_coefficients,
            'weighting': None if weighting is None else weighting.name,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings),
        )

    @staticmethod
    def _check_coverage(design: PolynomialDesign, n_coefficients: int) -> None:
        if not 1 <= n_coefficients <= design.coverage:
            raise OutOfRangeError(
                f"n_coefficients: requested {n_coefficients}, but the power sums "
                f"cover 1 to {design.coverage} coefficients. Call reset() after "
                f"raising the coefficient count, then add the data again.",
                name='n_coefficients',
                value=n_coefficients,
                limit=design.coverage + 1,
            )

        beyond = sorted(k for k in design.forced_coefficients if k >= design.n_coefficients)
        if beyond:
            raise OutOfRangeError(
                f"forced coefficient index {beyond[0]} is outside "
                f"[0, {design.n_coefficients}); clear it or raise the coefficient count",
                name='forced coefficient index',
                value=beyond[0],
                limit=design.n_coefficients,
            )


def _build_augmented(design: PolynomialDesign, n: int) -> list[list[Decimal]]:
    # Each row is one normal equation; for a cubic (n = 4) the power
    # indices are
    #     [ 0 1 2 3 | 0 ]
    #     [ 1 2 3 4 | 1 ]
    #     [ 2 3 4 5 | 2 ]
    #     [ 3 4 5 6 | 3 ]
    s = design.power_sums
    t = design.weighted_power_sums
    return [[s[r + c] for c in range(n)] + [t[r]] for r in range(n)]


def _apply_forced(augmented: list[list[Decimal]], forced: dict[int, Decimal]) -> None:
    # Coefficient k forced to F:
    #     [ a b c d | w ]      [ a 0 c d | w ]
    #     [ b c d e | x ]  ->  [ 0 1 0 0 | F ]
    #     [ c d e f | y ]      [ c 0 e f | y ]
    #     [ d e f g | z ]      [ d 0 f g | z ]
    n = len(augmented)
    for k, value in forced.items():
        for i in range(n):
            augmented[i][k] = ZERO
            augmented[k][i] = ZERO
        augmented[k][k] = ONE
        augmented[k][n] = value


def _residual_sum_of_squares(
    design: PolynomialDesign,
    coefficients: tuple[Decimal, ...],
    free: list[int],
) -> Decimal:
    """
    sum w (y' - sum_free c_j x^j)^2, expanded over the power sums.

    Forced terms are already netted out of y', so only free coefficients
    enter the quadratic form.
    """
    s = design.power_sums
    t = design.weighted_power_sums
    with localcontext(design.context):
        rss = design.response_sums.sum_net_yy
        for j in free:
            rss -= 2 * coefficients[j] * t[j]
            for k in free:
                rss += coefficients[j] * coefficients[k] * s[j + k]
    return max(rss, ZERO)


def _total_sum_of_squares(design: PolynomialDesign) -> Decimal:
    """sum w (y - ybar_w)^2 over raw responses."""
    sums = design.response_sums
    sum_w = design.power_sums[0]
    if sum_w == 0:
        return ZERO
    with localcontext(design.context):
        tss = sums.sum_yy - sums.sum_y * sums.sum_y / sum_w
    return max(tss, ZERO)
