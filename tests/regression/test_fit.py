"""
Tests for the one-call fit().

Tests the complete pipeline: design construction, forced coefficients,
weighting, backend selection and solution properties.
"""

from decimal import Decimal

import pytest
import numpy as np

from pypolyreg import fit as top_level_fit
from pypolyreg.regression import fit
from pypolyreg.regression.solution import PolynomialSolution
from pypolyreg.core.exceptions import (
    DimensionError,
    OutOfRangeError,
    SingularMatrixError,
    ValidationError,
)


class TestFitBasic:
    """Basic fit() functionality tests."""

    def test_fit_from_lists(self, quadratic_points):
        x, y = zip(*quadratic_points)
        result = fit(x, y)
        assert isinstance(result, PolynomialSolution)
        np.testing.assert_array_equal(result.as_array(), [1.0, 1.0, 1.0])

    def test_fit_from_arrays(self, noisy_quadratic):
        x, y = noisy_quadratic
        result = fit(x, y, n_coefficients=3)
        np.testing.assert_allclose(result.as_array(), [0.5, -1.25, 0.75], atol=0.15)

    def test_matches_numpy_polyfit(self, noisy_quadratic):
        x, y = noisy_quadratic
        result = fit(x, y, n_coefficients=4)
        expected = np.polyfit(x, y, 3)[::-1]
        np.testing.assert_allclose(result.as_array(), expected, rtol=1e-9, atol=1e-12)

    def test_exported_at_top_level(self):
        assert top_level_fit is fit

    def test_exact_cubic(self, cubic_data):
        x, y, coefficients = cubic_data
        result = fit(x, [float(v) for v in y], n_coefficients=4)
        for actual, expected in zip(result.coefficients, coefficients):
            assert abs(actual - expected) < Decimal("1e-30")

    def test_fit_from_decimals(self):
        x = [Decimal("0"), Decimal("1"), Decimal("2")]
        y = [Decimal(1), Decimal(2), Decimal(5)]
        result = fit(x, y)
        for actual in result.coefficients:
            assert abs(actual - 1) < Decimal("1e-30")

    def test_large_integers_not_rounded(self):
        # 2**53 + 1 has no float64 representation
        big = 2 ** 53 + 1
        result = fit(np.array([0, 1, 2], dtype=np.int64), np.array([big, big + 1, big + 2]),
                     n_coefficients=2, forced={1: 1})
        assert result.coefficients == (Decimal(big), Decimal(1))


class TestFitOptions:

    def test_forced_mapping(self):
        x = [0, 1, 2, 3]
        y = [1, 3, 5, 7]
        result = fit(x, y, n_coefficients=2, forced={0: 1})
        assert result.coefficients == (1, 2)
        assert result.forced == (0,)

    def test_forced_pins_value_despite_data(self):
        # data says intercept 1, slope 2; pin slope to 0
        result = fit([0, 1, 2, 3], [1, 3, 5, 7], n_coefficients=2, forced={1: 0})
        assert result.coefficients[1] == 0
        # best constant for y' = y is the mean
        assert result.coefficients[0] == 4

    def test_callable_weighting(self):
        # zero weight on the outlier removes it from the fit
        x = [0, 1, 2, 3]
        y = [1, 3, 5, 100]
        result = fit(x, y, n_coefficients=2, weighting=lambda i: 0 if i == 4 else 1)
        assert result.coefficients == (1, 2)
        assert result.info['weighting'] == 'custom'

    def test_constant_weighting_is_neutral(self, noisy_quadratic):
        x, y = noisy_quadratic
        plain = fit(x, y)
        weighted = fit(x, y, weighting=5)
        np.testing.assert_allclose(weighted.as_array(), plain.as_array(), rtol=1e-12)

    def test_precision_recorded(self, quadratic_points):
        x, y = zip(*quadratic_points)
        result = fit(x, y, precision=30)
        assert result.info['precision'] == 30

    def test_explicit_backend(self, quadratic_points):
        x, y = zip(*quadratic_points)
        assert fit(x, y, backend='cpu').backend_name == 'cpu_gauss_jordan'


class TestFitErrors:

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            fit([1, 2, 3], [1, 2])

    def test_nan(self):
        with pytest.raises(ValidationError):
            fit([1.0, 2.0, np.nan], [1.0, 2.0, 3.0])

    def test_unknown_backend(self, quadratic_points):
        x, y = zip(*quadratic_points)
        with pytest.raises(ValidationError, match="Unknown backend"):
            fit(x, y, backend='gpu')

    def test_too_few_distinct_points(self):
        with pytest.raises(SingularMatrixError):
            fit([1, 1, 1], [2, 3, 4], n_coefficients=2)

    def test_forced_index_out_of_range(self):
        with pytest.raises(OutOfRangeError):
            fit([0, 1], [0, 1], n_coefficients=2, forced={5: 1})


class TestFitSolution:

    def test_predict_scalar(self, quadratic_points):
        x, y = zip(*quadratic_points)
        result = fit(x, y)
        value = result.predict(3)
        assert isinstance(value, float)
        assert value == 13.0

    def test_predict_array_keeps_shape(self, quadratic_points):
        x, y = zip(*quadratic_points)
        result = fit(x, y)
        grid = np.array([[0.0, 1.0], [2.0, 3.0]])
        values = result.predict(grid)
        assert values.shape == (2, 2)
        assert values.dtype == np.float64
        np.testing.assert_array_equal(values, [[1.0, 3.0], [7.0, 13.0]])

    def test_call_is_predict(self, quadratic_points):
        x, y = zip(*quadratic_points)
        result = fit(x, y)
        assert result(-1) == result.predict(-1) == 1.0

    def test_evaluate_is_decimal(self, quadratic_points):
        x, y = zip(*quadratic_points)
        result = fit(x, y)
        value = result.evaluate("0.5")
        assert isinstance(value, Decimal)
        assert abs(value - Decimal("1.75")) < Decimal("1e-30")

    def test_as_array(self, quadratic_points):
        x, y = zip(*quadratic_points)
        arr = fit(x, y).as_array()
        assert arr.dtype == np.float64
        np.testing.assert_array_equal(arr, [1.0, 1.0, 1.0])

    def test_degree(self, quadratic_points):
        x, y = zip(*quadratic_points)
        result = fit(x, y)
        assert result.degree == 2
        assert result.n_coefficients == 3

    def test_perfect_fit_diagnostics(self, quadratic_points):
        x, y = zip(*quadratic_points)
        result = fit(x, y)
        assert result.rss < 1e-30
        assert result.r_squared == 1.0
        assert result.df_residual == 0
        assert result.residual_std_error == 0.0
        assert any("degrees of freedom" in w for w in result.warnings)

    def test_timing_sections(self, quadratic_points):
        x, y = zip(*quadratic_points)
        timing = fit(x, y).timing
        assert timing['total_seconds'] >= 0
        assert {'build_matrix', 'elimination', 'diagnostics'} <= set(timing)

    def test_repr(self, quadratic_points):
        x, y = zip(*quadratic_points)
        text = repr(fit(x, y))
        assert text.startswith("PolynomialSolution(")
        assert "degree=2" in text

    def test_summary(self, noisy_quadratic):
        x, y = noisy_quadratic
        summary = fit(x, y, forced={0: 0.5}).summary()
        assert "R-squared" in summary
        assert "x^2" in summary
        assert "(forced)" in summary
        assert "Backend: cpu_gauss_jordan" in summary
