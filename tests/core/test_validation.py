"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_decimal: scalar conversion and rejection
    - check_coefficient_count / check_index / check_precision
    - check_decimal_array, check_finite, check_1d, check_consistent_length
"""

from decimal import Decimal

import numpy as np
import pytest

from pypolyreg.core.exceptions import DimensionError, OutOfRangeError, ValidationError
from pypolyreg.core.validation import (
    check_1d,
    check_coefficient_count,
    check_consistent_length,
    check_decimal,
    check_decimal_array,
    check_finite,
    check_index,
    check_precision,
)


# ═══════════════════════════════════════════════════════════════════════
# check_decimal
# ═══════════════════════════════════════════════════════════════════════


class TestCheckDecimal:
    """check_decimal converts scalars to finite Decimals."""

    def test_decimal_passthrough(self):
        d = Decimal("1.25")
        assert check_decimal(d, "x") is d

    def test_int_exact(self):
        assert check_decimal(12345678901234567890, "x") == Decimal("12345678901234567890")

    def test_float_uses_shortest_repr(self):
        assert check_decimal(0.1, "x") == Decimal("0.1")

    def test_numpy_float(self):
        assert check_decimal(np.float64(2.5), "x") == Decimal("2.5")

    def test_numpy_int(self):
        assert check_decimal(np.int32(7), "x") == Decimal(7)

    def test_string(self):
        assert check_decimal(" 3.14159 ", "x") == Decimal("3.14159")

    def test_unparseable_string(self):
        with pytest.raises(ValidationError, match="cannot parse"):
            check_decimal("abc", "x")

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), -np.inf])
    def test_non_finite_float(self, value):
        with pytest.raises(ValidationError, match="non-finite"):
            check_decimal(value, "x")

    @pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("Infinity"), "nan"])
    def test_non_finite_decimal(self, value):
        with pytest.raises(ValidationError, match="non-finite"):
            check_decimal(value, "x")

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="bool"):
            check_decimal(True, "x")

    def test_other_type_rejected(self):
        with pytest.raises(ValidationError, match="list"):
            check_decimal([1], "x")

    def test_name_in_message(self):
        with pytest.raises(ValidationError, match="weight"):
            check_decimal(None, "weight")


# ═══════════════════════════════════════════════════════════════════════
# Integer arguments
# ═══════════════════════════════════════════════════════════════════════


class TestCheckCoefficientCount:

    def test_valid(self):
        assert check_coefficient_count(3, "n") == 3

    def test_numpy_int(self):
        assert check_coefficient_count(np.int64(2), "n") == 2

    @pytest.mark.parametrize("n", [0, -1])
    def test_below_one(self, n):
        with pytest.raises(ValidationError, match="at least 1"):
            check_coefficient_count(n, "n")

    @pytest.mark.parametrize("n", [2.0, "3", True])
    def test_not_integer(self, n):
        with pytest.raises(ValidationError, match="integer"):
            check_coefficient_count(n, "n")


class TestCheckIndex:

    def test_in_range(self):
        assert check_index(0, 3, "i") == 0
        assert check_index(2, 3, "i") == 2

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_out_of_range(self, index):
        with pytest.raises(OutOfRangeError) as exc_info:
            check_index(index, 3, "coefficient index")
        assert exc_info.value.value == index
        assert exc_info.value.limit == 3
        assert exc_info.value.name == "coefficient index"

    def test_not_integer(self):
        with pytest.raises(ValidationError, match="integer"):
            check_index(1.0, 3, "i")


class TestCheckPrecision:

    def test_valid(self):
        assert check_precision(50) == 50

    def test_too_small(self):
        with pytest.raises(ValidationError, match="at least"):
            check_precision(2)

    def test_not_integer(self):
        with pytest.raises(ValidationError):
            check_precision(50.0)


# ═══════════════════════════════════════════════════════════════════════
# Arrays
# ═══════════════════════════════════════════════════════════════════════


class TestCheckDecimalArray:

    def test_float_array_via_repr(self):
        result = check_decimal_array(np.array([0.1, 2.5]), "x")
        assert result == [Decimal("0.1"), Decimal("2.5")]

    def test_integer_array_exact(self):
        big = 2 ** 53 + 1
        result = check_decimal_array(np.array([0, big], dtype=np.int64), "x")
        assert result == [Decimal(0), Decimal(big)]

    def test_unsigned_integers(self):
        result = check_decimal_array(np.array([2 ** 63 + 1], dtype=np.uint64), "x")
        assert result == [Decimal(2 ** 63 + 1)]

    def test_decimal_list(self):
        values = [Decimal("1.10"), Decimal("-3")]
        assert check_decimal_array(values, "x") == values

    def test_numeric_strings(self):
        assert check_decimal_array(["0.5", " 7 "], "x") == [Decimal("0.5"), Decimal(7)]

    def test_bad_string_names_element(self):
        with pytest.raises(ValidationError, match=r"x\[1\]"):
            check_decimal_array(["1", "a"], "x")

    def test_mixed_rejected(self):
        with pytest.raises(ValidationError):
            check_decimal_array([1, "a", None], "x")

    def test_non_finite_float_array(self):
        with pytest.raises(ValidationError, match="non-finite"):
            check_decimal_array(np.array([1.0, np.inf]), "x")

    def test_non_finite_decimal(self):
        with pytest.raises(ValidationError, match="non-finite"):
            check_decimal_array([Decimal(1), Decimal("NaN")], "x")

    @pytest.mark.parametrize("values", [[1 + 2j], [True, False]])
    def test_non_numeric_dtype_rejected(self, values):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_decimal_array(values, "x")

    def test_2d_rejected(self):
        with pytest.raises(DimensionError):
            check_decimal_array(np.zeros((2, 2)), "x")


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, -2.0]), "x")

    def test_nan_and_inf_counted(self):
        with pytest.raises(ValidationError, match="1 NaN, 2 Inf"):
            check_finite(np.array([np.nan, np.inf, -np.inf, 0.0]), "x")


class TestShapes:

    def test_1d_passes(self):
        check_1d(np.zeros(3), "x")

    def test_2d_fails(self):
        with pytest.raises(DimensionError, match="expected 1D"):
            check_1d(np.zeros((3, 1)), "x")

    def test_consistent_length(self):
        check_consistent_length(np.zeros(3), np.zeros(3), names=("x", "y"))

    def test_inconsistent_length(self):
        with pytest.raises(DimensionError, match="x=3, y=4"):
            check_consistent_length(np.zeros(3), np.zeros(4), names=("x", "y"))

    def test_names_mismatch(self):
        with pytest.raises(ValueError):
            check_consistent_length(np.zeros(3), names=("x", "y"))

    def test_plain_sequences(self):
        with pytest.raises(DimensionError, match="x=2, y=1"):
            check_consistent_length([Decimal(1), Decimal(2)], [Decimal(3)], names=("x", "y"))
