"""
Input validation utilities for pypolyreg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - Scalars become Decimal here and nowhere else
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math
import numbers
from decimal import Decimal, InvalidOperation
from typing import Any, Sized

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pypolyreg.core.compute.precision import MIN_PRECISION
from pypolyreg.core.exceptions import ValidationError, DimensionError, OutOfRangeError


def check_decimal(value: Any, name: str) -> Decimal:
    """
    Convert a scalar to a finite Decimal.

    Decimals pass through unchanged and integers and strings convert
    exactly. Floats (Python or NumPy) convert through their shortest
    round-trip repr, so 0.1 becomes Decimal('0.1') rather than the
    binary expansion 0.1000000000000000055511151231257827...

    Args:
        value: Scalar to convert
        name: Parameter name for error messages

    Returns:
        Finite Decimal

    Raises:
        ValidationError: If value is not numeric, is a bool, or is NaN/Inf
    """
    if isinstance(value, bool):
        raise ValidationError(f"{name}: expected a number, got bool {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, numbers.Integral):
        result = Decimal(int(value))
    elif isinstance(value, numbers.Real):
        as_float = float(value)
        if not math.isfinite(as_float):
            raise ValidationError(f"{name}: non-finite value {as_float!r}")
        result = Decimal(str(as_float))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as e:
            raise ValidationError(f"{name}: cannot parse {value!r} as a number") from e
    else:
        raise ValidationError(
            f"{name}: expected a number, got {type(value).__name__}"
        )

    if not result.is_finite():
        raise ValidationError(f"{name}: non-finite value {result!r}")
    return result


def check_coefficient_count(n: Any, name: str) -> int:
    """
    Verify a coefficient count is an integer of at least 1.

    Args:
        n: Count to check
        name: Parameter name for error messages

    Returns:
        The count as a plain int

    Raises:
        ValidationError: If n is not an integer or is below 1
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise ValidationError(f"{name}: expected an integer, got {type(n).__name__}")
    if n < 1:
        raise ValidationError(f"{name}: must be at least 1, got {n}")
    return int(n)


def check_index(index: Any, limit: int, name: str) -> int:
    """
    Verify an index lies in [0, limit).

    Args:
        index: Index to check
        limit: Exclusive upper bound
        name: Parameter name for error messages

    Returns:
        The index as a plain int

    Raises:
        ValidationError: If index is not an integer
        OutOfRangeError: If index is negative or not below limit
    """
    if isinstance(index, bool) or not isinstance(index, numbers.Integral):
        raise ValidationError(
            f"{name}: expected an integer, got {type(index).__name__}"
        )
    if not 0 <= index < limit:
        raise OutOfRangeError(
            f"{name}: {index} is outside [0, {limit})",
            name=name,
            value=int(index),
            limit=limit,
        )
    return int(index)


def check_precision(precision: Any) -> int:
    """
    Verify a decimal precision (significant digits) is usable.

    Raises:
        ValidationError: If precision is not an integer >= MIN_PRECISION
    """
    if isinstance(precision, bool) or not isinstance(precision, numbers.Integral):
        raise ValidationError(
            f"precision: expected an integer, got {type(precision).__name__}"
        )
    if precision < MIN_PRECISION:
        raise ValidationError(
            f"precision: must be at least {MIN_PRECISION} digits, got {precision}"
        )
    return int(precision)


def check_decimal_array(
    values: ArrayLike,
    name: str,
) -> list[Decimal]:
    """
    Validate a 1D array-like and convert each element to a finite Decimal.

    Numeric arrays are checked with numpy and then converted element by
    element through check_decimal, never through a float64 cast: integer
    dtypes arrive as Python ints (exact at any size) and float dtypes
    through each value's repr. Object and string arrays, such as lists of
    Decimals or numeric strings, are converted the same way.

    Args:
        values: Input to validate
        name: Parameter name for error messages

    Returns:
        List of Decimals in input order

    Raises:
        ValidationError: If the input has a non-numeric dtype (bool,
            complex, bytes, ...) or holds non-numeric or non-finite values
        DimensionError: If the input is not 1D
    """
    try:
        array = np.asarray(values)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    check_1d(array, name)

    kind = array.dtype.kind
    if kind == 'f':
        check_finite(array, name)
    elif kind not in ('i', 'u', 'O', 'U'):
        raise ValidationError(
            f"{name}: non-numeric dtype {array.dtype}, expected real numeric data"
        )

    return [check_decimal(v, f'{name}[{i}]') for i, v in enumerate(array.tolist())]


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_consistent_length(
    *arrays: Sized,
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays or sequences have the same length.

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [len(arr) for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")
