"""
Per-sample weighting for polynomial regression.

A Weighting maps the 1-based index of a sample (its position in the order
data was added) to a Decimal weight. The design calls get_weight exactly
once per add_data, with strictly increasing indices, so stateful schemes
such as decay are deterministic as long as they depend only on the index.

No weighting (None on the design) means every sample has weight 1 and no
multiplication is performed at all.

Variants:
    ConstantWeighting: same weight for every sample
    CallableWeighting: any user function of the index
    ExponentialDecayWeighting: decay ** (index - 1), older samples count more
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Callable

from pypolyreg.core.validation import check_decimal


class Weighting(ABC):
    """Abstract weighting capability: sample index -> weight."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def get_weight(self, index: int) -> Decimal:
        """Weight of the sample added at 1-based position `index`."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class ConstantWeighting(Weighting):
    """Every sample gets the same weight."""

    def __init__(self, value: Any = 1):
        self._value = check_decimal(value, 'value')

    @property
    def name(self) -> str:
        return 'constant'

    @property
    def value(self) -> Decimal:
        return self._value

    def get_weight(self, index: int) -> Decimal:
        return self._value

    def __repr__(self) -> str:
        return f"ConstantWeighting(value={self._value})"


class CallableWeighting(Weighting):
    """
    Weighting backed by a user function.

    The function receives the 1-based sample index and may return anything
    check_decimal accepts (Decimal, int, float, numeric string).
    """

    def __init__(self, func: Callable[[int], Any], name: str = 'custom'):
        if not callable(func):
            raise TypeError(f"func must be callable, got {type(func).__name__}")
        self._func = func
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_weight(self, index: int) -> Decimal:
        return check_decimal(self._func(index), f'weight[{index}]')

    def __repr__(self) -> str:
        return f"CallableWeighting(func={self._func!r}, name={self._name!r})"


class ExponentialDecayWeighting(Weighting):
    """
    Geometric decay by sample index: w_i = decay ** (i - 1).

    The first sample has weight 1. A decay below 1 discounts later samples,
    above 1 favours them.
    """

    def __init__(self, decay: Any):
        decay = check_decimal(decay, 'decay')
        if decay <= 0:
            raise ValueError(f"decay must be positive, got {decay}")
        self._decay = decay

    @property
    def name(self) -> str:
        return 'exponential_decay'

    @property
    def decay(self) -> Decimal:
        return self._decay

    def get_weight(self, index: int) -> Decimal:
        return self._decay ** (index - 1)

    def __repr__(self) -> str:
        return f"ExponentialDecayWeighting(decay={self._decay})"


def resolve_weighting(weighting: Any) -> Weighting | None:
    """Resolve a weighting argument to a Weighting instance.

    Args:
        weighting: None (unweighted), a Weighting instance (passed through),
                   a number (constant weight) or a callable of the index.

    Returns:
        Weighting instance, or None for unweighted.

    Raises:
        TypeError: If the argument is none of the above.
    """
    if weighting is None or isinstance(weighting, Weighting):
        return weighting
    if isinstance(weighting, (int, float, Decimal)) and not isinstance(weighting, bool):
        return ConstantWeighting(weighting)
    if callable(weighting):
        return CallableWeighting(weighting)
    raise TypeError(
        f"weighting must be None, a Weighting, a number or a callable, "
        f"got {type(weighting).__name__}"
    )
