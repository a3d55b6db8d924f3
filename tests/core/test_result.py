"""
Tests for the Result[P] envelope.
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pypolyreg.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _result(**overrides):
    kwargs = dict(
        params=FakeParams(value=1.0),
        info={"method": "test"},
        timing=None,
        backend_name="cpu",
    )
    kwargs.update(overrides)
    return Result(**kwargs)


class TestResult:

    def test_fields(self):
        result = _result(timing={"total_seconds": 0.5})
        assert result.params.value == 1.0
        assert result.info["method"] == "test"
        assert result.timing["total_seconds"] == 0.5
        assert result.backend_name == "cpu"

    def test_warnings_default_empty(self):
        assert _result().warnings == ()

    def test_frozen(self):
        result = _result()
        with pytest.raises(FrozenInstanceError):
            result.backend_name = "gpu"

    def test_has_warning_substring(self):
        result = _result(warnings=("No residual degrees of freedom: 3 observations",))
        assert result.has_warning("degrees of freedom")
        assert not result.has_warning("singular")

    def test_has_warning_empty(self):
        assert not _result().has_warning("")
