"""
Tests for the Result[P] envelope.

Validates:
    - Generic type parameter works with arbitrary payload types
    - Frozen immutability
    - Default factories (warnings, provenance)
    - has_warning() method
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pyresampling.core.result import Result, _default_provenance


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _make(**kwargs):
    base = dict(
        params=FakeParams(value=1.0),
        info={},
        timing=None,
        backend_name="cpu",
    )
    base.update(kwargs)
    return Result(**base)


class TestResultConstruction:

    def test_basic_creation(self):
        result = _make(
            params=FakeParams(value=42.0),
            info={"mode": "resample"},
            timing={"total_seconds": 0.01},
            backend_name="cpu_replicate",
        )
        assert result.params.value == 42.0
        assert result.info["mode"] == "resample"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "cpu_replicate"

    def test_timing_none(self):
        assert _make().timing is None


class TestDefaults:

    def test_warnings_default_empty(self):
        result = _make()
        assert result.warnings == ()
        assert isinstance(result.warnings, tuple)

    def test_provenance_auto_generated(self):
        result = _make()
        assert "pyresampling_version" in result.provenance
        assert "numpy_version" in result.provenance
        assert "scipy_version" in result.provenance

    def test_provenance_explicit_override(self):
        result = _make(provenance={"custom": "metadata"})
        assert result.provenance == {"custom": "metadata"}

    def test_default_provenance_matches_package_version(self):
        import pyresampling
        assert _default_provenance()["pyresampling_version"] == pyresampling.__version__


class TestHasWarning:

    def test_substring_match(self):
        result = _make(warnings=("3 of 100 replicates contain non-finite values",))
        assert result.has_warning("non-finite")
        assert not result.has_warning("extreme order")

    def test_no_warnings(self):
        assert not _make().has_warning("anything")


class TestImmutability:

    def test_cannot_set_params(self):
        result = _make()
        with pytest.raises(FrozenInstanceError):
            result.params = FakeParams(value=2.0)

    def test_cannot_set_warnings(self):
        result = _make()
        with pytest.raises(FrozenInstanceError):
            result.warnings = ("new warning",)
