"""
Tests for input validation utilities.

Validates every function in core/validation.py.
"""

import numpy as np
import pytest

from pyresampling.core.exceptions import (
    DimensionError,
    InvalidParameterError,
    ValidationError,
)
from pyresampling.core.validation import (
    check_1d,
    check_array,
    check_finite,
    check_finite_scalar,
    check_min_samples,
    check_ndim,
    check_positive_int,
    check_probability,
    check_unit_interval,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "X")
        assert np.issubdtype(result.dtype, np.floating)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_float_passthrough(self):
        arr = np.array([1.0, 2.0])
        assert check_array(arr, "X").dtype == np.float64

    def test_object_dtype_rejected(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([1, "a", None], "X")

    def test_string_dtype_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(["a", "b"], "X")

    def test_name_in_message(self):
        with pytest.raises(ValidationError, match="my_param"):
            check_array(["a"], "my_param")


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "X")

    def test_nan_fails(self):
        with pytest.raises(ValidationError, match="1 NaN"):
            check_finite(np.array([1.0, np.nan]), "X")

    def test_inf_fails(self):
        with pytest.raises(ValidationError, match="1 Inf"):
            check_finite(np.array([np.inf, 1.0]), "X")


class TestCheckDims:

    def test_1d_passes(self):
        check_1d(np.zeros(3), "x")

    def test_2d_fails_1d_check(self):
        with pytest.raises(DimensionError, match="expected 1D"):
            check_1d(np.zeros((3, 2)), "x")

    def test_ndim(self):
        check_ndim(np.zeros((2, 2, 2)), 3, "x")
        with pytest.raises(DimensionError):
            check_ndim(np.zeros(2), 2, "x")


class TestCheckMinSamples:

    def test_enough(self):
        check_min_samples(np.zeros(5), 5, "x")

    def test_too_few(self):
        with pytest.raises(ValidationError, match="at least 1 samples, got 0"):
            check_min_samples(np.zeros(0), 1, "x")


# ═══════════════════════════════════════════════════════════════════════
# Scalar parameters
# ═══════════════════════════════════════════════════════════════════════


class TestCheckPositiveInt:

    def test_accepts_int(self):
        assert check_positive_int(3, "B") == 3

    def test_accepts_numpy_int(self):
        assert check_positive_int(np.int64(7), "B") == 7

    @pytest.mark.parametrize("value", [0, -1])
    def test_rejects_non_positive(self, value):
        with pytest.raises(InvalidParameterError) as exc_info:
            check_positive_int(value, "B")
        assert exc_info.value.parameter == "B"
        assert exc_info.value.value == value

    @pytest.mark.parametrize("value", [2.5, "3", True, None])
    def test_rejects_non_integers(self, value):
        with pytest.raises(InvalidParameterError):
            check_positive_int(value, "n")


class TestCheckUnitInterval:

    @pytest.mark.parametrize("value", [0, 0.0, 0.5, 1, 1.0])
    def test_accepts_closed_interval(self, value):
        assert check_unit_interval(value, "rho") == float(value)

    @pytest.mark.parametrize("value", [-0.01, 1.01, float("nan"), "x"])
    def test_rejects_outside(self, value):
        with pytest.raises(InvalidParameterError):
            check_unit_interval(value, "rho")


class TestCheckFiniteScalar:

    @pytest.mark.parametrize("value", [0, -2.5, np.float32(1.5), np.int64(3)])
    def test_accepts_real_numbers(self, value):
        result = check_finite_scalar(value, "location")
        assert isinstance(result, float)
        assert result == float(value)

    @pytest.mark.parametrize("value", ["1.0", "abc", None, float("nan"), float("-inf")])
    def test_rejects_non_numeric_and_non_finite(self, value):
        with pytest.raises(InvalidParameterError) as exc_info:
            check_finite_scalar(value, "location")
        assert exc_info.value.parameter == "location"


class TestCheckProbability:

    def test_scalar_promoted(self):
        result = check_probability(0.5, "probs")
        assert result.shape == (1,)

    def test_list(self):
        np.testing.assert_array_equal(
            check_probability([0.025, 0.975], "probs"), [0.025, 0.975]
        )

    def test_bounds_inclusive(self):
        check_probability([0.0, 1.0], "probs")

    def test_out_of_range(self):
        with pytest.raises(InvalidParameterError, match="1.5"):
            check_probability([0.5, 1.5], "probs")

    def test_nan_rejected(self):
        with pytest.raises(InvalidParameterError):
            check_probability([np.nan], "probs")

    def test_empty_rejected(self):
        with pytest.raises(DimensionError):
            check_probability([], "probs")

    def test_2d_rejected(self):
        with pytest.raises(DimensionError):
            check_probability([[0.1, 0.2]], "probs")
