"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_finite: type and NaN/Inf rejection
    - check_positive / check_probability / check_interval: ranges
    - check_non_negative_int / check_positive_int: integrality
    - check_shape: table dimensions
"""

import math

import numpy as np
import pytest

from pynpst.core.exceptions import DimensionError, ValidationError
from pynpst.core.tolerances import APPROXIMATION, EXACT, TABLE_KEY
from pynpst.core.validation import (
    check_finite,
    check_interval,
    check_non_negative_int,
    check_positive,
    check_positive_int,
    check_probability,
    check_shape,
)


class TestCheckFinite:

    def test_returns_float(self):
        result = check_finite(3, "x")
        assert isinstance(result, float)
        assert result == 3.0

    def test_accepts_numpy_scalar(self):
        assert check_finite(np.float64(0.25), "x") == 0.25

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_rejects_non_finite(self, value):
        with pytest.raises(ValidationError, match="finite"):
            check_finite(value, "x")

    def test_rejects_string(self):
        with pytest.raises(ValidationError, match="real number"):
            check_finite("1.0", "x")

    def test_rejects_bool(self):
        with pytest.raises(ValidationError):
            check_finite(True, "x")


class TestRanges:

    def test_positive(self):
        assert check_positive(0.5, "sigma") == 0.5

    @pytest.mark.parametrize("value", [0.0, -1.0])
    def test_positive_rejects(self, value):
        with pytest.raises(ValidationError, match="sigma"):
            check_positive(value, "sigma")

    @pytest.mark.parametrize("value", [0.0, 0.5, 1.0])
    def test_probability_bounds_inclusive(self, value):
        assert check_probability(value, "p") == value

    @pytest.mark.parametrize("value", [-0.01, 1.01])
    def test_probability_rejects(self, value):
        with pytest.raises(ValidationError, match=r"\[0, 1\]"):
            check_probability(value, "p")

    def test_interval(self):
        assert check_interval(0, 2, ("start", "end")) == (0.0, 2.0)

    def test_interval_rejects_empty(self):
        with pytest.raises(ValidationError, match="start must be < end"):
            check_interval(2.0, 2.0, ("start", "end"))


class TestIntegers:

    def test_integral_float_accepted(self):
        assert check_non_negative_int(3.0, "n") == 3

    def test_numpy_integer_accepted(self):
        assert check_non_negative_int(np.int64(7), "n") == 7

    def test_zero_allowed(self):
        assert check_non_negative_int(0, "n") == 0

    def test_fraction_rejected(self):
        with pytest.raises(ValidationError, match="integer"):
            check_non_negative_int(2.5, "n")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match=">= 0"):
            check_non_negative_int(-1, "n")

    def test_positive_int_rejects_zero(self):
        with pytest.raises(ValidationError, match=">= 1"):
            check_positive_int(0, "n")


class TestCheckShape:

    def test_valid(self):
        assert check_shape(3, 4, name="table") == (3, 4)

    def test_negative_dimension(self):
        with pytest.raises(DimensionError, match="dimension 1"):
            check_shape(3, -1, name="table")


class TestToleranceTiers:

    def test_table_key_is_epsilon(self):
        assert TABLE_KEY.atol == 0.002

    def test_matches(self):
        assert APPROXIMATION.matches(1.00005, 1.0)
        assert not EXACT.matches(1.00005, 1.0)
