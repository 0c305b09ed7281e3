"""Tests for numeric coercion."""

import math

import pytest

from researcher_finder.core.coercion import to_non_negative_int


class TestToNonNegativeInt:
    """Tests for to_non_negative_int."""

    @pytest.mark.parametrize("value", [None, "abc", "", "   ", {}, [], object()])
    def test_non_numeric_values_become_zero(self, value):
        assert to_non_negative_int(value) == 0

    def test_negative_number_clamps_to_zero(self):
        assert to_non_negative_int(-5) == 0

    def test_numeric_string(self):
        assert to_non_negative_int("42") == 42

    def test_numeric_string_with_whitespace(self):
        assert to_non_negative_int(" 17 ") == 17

    def test_negative_numeric_string_clamps(self):
        assert to_non_negative_int("-3") == 0

    def test_float_is_truncated(self):
        assert to_non_negative_int(42.9) == 42

    def test_float_string_is_truncated(self):
        assert to_non_negative_int("42.9") == 42

    def test_small_negative_float_is_zero(self):
        assert to_non_negative_int(-0.5) == 0

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, "nan", "inf"])
    def test_non_finite_values_become_zero(self, value):
        assert to_non_negative_int(value) == 0

    def test_booleans_are_not_numbers(self):
        assert to_non_negative_int(True) == 0
        assert to_non_negative_int(False) == 0

    def test_huge_integer_passes_through(self):
        assert to_non_negative_int(10**30) == 10**30

    @pytest.mark.parametrize("value", [0, 7, -1, 3.3, "9", "x", None, "1e3"])
    def test_result_is_always_non_negative_int(self, value):
        result = to_non_negative_int(value, "cited_by_count")
        assert isinstance(result, int)
        assert result >= 0
