"""
Unit tests for runtime value helpers.
"""

import math

import pytest

from loxpy.runtime.values import (
    divide,
    is_equal,
    is_number,
    is_string,
    is_truthy,
    stringify,
)


class TestTruthiness:
    """Tests for the truthiness rule."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, False),
            (False, False),
            (True, True),
            (0.0, False),
            (-0.0, False),
            (1.0, True),
            (-2.5, True),
            ("", True),
            ("0", True),
            (math.nan, True),
        ],
    )
    def test_is_truthy(self, value, expected):
        assert is_truthy(value) is expected


class TestEquality:
    """Tests for structural equality."""

    def test_nil_equals_nil(self):
        assert is_equal(None, None)

    def test_same_numbers(self):
        assert is_equal(1.0, 1.0)
        assert not is_equal(1.0, 2.0)

    def test_same_strings(self):
        assert is_equal("a", "a")
        assert not is_equal("a", "b")

    def test_different_types_never_equal(self):
        assert not is_equal(1.0, "1")
        assert not is_equal(None, False)
        assert not is_equal(True, 1.0)
        assert not is_equal(0.0, False)

    def test_nan_not_equal_to_itself(self):
        assert not is_equal(math.nan, math.nan)


class TestTypeChecks:
    def test_is_number_excludes_bool(self):
        assert is_number(1.0)
        assert is_number(3)
        assert not is_number(True)
        assert not is_number("1")
        assert not is_number(None)

    def test_is_string(self):
        assert is_string("")
        assert not is_string(1.0)


class TestDivide:
    """Tests for IEEE-754 division."""

    def test_ordinary(self):
        assert divide(7.0, 2.0) == 3.5

    def test_positive_by_zero(self):
        assert divide(1.0, 0.0) == math.inf

    def test_negative_by_zero(self):
        assert divide(-1.0, 0.0) == -math.inf

    def test_by_negative_zero(self):
        assert divide(1.0, -0.0) == -math.inf

    def test_zero_by_zero(self):
        assert math.isnan(divide(0.0, 0.0))


class TestStringify:
    """Tests for display rendering."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "nil"),
            (True, "true"),
            (False, "false"),
            (6.0, "6"),
            (-4.0, "-4"),
            (2.5, "2.5"),
            (0.1, "0.1"),
            ("ab", "ab"),
            ("", ""),
            (math.inf, "Infinity"),
            (-math.inf, "-Infinity"),
            (math.nan, "NaN"),
            (1e21, "1e+21"),
        ],
    )
    def test_stringify(self, value, expected):
        assert stringify(value) == expected
