"""
Tests for key/range/number validation.

These tests verify that:
1. The injected key predicate decides key validity
2. Range checks run in order: non-numeric, above max, below min
3. Store values and caller input are parsed with different "missing" semantics
"""

import math

import pytest

from scoreledger.errors import (
    AboveMaxError,
    BelowMinError,
    InvalidKeyError,
    LedgerError,
    NonExistentKeyError,
    NonNumericChangeError,
    NonNumericValueError,
)
from scoreledger.services.validator import (
    assert_key,
    assert_range,
    coerce_number,
    is_finite_number,
    parse_number,
)
from scoreledger.utils.keys import invalid_unless_length


invalid = invalid_unless_length(8)


# =============================================================================
# Key checks
# =============================================================================

def test_assert_key_rejects_short_key():
    with pytest.raises(InvalidKeyError, match="method"):
        assert_key(invalid, "abc", "method")


def test_assert_key_accepts_valid_key():
    assert_key(invalid, "abcdefgh", "method")


def test_assert_key_rejects_non_string():
    with pytest.raises(InvalidKeyError):
        assert_key(invalid, None, "create")
    with pytest.raises(InvalidKeyError):
        assert_key(invalid, 12345678, "create")


def test_error_carries_method_and_reason():
    with pytest.raises(InvalidKeyError) as exc:
        assert_key(invalid, "abc", "delete")
    assert exc.value.method == "delete"
    assert exc.value.reason == "invalid key"
    assert str(exc.value) == "delete error: invalid key"
    assert isinstance(exc.value, LedgerError)


# =============================================================================
# Range checks
# =============================================================================

@pytest.mark.parametrize("value", [0, 150, 0.4 * 0 + 0.6 * 150, 75.5])
def test_assert_range_accepts_bounds_and_between(value):
    assert_range(value, 0, 150, "method")


def test_assert_range_above_max():
    with pytest.raises(AboveMaxError, match="above max"):
        assert_range(151, 0, 150, "method")


def test_assert_range_below_min():
    with pytest.raises(BelowMinError, match="below min"):
        assert_range(-1, 0, 150, "method")


@pytest.mark.parametrize("value", ["non-numeric", "42", None, math.nan, math.inf, -math.inf, True])
def test_assert_range_non_numeric(value):
    with pytest.raises(NonNumericValueError):
        assert_range(value, 0, 150, "method")


def test_assert_range_checks_non_numeric_before_bounds():
    """An infinite value is non-numeric, not above max."""
    with pytest.raises(NonNumericValueError):
        assert_range(math.inf, 0, 150, "method")


def test_assert_range_checks_above_max_before_below_min():
    """With an inverted window a value can violate both; above-max wins."""
    with pytest.raises(AboveMaxError):
        assert_range(5, 10, 0, "method")


def test_is_finite_number():
    assert is_finite_number(1)
    assert is_finite_number(-2.5)
    assert not is_finite_number(False)
    assert not is_finite_number("1")
    assert not is_finite_number(math.nan)


# =============================================================================
# Parsing
# =============================================================================

def test_parse_number_missing_is_non_existent_key():
    with pytest.raises(NonExistentKeyError, match="non-existent key"):
        parse_number(None, "get")


def test_parse_number_garbage_is_non_numeric_value():
    with pytest.raises(NonNumericValueError, match="non-numeric value"):
        parse_number("walrus", "get")


@pytest.mark.parametrize("raw,expected", [("100", 100.0), (b"12.5", 12.5), (7, 7.0), (-3.25, -3.25)])
def test_parse_number_accepts_store_replies(raw, expected):
    assert parse_number(raw, "get") == expected


def test_coerce_number_omitted_is_non_numeric():
    """Caller input: missing means non-numeric, not non-existent."""
    with pytest.raises(NonNumericValueError, match="expected a number"):
        coerce_number(None, "create")


@pytest.mark.parametrize("raw", ["fubar", None, "", True, "inf", math.nan, [1]])
def test_coerce_number_uses_given_error(raw):
    with pytest.raises(NonNumericChangeError, match="non-numeric change"):
        coerce_number(raw, "add", NonNumericChangeError)


def test_coerce_number_parses_numeric_strings():
    assert coerce_number("-50", "add", NonNumericChangeError) == -50.0
    assert coerce_number(" 3.5 ", "create") == 3.5
