"""
Pure validation helpers for keys and scores.

No state and no I/O: every function either returns a value or raises a
LedgerError subclass tagged with the calling operation's name.
"""
import math
from numbers import Real
from typing import Any, Callable, Type

from scoreledger.errors import (
    AboveMaxError,
    BelowMinError,
    InvalidKeyError,
    NonExistentKeyError,
    NonNumericError,
    NonNumericValueError,
)


def is_finite_number(value: Any) -> bool:
    """True for real, finite numbers. Bools are not scores."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def assert_key(invalid: Callable[[Any], bool], key: Any, method: str) -> None:
    """Raise InvalidKeyError when the injected predicate flags the key."""
    if invalid(key):
        raise InvalidKeyError(method)


def assert_range(value: Any, min_value: float, max_value: float, method: str) -> None:
    """
    Check a value against inclusive bounds.

    Order matters: non-numeric first, then above max, then below min.
    """
    if not is_finite_number(value):
        raise NonNumericValueError(method)
    if value > max_value:
        raise AboveMaxError(method)
    if value < min_value:
        raise BelowMinError(method)


def _to_float(raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValueError("bool is not a number")
    if isinstance(raw, bytes):
        raw = raw.decode()
    return float(raw)


def parse_number(raw: Any, method: str) -> float:
    """
    Parse a score as returned by the store.

    None is the store's "not found" sentinel.
    """
    if raw is None:
        raise NonExistentKeyError(method)
    try:
        value = _to_float(raw)
    except (TypeError, ValueError):
        raise NonNumericValueError(method, "non-numeric value")
    if math.isnan(value):
        raise NonNumericValueError(method, "non-numeric value")
    return value


def coerce_number(
    raw: Any,
    method: str,
    error: Type[NonNumericError] = NonNumericValueError,
) -> float:
    """
    Parse caller-supplied input (a value for create, a change for add).

    Unlike parse_number, an omitted value is non-numeric rather than missing.
    """
    if raw is None:
        raise error(method)
    try:
        value = _to_float(raw)
    except (TypeError, ValueError):
        raise error(method)
    if not math.isfinite(value):
        raise error(method)
    return value
