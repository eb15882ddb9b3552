"""
Key codecs and key-validity predicates.

A ledger never looks inside its keys. It is handed two policies at
construction time:

- a codec (encrypt/decrypt): plaintext key <-> stored member
- a predicate (invalid): True when a caller-supplied key must be rejected

This module holds the stock implementations used by settings-driven wiring
and by the tests. Anything with the same call shape can be injected instead.
"""
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional


def identity(key: str) -> str:
    """Store keys as-is."""
    return key


def reverse(key: str) -> str:
    """Reverse the characters of a key. Its own inverse."""
    return str(key)[::-1]


@dataclass(frozen=True)
class KeyCodec:
    """Bijective-in-practice mapping between plaintext and stored keys."""
    encode: Callable[[str], str] = identity
    decode: Callable[[str], str] = identity


def invalid_unless_nonempty(key: Any) -> bool:
    """Reject anything that is not a non-empty string."""
    return not isinstance(key, str) or not key


def invalid_unless_length(length: int) -> Callable[[Any], bool]:
    """Predicate factory: reject anything but strings of exactly `length` chars."""
    def invalid(key: Any = None) -> bool:
        return not isinstance(key, str) or len(key) != length
    return invalid


def invalid_unless_match(pattern: str, flags: int = 0) -> Callable[[Any], bool]:
    """
    Predicate factory: reject keys that don't fully match `pattern`.

    Example:
        invalid = invalid_unless_match(r'[0-9a-z]{8}')
        invalid('x5b8r2yj')  # False
        invalid('X5')        # True
    """
    compiled = re.compile(pattern, flags)

    def invalid(key: Any = None) -> bool:
        if not isinstance(key, str):
            return True
        return compiled.fullmatch(key) is None
    return invalid


def codec_from(encrypt: Optional[Callable[[str], str]] = None,
               decrypt: Optional[Callable[[str], str]] = None) -> KeyCodec:
    """Build a KeyCodec, falling back to identity for missing halves."""
    return KeyCodec(encode=encrypt or identity, decode=decrypt or identity)
