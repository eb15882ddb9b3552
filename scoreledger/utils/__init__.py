"""
Utility functions
"""
from .datetime_utils import utc_now_iso, parse_log_timestamp
from .keys import (
    KeyCodec,
    codec_from,
    identity,
    reverse,
    invalid_unless_nonempty,
    invalid_unless_length,
    invalid_unless_match,
)

__all__ = [
    'utc_now_iso',
    'parse_log_timestamp',
    'KeyCodec',
    'codec_from',
    'identity',
    'reverse',
    'invalid_unless_nonempty',
    'invalid_unless_length',
    'invalid_unless_match',
]
