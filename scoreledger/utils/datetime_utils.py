"""
Datetime utility functions for audit log timestamps
"""
from datetime import datetime, timezone
from typing import Optional
import logging

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string (second precision)"""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def parse_log_timestamp(value) -> Optional[datetime]:
    """
    Convert a stored audit timestamp to a timezone-aware datetime

    Handles multiple cases:
    - None -> None
    - Already Python datetime -> return as-is (UTC assumed if naive)
    - String ISO format (with or without trailing 'Z') -> parsed datetime
    - Other -> None with warning

    Args:
        value: datetime, string, or None

    Returns:
        Python datetime or None
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError as e:
            logger.warning(f"Failed to parse log timestamp '{value}': {e}")
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    logger.warning(f"Cannot convert {type(value)} to datetime: {value}")
    return None
