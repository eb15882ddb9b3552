"""
Store Configuration
===================

Centralized Redis connection configuration for ledgers and scripts.
Handles env var lookup and wires ledgers from settings.
"""
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

import redis.asyncio as redis

from scoreledger.config.settings import Settings, get_settings
from scoreledger.utils.keys import codec_from, invalid_unless_nonempty


@dataclass
class RedisConfig:
    """Redis connection configuration."""
    url: str

    @classmethod
    def from_env(cls) -> 'RedisConfig':
        """Create config from environment variables."""
        url = os.getenv('REDIS_URL')
        if not url:
            raise ValueError("REDIS_URL environment variable is required")

        return cls(url=url)


def get_redis_config() -> RedisConfig:
    """Get Redis configuration from environment."""
    return RedisConfig.from_env()


def create_redis_client(url: Optional[str] = None):
    """
    Create a redis.asyncio client with decoded (str) responses.

    Falls back to REDIS_URL when no url is given. The caller owns the client
    and closes it with `await client.aclose()`.
    """
    if url is None:
        url = get_redis_config().url
    return redis.from_url(url, decode_responses=True)


def create_ledger_from_settings(
    client=None,
    settings: Optional[Settings] = None,
    encrypt: Optional[Callable[[str], str]] = None,
    decrypt: Optional[Callable[[str], str]] = None,
    invalid: Callable[[Any], bool] = invalid_unless_nonempty,
):
    """
    Build the default ledger described by settings.

    Codec halves default to identity; the key predicate defaults to
    "any non-empty string".
    """
    from scoreledger.services.ledger import create_ledger

    settings = settings or get_settings()
    if client is None:
        client = create_redis_client(settings.redis_url)
    codec = codec_from(encrypt, decrypt)
    return create_ledger(
        page_size=settings.scan_page_size,
        redis=client,
        name=settings.ledger_name,
        min=settings.ledger_min,
        max=settings.ledger_max,
        encrypt=codec.encode,
        decrypt=codec.decode,
        invalid=invalid,
        log=settings.ledger_log,
    )
