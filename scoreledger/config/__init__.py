"""
Configuration module for store connections and the default ledger.
"""
from .settings import Settings, get_settings
from .database import (
    RedisConfig,
    get_redis_config,
    create_redis_client,
    create_ledger_from_settings,
)

__all__ = [
    'Settings',
    'get_settings',
    'RedisConfig',
    'get_redis_config',
    'create_redis_client',
    'create_ledger_from_settings',
]
