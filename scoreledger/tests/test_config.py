"""
Tests for construction-time validation and settings-driven wiring.

A ledger is either built from a fully valid option set or not at all.
"""

import pytest

from scoreledger.config.database import RedisConfig, create_ledger_from_settings
from scoreledger.config.settings import Settings
from scoreledger.errors import ConfigurationInvalidError
from scoreledger.services.audit_log import NullAuditLog, RedisAuditLog
from scoreledger.services.ledger import Ledger, create_ledger
from scoreledger.tests.conftest import LEDGER_OPTIONS
from scoreledger.utils.keys import identity


# =============================================================================
# create_ledger option validation
# =============================================================================

def test_incomplete_options_fail(redis_client):
    with pytest.raises(ConfigurationInvalidError, match="initialization error"):
        create_ledger(redis=redis_client)


@pytest.mark.parametrize("override", [
    {"redis": None},
    {"name": ""},
    {"name": 5},
    {"min": "low"},
    {"max": float("inf")},
    {"min": 10, "max": 5},
    {"encrypt": "not callable"},
    {"decrypt": None},
    {"invalid": 42},
    {"log": "sometimes"},
])
def test_malformed_option_fails(redis_client, override):
    options = dict(LEDGER_OPTIONS, redis=redis_client, log=False)
    options.update(override)
    with pytest.raises(ConfigurationInvalidError):
        create_ledger(**options)


def test_unknown_option_fails(redis_client):
    with pytest.raises(ConfigurationInvalidError):
        create_ledger(redis=redis_client, log=False, colour="blue", **LEDGER_OPTIONS)


def test_min_equal_max_is_allowed(redis_client):
    options = dict(LEDGER_OPTIONS, min=7, max=7)
    ledger = create_ledger(redis=redis_client, log=False, **options)
    assert ledger.min == ledger.max == 7


def test_log_flag_selects_audit_capability(redis_client):
    with_log = create_ledger(redis=redis_client, log=True, **LEDGER_OPTIONS)
    without_log = create_ledger(redis=redis_client, log=False, **LEDGER_OPTIONS)
    assert isinstance(with_log.audit_log, RedisAuditLog)
    assert isinstance(without_log.audit_log, NullAuditLog)


# =============================================================================
# Settings
# =============================================================================

def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("REDIS_URL", "redis://cache:6380/2")
    monkeypatch.setenv("LEDGER_NAME", "budget")
    monkeypatch.setenv("LEDGER_MIN", "-10")
    monkeypatch.setenv("LEDGER_MAX", "10")
    monkeypatch.setenv("LEDGER_LOG", "false")

    settings = Settings(_env_file=None)

    assert settings.redis_url == "redis://cache:6380/2"
    assert settings.ledger_name == "budget"
    assert settings.ledger_min == -10
    assert settings.ledger_max == 10
    assert settings.ledger_log is False


def test_settings_reject_bad_page_size(monkeypatch):
    monkeypatch.setenv("SCAN_PAGE_SIZE", "0")
    with pytest.raises(ValueError):
        Settings(_env_file=None)


def test_redis_config_requires_url(monkeypatch):
    monkeypatch.delenv("REDIS_URL", raising=False)
    with pytest.raises(ValueError, match="REDIS_URL"):
        RedisConfig.from_env()


def test_redis_config_from_env(monkeypatch):
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
    assert RedisConfig.from_env().url == "redis://localhost:6379/0"


@pytest.mark.asyncio
async def test_ledger_from_settings(redis_client):
    settings = Settings(
        _env_file=None,
        ledger_name="budget",
        ledger_min=0,
        ledger_max=5,
        ledger_log=True,
        scan_page_size=2,
    )

    ledger = create_ledger_from_settings(client=redis_client, settings=settings)

    assert isinstance(ledger, Ledger)
    assert ledger.name == "budget"
    assert ledger.page_size == 2
    assert ledger.codec.encode is identity
    await ledger.create("user-1", 5, "grant")
    assert await redis_client.zscore("budget", "user-1") == 5
    assert (await ledger.get_create_reason("user-1")).reason == "grant"
