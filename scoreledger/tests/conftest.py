"""
Pytest configuration for ledger tests.

Redis is emulated in-process by fakeredis (Lua scripting via lupa), so the
sorted-set, hash and script semantics are exercised without a server.
"""

import fakeredis
import pytest

from scoreledger.services.ledger import create_ledger
from scoreledger.utils.keys import invalid_unless_length, reverse


# Same shape for every ledger under test: 8-char keys, reversed on storage
LEDGER_OPTIONS = dict(
    name='points',
    min=0,
    max=150,
    encrypt=reverse,
    decrypt=reverse,
    invalid=invalid_unless_length(8),
)


def pytest_configure(config):
    """Configure pytest with asyncio marker."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as an async test."
    )


@pytest.fixture
def fake_server():
    """Isolated fake Redis server per test."""
    return fakeredis.FakeServer()


@pytest.fixture
async def redis_client(fake_server):
    client = fakeredis.FakeAsyncRedis(server=fake_server, decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture(params=[False, True], ids=['nolog', 'log'])
def log_enabled(request):
    return request.param


@pytest.fixture
def points(redis_client, log_enabled):
    """Ledger under test, once without and once with audit logging."""
    return create_ledger(redis=redis_client, log=log_enabled, page_size=7, **LEDGER_OPTIONS)


@pytest.fixture
def logged_points(redis_client):
    return create_ledger(redis=redis_client, log=True, page_size=7, **LEDGER_OPTIONS)


@pytest.fixture
def unlogged_points(redis_client):
    return create_ledger(redis=redis_client, log=False, page_size=7, **LEDGER_OPTIONS)
