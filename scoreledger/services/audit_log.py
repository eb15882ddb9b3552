"""
Audit Log - creation/deletion records for a ledger

Storage: Redis hashes, two per ledger namespace
- '<name>CreateLog'  encoded key -> "<timestamp>---<reason>"
- '<name>DeleteLog'  encoded key -> "<timestamp>---<reason>"

A key present in the DeleteLog is tombstoned: it can never be created again.

Logging is a capability chosen once at construction:
- RedisAuditLog: writes and reads the two hashes
- NullAuditLog:  same interface, never touches the store
so ledger operations call the audit log unconditionally.
"""
from abc import ABC, abstractmethod
import logging
from typing import Optional

from scoreledger.models.results import LogEntry
from scoreledger.services.score_store import Bound, ScoreStore
from scoreledger.utils.datetime_utils import utc_now_iso

logger = logging.getLogger(__name__)

# KEYS[1] = sorted set, KEYS[2] = delete log
# ARGV    = low, high, serialized log record
# Tombstones every member in [low, high] and removes them in one step.
TOMBSTONE_RANGE_LUA = """
local doomed = redis.call('ZRANGEBYSCORE', KEYS[1], ARGV[1], ARGV[2])
for _, member in ipairs(doomed) do
  redis.call('HSET', KEYS[2], member, ARGV[3])
end
return redis.call('ZREMRANGEBYSCORE', KEYS[1], ARGV[1], ARGV[2])
"""


def create_log_name(namespace: str) -> str:
    return f"{namespace}CreateLog"


def delete_log_name(namespace: str) -> str:
    return f"{namespace}DeleteLog"


class AuditLog(ABC):
    """Interface shared by the real and the no-op audit log."""

    enabled: bool = False

    def __init__(self, namespace: str):
        self.namespace = namespace
        self.create_log = create_log_name(namespace)
        self.delete_log = delete_log_name(namespace)

    @abstractmethod
    async def insert_into_log(self, log_name: str, encoded_key: str, reason: str) -> bool:
        """Write (now, reason) for `encoded_key`. True if a write occurred."""

    @abstractmethod
    async def get_parsed_log_entry(self, log_name: str, encoded_key: str) -> Optional[LogEntry]:
        """Current record for `encoded_key` in `log_name`, or None."""

    @abstractmethod
    async def in_delete_log(self, encoded_key: str) -> bool:
        """True iff `encoded_key` is tombstoned."""

    @abstractmethod
    async def reap(self, store: ScoreStore, low: Bound, high: Bound, reason: str) -> int:
        """Remove every member of `store` in [low, high]; return the count."""

    async def record_creation(self, encoded_key: str, reason: str) -> bool:
        return await self.insert_into_log(self.create_log, encoded_key, reason)

    async def record_deletion(self, encoded_key: str, reason: str) -> bool:
        return await self.insert_into_log(self.delete_log, encoded_key, reason)


class NullAuditLog(AuditLog):
    """Audit logging disabled: every write is a no-op, every read is empty."""

    enabled = False

    async def insert_into_log(self, log_name: str, encoded_key: str, reason: str) -> bool:
        return False

    async def get_parsed_log_entry(self, log_name: str, encoded_key: str) -> Optional[LogEntry]:
        return None

    async def in_delete_log(self, encoded_key: str) -> bool:
        return False

    async def reap(self, store: ScoreStore, low: Bound, high: Bound, reason: str) -> int:
        return await store.remove_range(low, high)


class RedisAuditLog(AuditLog):
    """
    Audit log backed by two Redis hashes.

    Writes are overwrite-by-key: a key has at most one current creation
    record and one current deletion record.
    """

    enabled = True

    def __init__(self, redis, namespace: str):
        super().__init__(namespace)
        self.redis = redis
        self._tombstone_range = redis.register_script(TOMBSTONE_RANGE_LUA)

    def owns(self, log_name: str) -> bool:
        """Only logs inside this ledger's namespace are readable/writable."""
        return isinstance(log_name, str) and log_name.startswith(self.namespace)

    async def insert_into_log(self, log_name: str, encoded_key: str, reason: str) -> bool:
        if not self.owns(log_name):
            logger.warning(f"[{self.namespace}] refusing write to foreign log '{log_name}'")
            return False
        entry = LogEntry(timestamp=utc_now_iso(), reason=_reason_text(reason))
        await self.redis.hset(log_name, encoded_key, entry.serialize())
        return True

    async def get_parsed_log_entry(self, log_name: str, encoded_key: str) -> Optional[LogEntry]:
        if not self.owns(log_name):
            return None
        raw = await self.redis.hget(log_name, encoded_key)
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode()
        return LogEntry.parse(raw)

    async def in_delete_log(self, encoded_key: str) -> bool:
        found = await self.redis.hexists(self.delete_log, encoded_key)
        return bool(found)

    async def reap(self, store: ScoreStore, low: Bound, high: Bound, reason: str) -> int:
        entry = LogEntry(timestamp=utc_now_iso(), reason=_reason_text(reason))
        count = await self._tombstone_range(
            keys=[store.key, self.delete_log],
            args=[low, high, entry.serialize()],
        )
        return int(count)


def _reason_text(reason) -> str:
    return "" if reason is None else str(reason)
