"""
Redis sorted-set score store

One sorted set per ledger:
- key    = ledger name
- member = encoded key
- score  = value

Primitives used by the ledger:
- ZADD NX                conditional insert
- ZSCORE                 read ("not found" -> None)
- bounded increment      Lua script: ZSCORE + range check + ZINCRBY, atomic
- ZREM                   remove one member
- ZRANGEBYSCORE LIMIT    ordered range scan, paged
- ZREMRANGEBYSCORE       range delete
"""
import logging
from typing import AsyncIterator, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

Bound = Union[float, int, str]

# Statuses returned by the bounded increment script
INCREMENT_OK = 'ok'
INCREMENT_MISSING = 'missing'
INCREMENT_ABOVE = 'above'
INCREMENT_BELOW = 'below'

# KEYS[1] = sorted set, ARGV = member, change, min, max
# Nothing is written unless the incremented score stays within [min, max].
BOUNDED_INCREMENT_LUA = """
local current = redis.call('ZSCORE', KEYS[1], ARGV[1])
if not current then
  return {'missing', ''}
end
local expected = tonumber(current) + tonumber(ARGV[2])
if expected > tonumber(ARGV[4]) then
  return {'above', tostring(expected)}
end
if expected < tonumber(ARGV[3]) then
  return {'below', tostring(expected)}
end
local value = redis.call('ZINCRBY', KEYS[1], ARGV[2], ARGV[1])
return {'ok', value}
"""


def _as_text(value) -> str:
    """Script replies may arrive as bytes when the client doesn't decode."""
    if isinstance(value, bytes):
        return value.decode()
    return value


def exclusive(bound: Bound) -> str:
    """Redis exclusive range marker: 5 -> '(5'"""
    return f"({bound}"


class ScoreStore:
    """
    Ordered key -> score structure for a single ledger.

    Wraps a redis.asyncio client; the client is shared with the audit log
    and owned by the caller (connect/close happen outside).
    """

    def __init__(self, redis, key: str):
        self.redis = redis
        self.key = key
        self._bounded_increment = redis.register_script(BOUNDED_INCREMENT_LUA)

    async def insert_if_absent(self, member: str, score: float) -> bool:
        """ZADD NX. True when the member was added."""
        added = await self.redis.zadd(self.key, {member: score}, nx=True)
        return added == 1

    async def score(self, member: str) -> Optional[float]:
        """ZSCORE. None when the member is absent."""
        return await self.redis.zscore(self.key, member)

    async def bounded_increment(
        self,
        member: str,
        change: float,
        min_value: float,
        max_value: float,
    ) -> Tuple[str, str]:
        """
        Atomically increment `member` by `change` if the result stays in range.

        Returns:
            (status, raw_score) where status is one of INCREMENT_OK,
            INCREMENT_MISSING, INCREMENT_ABOVE, INCREMENT_BELOW. For the range
            statuses raw_score is the rejected value; the store is untouched.
        """
        status, raw = await self._bounded_increment(
            keys=[self.key],
            args=[member, change, min_value, max_value],
        )
        return _as_text(status), _as_text(raw)

    async def remove(self, member: str) -> int:
        """ZREM. Count removed (0 or 1)."""
        return await self.redis.zrem(self.key, member)

    async def remove_range(self, low: Bound, high: Bound) -> int:
        """ZREMRANGEBYSCORE. Count removed."""
        return await self.redis.zremrangebyscore(self.key, low, high)

    async def cardinality(self) -> int:
        return await self.redis.zcard(self.key)

    async def scan_range(
        self,
        low: Bound = '-inf',
        high: Bound = '+inf',
        page_size: int = 1000,
    ) -> AsyncIterator[Tuple[str, float]]:
        """
        Yield (member, score) pairs in ascending score order, one page at a time.

        Pages are offset-based: members inserted or removed mid-scan can shift
        later pages. Each call starts a fresh query.
        """
        offset = 0
        while True:
            page: List[Tuple[str, float]] = await self.redis.zrangebyscore(
                self.key, low, high,
                start=offset, num=page_size,
                withscores=True,
            )
            for member, score in page:
                yield _as_text(member), float(score)
            if len(page) < page_size:
                return
            offset += page_size
