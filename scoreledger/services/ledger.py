"""
Ledger - named, range-bounded score set

Storage: Redis sorted set (scores) + optional Redis hashes (audit log)

Every operation validates its inputs before touching the store and raises a
LedgerError subclass tagged with the operation name. Atomicity comes from the
store: ZADD NX for create, a server-side script for add and for logged reaps.
There is no in-process locking.

Usage:
    ledger = create_ledger(
        redis=client, name='points', min=0, max=150,
        encrypt=encode, decrypt=decode, invalid=invalid_key, log=True,
    )
    await ledger.create('K1', 150, 'signup bonus')
    await ledger.add('K1', -50)
    await ledger.delete('K1', 'cleanup')
"""
import logging
from typing import Any, AsyncIterator, Callable, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from scoreledger.errors import (
    AboveMaxError,
    BelowMinError,
    ConfigurationInvalidError,
    ConflictExistsError,
    ConflictTombstonedError,
    NonExistentKeyError,
    NonNumericChangeError,
)
from scoreledger.models.options import LedgerOptions
from scoreledger.models.results import (
    AddResult,
    CreateResult,
    DeleteResult,
    GetResult,
    LogEntry,
    ReasonLookup,
    WsumResult,
)
from scoreledger.services import aggregator
from scoreledger.services.audit_log import AuditLog, NullAuditLog, RedisAuditLog
from scoreledger.services.score_store import (
    INCREMENT_ABOVE,
    INCREMENT_BELOW,
    INCREMENT_MISSING,
    Bound,
    ScoreStore,
    exclusive,
)
from scoreledger.services.validator import assert_key, assert_range, coerce_number, parse_number
from scoreledger.utils.keys import KeyCodec

logger = logging.getLogger(__name__)

Pair = Tuple[str, float]

DEFAULT_PAGE_SIZE = 1000


class Ledger:
    """
    A named score set with inclusive bounds [min, max].

    Collaborators are injected, not inherited:
    - codec:     plaintext key <-> stored member
    - invalid:   key predicate, True rejects
    - store:     ScoreStore over the ledger's sorted set
    - audit_log: RedisAuditLog when logging is on, NullAuditLog otherwise
    """

    def __init__(
        self,
        name: str,
        min_value: float,
        max_value: float,
        codec: KeyCodec,
        invalid: Callable[[Any], bool],
        store: ScoreStore,
        audit_log: AuditLog,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.name = name
        self.min = min_value
        self.max = max_value
        self.codec = codec
        self.invalid = invalid
        self.store = store
        self.audit_log = audit_log
        self.page_size = page_size

    @property
    def redis(self):
        return self.store.redis

    @property
    def log(self) -> bool:
        return self.audit_log.enabled

    @property
    def create_log(self) -> str:
        return self.audit_log.create_log

    @property
    def delete_log(self) -> str:
        return self.audit_log.delete_log

    def encrypt(self, key: str) -> str:
        return self.codec.encode(key)

    def decrypt(self, encoded_key: str) -> str:
        return self.codec.decode(encoded_key)

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def assert_key(self, key: Any, method: str) -> None:
        assert_key(self.invalid, key, method)

    def assert_range(self, value: Any, method: str) -> None:
        assert_range(value, self.min, self.max, method)

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    async def create(self, key: str, raw_value: Any = None, reason: str = "") -> CreateResult:
        """
        Insert a new key with an in-range value.

        Raises:
            InvalidKeyError, NonNumericValueError, AboveMaxError, BelowMinError
            ConflictTombstonedError: key was deleted while logging was on
            ConflictExistsError: key already present
        """
        self.assert_key(key, "create")
        value = coerce_number(raw_value, "create")
        self.assert_range(value, "create")
        encoded_key = self.encrypt(key)

        if await self.audit_log.in_delete_log(encoded_key):
            logger.warning(f"[{self.name}] create refused for tombstoned key")
            raise ConflictTombstonedError("create")

        if not await self.store.insert_if_absent(encoded_key, value):
            logger.warning(f"[{self.name}] create refused for existing key")
            raise ConflictExistsError("create")

        await self.audit_log.record_creation(encoded_key, reason)
        logger.info(f"[{self.name}] created key with value {value}")
        return CreateResult(key=key, value=value)

    async def add(self, key: str, raw_change: Any = None) -> AddResult:
        """
        Atomically adjust a key's value by `raw_change`.

        The range check and the increment run as one server-side script, so
        a rejected change never reaches the store and concurrent adds cannot
        push the value out of [min, max].

        Raises:
            InvalidKeyError, NonNumericChangeError, NonExistentKeyError
            AboveMaxError, BelowMinError: store left unchanged
        """
        self.assert_key(key, "add")
        change = coerce_number(raw_change, "add", NonNumericChangeError)

        status, raw = await self.store.bounded_increment(
            self.encrypt(key), change, self.min, self.max,
        )
        if status == INCREMENT_MISSING:
            raise NonExistentKeyError("add")
        if status == INCREMENT_ABOVE:
            raise AboveMaxError("add")
        if status == INCREMENT_BELOW:
            raise BelowMinError("add")

        value = parse_number(raw, "add")
        self.assert_range(value, "add")
        logger.info(f"[{self.name}] add {change} -> {value}")
        return AddResult(key=key, value=value, change=change)

    async def delete(self, key: str, reason: str = "") -> DeleteResult:
        """
        Remove a key. Reports deleted=False (and logs nothing) if it was absent.
        """
        self.assert_key(key, "delete")
        encoded_key = self.encrypt(key)
        count = await self.store.remove(encoded_key)
        deleted = count == 1
        if deleted:
            await self.audit_log.record_deletion(encoded_key, reason)
            logger.info(f"[{self.name}] deleted key")
        return DeleteResult(key=key, deleted=deleted)

    async def reap(self, reason: str = "") -> int:
        """
        Remove every entry below min; tombstone each one when logging is on.

        Returns:
            Number of entries removed
        """
        low, high = self.below_min_range()
        count = await self.audit_log.reap(self.store, low, high, reason)
        logger.info(f"[{self.name}] reaped {count} entries below {self.min}")
        return count

    async def wsum(self, destination: str, weights: Mapping[str, float]) -> WsumResult:
        """Weighted merge of ledgers sharing this ledger's Redis client."""
        return await aggregator.wsum(self.redis, destination, weights)

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get(self, key: str) -> GetResult:
        """
        Raises:
            InvalidKeyError, NonExistentKeyError, NonNumericValueError
        """
        self.assert_key(key, "get")
        raw = await self.store.score(self.encrypt(key))
        value = parse_number(raw, "get")
        return GetResult(key=key, value=value)

    async def iter_raw_pairs(
        self,
        low: Optional[Bound] = None,
        high: Optional[Bound] = None,
        page_size: Optional[int] = None,
    ) -> AsyncIterator[Pair]:
        """
        Lazily yield (encoded key, value) in ascending value order.

        An omitted bound is open-ended. Every call issues a fresh query.
        """
        low = '-inf' if low is None else low
        high = '+inf' if high is None else high
        async for pair in self.store.scan_range(low, high, page_size or self.page_size):
            yield pair

    async def iter_pairs(
        self,
        low: Optional[Bound] = None,
        high: Optional[Bound] = None,
        page_size: Optional[int] = None,
    ) -> AsyncIterator[Pair]:
        """Like iter_raw_pairs, with keys decoded."""
        async for encoded_key, value in self.iter_raw_pairs(low, high, page_size):
            yield self.decrypt(encoded_key), value

    async def get_all_raw_pairs(self, low: Optional[Bound] = None, high: Optional[Bound] = None) -> List[Pair]:
        return [pair async for pair in self.iter_raw_pairs(low, high)]

    async def get_all_pairs(self, low: Optional[Bound] = None, high: Optional[Bound] = None) -> List[Pair]:
        return [pair async for pair in self.iter_pairs(low, high)]

    def below_min_range(self) -> Tuple[str, str]:
        """Scores strictly less than min."""
        return '-inf', exclusive(self.min)

    def above_max_range(self) -> Tuple[str, str]:
        """Scores strictly greater than max."""
        return exclusive(self.max), '+inf'

    # =========================================================================
    # AUDIT LOG
    # =========================================================================

    async def insert_into_log(self, log_name: str, encoded_key: str, reason: str) -> bool:
        return await self.audit_log.insert_into_log(log_name, encoded_key, reason)

    async def get_parsed_log_entry(self, log_name: str, encoded_key: str) -> Optional[LogEntry]:
        return await self.audit_log.get_parsed_log_entry(log_name, encoded_key)

    async def in_delete_log(self, encoded_key: str) -> bool:
        return await self.audit_log.in_delete_log(encoded_key)

    async def get_create_reason(self, key: str) -> ReasonLookup:
        entry = await self.audit_log.get_parsed_log_entry(self.create_log, self.encrypt(key))
        return ReasonLookup.from_entry(key, entry)

    async def get_delete_reason(self, key: str) -> ReasonLookup:
        entry = await self.audit_log.get_parsed_log_entry(self.delete_log, self.encrypt(key))
        return ReasonLookup.from_entry(key, entry)


def create_ledger(page_size: int = DEFAULT_PAGE_SIZE, **options) -> Ledger:
    """
    Validate construction options and build a Ledger.

    Options: redis, name, min, max, encrypt, decrypt, invalid, log

    Raises:
        ConfigurationInvalidError: any option missing or malformed
    """
    try:
        opts = LedgerOptions(**options)
    except ValidationError as e:
        raise ConfigurationInvalidError("initialization", str(e)) from e

    if opts.log:
        audit_log: AuditLog = RedisAuditLog(opts.redis, opts.name)
    else:
        audit_log = NullAuditLog(opts.name)

    ledger = Ledger(
        name=opts.name,
        min_value=opts.min,
        max_value=opts.max,
        codec=KeyCodec(encode=opts.encrypt, decode=opts.decrypt),
        invalid=opts.invalid,
        store=ScoreStore(opts.redis, opts.name),
        audit_log=audit_log,
        page_size=page_size,
    )
    logger.debug(f"Ledger '{opts.name}' ready: [{opts.min}, {opts.max}], log={opts.log}")
    return ledger
