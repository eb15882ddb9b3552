"""
Ledger result models

Plain dataclasses returned by Ledger operations. `to_dict()` gives the
wire-friendly mapping ({key, value}, {key, value, change}, ...) and drops
unset optional fields where the shape calls for it.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from scoreledger.utils.datetime_utils import parse_log_timestamp


@dataclass(frozen=True)
class CreateResult:
    key: str
    value: float

    def to_dict(self) -> dict:
        return {"key": self.key, "value": self.value}


@dataclass(frozen=True)
class GetResult:
    key: str
    value: float

    def to_dict(self) -> dict:
        return {"key": self.key, "value": self.value}


@dataclass(frozen=True)
class AddResult:
    key: str
    value: float  # authoritative post-increment score
    change: float

    def to_dict(self) -> dict:
        return {"key": self.key, "value": self.value, "change": self.change}


@dataclass(frozen=True)
class DeleteResult:
    key: str
    deleted: bool

    def to_dict(self) -> dict:
        return {"key": self.key, "deleted": self.deleted}


@dataclass(frozen=True)
class WsumResult:
    """Outcome of a weighted merge into `destination`."""
    destination: str
    weights: Dict[str, float] = field(default_factory=dict)
    count: int = 0

    def to_dict(self) -> dict:
        return {
            "destination": self.destination,
            "weights": dict(self.weights),
            "count": self.count,
        }


# Separator between timestamp and reason in a stored audit record
LOG_SEPARATOR = "---"


@dataclass(frozen=True)
class LogEntry:
    """
    One audit record: "<timestamp>---<reason>"

    Only the first separator splits, so reasons may themselves contain '---'.
    """
    timestamp: str
    reason: str

    @classmethod
    def parse(cls, raw: str) -> "LogEntry":
        timestamp, _, reason = raw.partition(LOG_SEPARATOR)
        return cls(timestamp=timestamp, reason=reason)

    def serialize(self) -> str:
        return f"{self.timestamp}{LOG_SEPARATOR}{self.reason}"

    @property
    def recorded_at(self) -> Optional[datetime]:
        return parse_log_timestamp(self.timestamp)


@dataclass(frozen=True)
class ReasonLookup:
    """Audit lookup for a plaintext key; timestamp/reason unset when unlogged."""
    key: str
    timestamp: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def from_entry(cls, key: str, entry: Optional[LogEntry]) -> "ReasonLookup":
        if entry is None:
            return cls(key=key)
        return cls(key=key, timestamp=entry.timestamp, reason=entry.reason)

    @property
    def found(self) -> bool:
        return self.reason is not None

    def to_dict(self) -> dict:
        d = {"key": self.key}
        if self.timestamp is not None:
            d["timestamp"] = self.timestamp
        if self.reason is not None:
            d["reason"] = self.reason
        return d
