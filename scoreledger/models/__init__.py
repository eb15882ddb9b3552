"""
Ledger models

- options: validated construction options (pydantic)
- results: plain dataclasses returned by ledger operations
"""
from .options import LedgerOptions
from .results import (
    AddResult,
    CreateResult,
    DeleteResult,
    GetResult,
    LogEntry,
    ReasonLookup,
    WsumResult,
    LOG_SEPARATOR,
)

__all__ = [
    'LedgerOptions',
    'AddResult',
    'CreateResult',
    'DeleteResult',
    'GetResult',
    'LogEntry',
    'ReasonLookup',
    'WsumResult',
    'LOG_SEPARATOR',
]
