"""
scoreledger - bounded score ledgers on Redis

Public API:
    from scoreledger import create_ledger, wsum

    ledger = create_ledger(redis=client, name='points', min=0, max=150,
                           encrypt=str, decrypt=str, invalid=bad_key, log=True)
"""
from scoreledger.errors import (
    LedgerError,
    InvalidKeyError,
    NonNumericError,
    NonNumericValueError,
    NonNumericChangeError,
    RangeError,
    AboveMaxError,
    BelowMinError,
    NonExistentKeyError,
    ConflictError,
    ConflictExistsError,
    ConflictTombstonedError,
    InvalidWeightsError,
    ConfigurationInvalidError,
)
from scoreledger.services.aggregator import wsum
from scoreledger.services.ledger import Ledger, create_ledger

__version__ = "0.1.0"

__all__ = [
    'Ledger',
    'create_ledger',
    'wsum',
    'LedgerError',
    'InvalidKeyError',
    'NonNumericError',
    'NonNumericValueError',
    'NonNumericChangeError',
    'RangeError',
    'AboveMaxError',
    'BelowMinError',
    'NonExistentKeyError',
    'ConflictError',
    'ConflictExistsError',
    'ConflictTombstonedError',
    'InvalidWeightsError',
    'ConfigurationInvalidError',
]
