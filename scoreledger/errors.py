"""
Ledger error taxonomy

Every failure raised by a ledger operation is a LedgerError carrying the
operation name (method) and a human-readable reason:

    LedgerError
    ├── InvalidKeyError
    ├── NonNumericError
    │   ├── NonNumericValueError
    │   └── NonNumericChangeError
    ├── RangeError
    │   ├── AboveMaxError
    │   └── BelowMinError
    ├── NonExistentKeyError
    ├── ConflictError
    │   ├── ConflictExistsError
    │   └── ConflictTombstonedError
    ├── InvalidWeightsError
    └── ConfigurationInvalidError

None of these are retried internally. Redis transport errors are not wrapped.
"""


class LedgerError(Exception):
    """Base class for ledger failures."""

    default_reason = "ledger failure"

    def __init__(self, method: str, reason: str = None):
        self.method = method
        self.reason = reason or self.default_reason
        super().__init__(f"{method} error: {self.reason}")


class InvalidKeyError(LedgerError):
    """Raised when the injected key predicate rejects a key."""
    default_reason = "invalid key"


class NonNumericError(LedgerError):
    """Raised when a value or change is not a finite number."""
    default_reason = "non-numeric"


class NonNumericValueError(NonNumericError):
    default_reason = "invalid value, expected a number"


class NonNumericChangeError(NonNumericError):
    default_reason = "non-numeric change"


class RangeError(LedgerError):
    """Raised when a value falls outside [min, max]."""
    default_reason = "invalid value out of range"


class AboveMaxError(RangeError):
    default_reason = "invalid value above max"


class BelowMinError(RangeError):
    default_reason = "invalid value below min"


class NonExistentKeyError(LedgerError):
    default_reason = "non-existent key"


class ConflictError(LedgerError):
    """Raised when a create collides with existing or deleted state."""
    default_reason = "conflict"


class ConflictExistsError(ConflictError):
    default_reason = "conflict, key already exists"


class ConflictTombstonedError(ConflictError):
    default_reason = "conflict, key was previously deleted"


class InvalidWeightsError(LedgerError):
    default_reason = "invalid weights"


class ConfigurationInvalidError(LedgerError):
    """Raised at construction time; no ledger is produced."""
    default_reason = "invalid configuration"
