"""
Pydantic model for ledger construction options
"""
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator


class LedgerOptions(BaseModel):
    """
    Options recognized by create_ledger().

    Every field is required. A ledger is never built from a partially valid
    option set.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, extra='forbid', frozen=True)

    redis: Any  # redis.asyncio.Redis (or compatible) client
    name: str = Field(min_length=1)
    min: float = Field(allow_inf_nan=False)
    max: float = Field(allow_inf_nan=False)
    encrypt: Callable[[str], str]
    decrypt: Callable[[str], str]
    invalid: Callable[..., bool]
    log: StrictBool

    @field_validator('redis')
    @classmethod
    def require_client(cls, v):
        """The store client must be an actual handle, not a placeholder"""
        if v is None:
            raise ValueError("a store client is required")
        return v

    @field_validator('name', mode='before')
    @classmethod
    def require_string_name(cls, v):
        if not isinstance(v, str):
            raise ValueError("name must be a string")
        return v

    @model_validator(mode='after')
    def check_bounds(self):
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self
