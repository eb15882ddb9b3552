from pydantic_settings import BaseSettings
from pydantic import field_validator
from functools import lru_cache
import math


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can come from:
    - docker-compose.yml environment section
    - .env file
    - System environment

    Variable names:
    - REDIS_URL (score store and audit log)
    - LEDGER_NAME, LEDGER_MIN, LEDGER_MAX, LEDGER_LOG (default ledger)
    - SCAN_PAGE_SIZE (page size for range scans)
    """

    # Environment
    environment: str = "development"

    # Redis
    redis_url: str = "redis://localhost:6379"

    # Default ledger
    ledger_name: str = "points"
    ledger_min: float = 0
    ledger_max: float = 150
    ledger_log: bool = True

    # Range scans
    scan_page_size: int = 1000

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra env vars

    @field_validator('ledger_min', 'ledger_max')
    @classmethod
    def require_finite(cls, v):
        """Ledger bounds must be real, finite numbers"""
        if not math.isfinite(v):
            raise ValueError("ledger bounds must be finite")
        return v

    @field_validator('scan_page_size')
    @classmethod
    def require_positive(cls, v):
        if v < 1:
            raise ValueError("scan_page_size must be positive")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
