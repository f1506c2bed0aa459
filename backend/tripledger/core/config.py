"""
Application configuration and environment settings.
"""
from decimal import Decimal
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "TripLedger"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8080"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # Money
    DEFAULT_CURRENCY: str = "USD"
    SETTLEMENT_TOLERANCE: Decimal = Decimal("0.01")  # One cent; smaller differences count as zero
    STRICT_BALANCE_CHECK: bool = False  # Raise instead of warn when balances do not sum to zero

    # Invites
    INVITE_CODE_LENGTH: int = 8
    INVITE_URL_BASE: str = "tripledger://join/"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
