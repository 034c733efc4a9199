"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = os.getenv("APP_NAME", "GL Posting Engine")
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./gl_posting.db"
    )

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Ledger
    FUNCTIONAL_CURRENCY: str = os.getenv("FUNCTIONAL_CURRENCY", "INR").strip().upper()

    # Well-known chart of accounts leaves the posting service resolves by code
    AR_ACCOUNT_CODE: str = os.getenv("AR_ACCOUNT_CODE", "1.1.2")
    AP_ACCOUNT_CODE: str = os.getenv("AP_ACCOUNT_CODE", "2.1.1")
    FX_GAIN_ACCOUNT_CODE: str = os.getenv("FX_GAIN_ACCOUNT_CODE", "FX_GAIN")
    FX_LOSS_ACCOUNT_CODE: str = os.getenv("FX_LOSS_ACCOUNT_CODE", "FX_LOSS")

    # Voucher numbering: FVCHR_000001, FVCHR_000002, ...
    VOUCHER_COUNTER_NAME: str = os.getenv("VOUCHER_COUNTER_NAME", "voucherCode")
    VOUCHER_PREFIX: str = os.getenv("VOUCHER_PREFIX", "FVCHR")
    VOUCHER_PAD_WIDTH: int = int(os.getenv("VOUCHER_PAD_WIDTH", "6"))


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    The Settings object is created once and reused for all
    subsequent calls.
    """
    return Settings()
