"""
Build Vault configuration.
Single source of truth for environment and app settings.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

HOUR_MS = 60 * 60 * 1000
MINUTE_MS = 60 * 1000

RECORD_LIFETIME_MS = 2 * HOUR_MS
CLEANUP_INTERVAL_SECONDS = 30 * 60
EXPIRING_SOON_MS = 30 * MINUTE_MS


def get_settings():
    """Return app settings (use as FastAPI Depends or call directly)."""
    return Settings()


class Settings:
    """Application settings loaded from environment."""

    # App
    APP_TITLE: str = "Build Vault API"
    APP_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ALLOWED_ORIGINS: list[str]
    LOG_LEVEL: str = "INFO"

    # Storage: one JSON file, relative to the working directory unless absolute
    DATA_FILE: Path

    # Record lifecycle (fixed, not read from env)
    RECORD_LIFETIME_MS: int = RECORD_LIFETIME_MS
    CLEANUP_INTERVAL_SECONDS: int = CLEANUP_INTERVAL_SECONDS
    EXPIRING_SOON_MS: int = EXPIRING_SOON_MS

    def __init__(self):
        origins = os.environ.get("ALLOWED_ORIGINS", "*")
        self.ALLOWED_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()] or ["*"]
        self.HOST = (os.environ.get("HOST") or "0.0.0.0").strip()
        try:
            self.PORT = int(os.environ.get("PORT") or 3000)
        except ValueError:
            self.PORT = 3000
        self.LOG_LEVEL = (os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
        self.DATA_FILE = Path(os.environ.get("BUILDS_DATA_FILE") or "data.json")
