"""FastAPI dependencies for routes."""

from functools import lru_cache

from config import get_settings
from repositories.file_store import BuildStore
from services.cleanup import CleanupScheduler


@lru_cache
def get_store() -> BuildStore:
    """Return the process-wide build store. Use in Depends()."""
    settings = get_settings()
    return BuildStore(
        settings.DATA_FILE,
        record_lifetime_ms=settings.RECORD_LIFETIME_MS,
        cleanup_interval_ms=settings.CLEANUP_INTERVAL_SECONDS * 1000,
        expiring_soon_ms=settings.EXPIRING_SOON_MS,
    )


@lru_cache
def get_scheduler() -> CleanupScheduler:
    """Return the sweep scheduler bound to the same store handle."""
    return CleanupScheduler(get_store(), get_settings().CLEANUP_INTERVAL_SECONDS)
