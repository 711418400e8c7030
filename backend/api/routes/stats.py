import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.deps import get_scheduler, get_store
from api.helpers import humanize_ms
from repositories.errors import PersistenceError
from repositories.file_store import BuildStore, to_iso
from services.cleanup import CleanupScheduler

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats")
async def get_stats(
    store: Annotated[BuildStore, Depends(get_store)],
    scheduler: Annotated[CleanupScheduler, Depends(get_scheduler)],
):
    try:
        stats = store.stats(next_cleanup=scheduler.next_run_ms)
    except Exception as e:
        logger.error("Stats failed: %s", e, exc_info=True)
        raise PersistenceError("Error retrieving stats") from e
    return JSONResponse({
        "success": True,
        "stats": {
            "total": stats.total,
            "active": stats.active,
            "expiringSoon": stats.expiring_soon,
            "recordLifetime": humanize_ms(stats.record_lifetime_ms),
            "recordLifetimeMs": stats.record_lifetime_ms,
            "nextCleanup": to_iso(stats.next_cleanup),
        },
    })
