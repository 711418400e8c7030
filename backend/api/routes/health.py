"""Liveness plus a look at the backing data file."""

from typing import Annotated

from fastapi import APIRouter, Depends

from api.deps import get_store
from config import get_settings
from repositories.file_store import BuildStore, now_ms, to_iso

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(store: Annotated[BuildStore, Depends(get_store)]):
    # load() never raises; an unreadable file shows up as zero records
    records = store.load()
    return {
        "status": "ok",
        "timestamp": to_iso(now_ms()),
        "version": get_settings().APP_VERSION,
        "dataFile": str(store.data_file),
        "dataFileExists": store.data_file.exists(),
        "records": len(records),
        "recordLifetimeMs": store.record_lifetime_ms,
    }
