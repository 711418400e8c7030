"""Build create, get, list."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from api.deps import get_store
from api.helpers import humanize_ms
from repositories.errors import BuildStoreError, PersistenceError
from repositories.file_store import BuildStore, to_iso

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/data", tags=["data"])


@router.get("/{record_id}")
async def get_build(record_id: str, store: Annotated[BuildStore, Depends(get_store)]):
    try:
        record = store.get(record_id)
    except BuildStoreError:
        raise
    except Exception as e:
        logger.error("Get build %s failed: %s", record_id, e, exc_info=True)
        raise PersistenceError("Error retrieving build") from e
    return JSONResponse({"success": True, "data": record, "id": record_id})


@router.get("")
async def list_builds(store: Annotated[BuildStore, Depends(get_store)]):
    try:
        records = store.list_all()
    except Exception as e:
        logger.error("List builds failed: %s", e, exc_info=True)
        raise PersistenceError("Error retrieving builds") from e
    return JSONResponse({"success": True, "data": records, "count": len(records)})


@router.post("")
async def create_build(
    store: Annotated[BuildStore, Depends(get_store)],
    payload: Annotated[Any, Body()] = None,
):
    # ValidationError and PersistenceError propagate to the app handlers
    record = store.insert(payload)
    return JSONResponse(
        {
            "success": True,
            "message": "Build saved",
            "id": record["id"],
            "build": record,
            "expiresIn": humanize_ms(store.record_lifetime_ms),
            "expiresAt": to_iso(record["expiresAt"]),
        },
        status_code=201,
    )
