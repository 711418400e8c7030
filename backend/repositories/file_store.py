"""
File-based build store.
One JSON object on disk, keyed by record id. The whole mapping is reloaded
before every operation and rewritten after every mutation.
"""

import json
import logging
import math
import threading
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Mapping, Optional

from config import CLEANUP_INTERVAL_SECONDS, EXPIRING_SOON_MS, RECORD_LIFETIME_MS
from repositories.errors import NotFoundError, PersistenceError, ValidationError
from schemas.records import RECORD_KIND, REQUIRED_BUILD_FIELDS, BuildRecord

logger = logging.getLogger(__name__)


def _has_non_finite(value) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, Mapping):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return any(_has_non_finite(v) for v in value)
    return False


def now_ms() -> int:
    return int(time.time() * 1000)


def to_iso(ms: int) -> str:
    """Epoch milliseconds to an ISO-8601 UTC string (2024-01-01T00:00:00.000Z)."""
    dt = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class StoreStats:
    total: int
    active: int
    expiring_soon: int
    record_lifetime_ms: int
    next_cleanup: int


class BuildStore:
    """TTL-bound build records persisted in a single JSON file."""

    def __init__(
        self,
        data_file: Path,
        record_lifetime_ms: int = RECORD_LIFETIME_MS,
        clock: Optional[Callable[[], int]] = None,
        cleanup_interval_ms: int = CLEANUP_INTERVAL_SECONDS * 1000,
        expiring_soon_ms: int = EXPIRING_SOON_MS,
    ):
        self.data_file = Path(data_file)
        self.record_lifetime_ms = record_lifetime_ms
        self.cleanup_interval_ms = cleanup_interval_ms
        self.expiring_soon_ms = expiring_soon_ms
        self._clock = clock or now_ms
        # Held across every load-modify-save so a sweep cannot drop a fresh insert
        self._lock = threading.RLock()

    def _now(self, now: Optional[int]) -> int:
        return self._clock() if now is None else now

    def ensure_file(self) -> None:
        """Create an empty store file if none exists."""
        if not self.data_file.exists():
            self.data_file.parent.mkdir(parents=True, exist_ok=True)
            if self.save({}):
                logger.info("Created data file: %s", self.data_file)

    # Raw persistence
    def load(self) -> dict:
        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug("Data file %s missing, starting empty", self.data_file)
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s, starting empty: %s", self.data_file, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Data file %s does not hold a JSON object, ignoring it", self.data_file)
            return {}
        return data

    def save(self, data: Mapping) -> bool:
        with self._lock:
            tmp = self.data_file.with_suffix(".tmp")
            try:
                with open(tmp, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2, allow_nan=False)
                tmp.replace(self.data_file)
            except (OSError, TypeError, ValueError) as e:
                logger.error("Could not write %s: %s", self.data_file, e, exc_info=True)
                tmp.unlink(missing_ok=True)
                return False
        return True

    # Lifecycle
    def _is_alive(self, record, now: int) -> bool:
        if not isinstance(record, dict):
            return False
        created_at = record.get("createdAt")
        if not isinstance(created_at, (int, float)) or isinstance(created_at, bool):
            return False
        return now - created_at < self.record_lifetime_ms

    def evict(self, now: Optional[int] = None) -> dict:
        """Drop records older than the lifetime. Returns what survived."""
        now = self._now(now)
        with self._lock:
            data = self.load()
            kept = {rid: rec for rid, rec in data.items() if self._is_alive(rec, now)}
            dropped = len(data) - len(kept)
            if dropped:
                if self.save(kept):
                    logger.info("Cleanup: removed %d expired build(s)", dropped)
                else:
                    logger.error("Cleanup: %d expired build(s) could not be removed from disk", dropped)
        return kept

    # Operations
    def insert(self, payload: Optional[Mapping], now: Optional[int] = None) -> dict:
        """Validate, stamp and persist a new build. Returns the stored record."""
        if not isinstance(payload, Mapping) or not payload:
            raise ValidationError("No build data provided")
        missing = [f for f in REQUIRED_BUILD_FIELDS if f not in payload]
        if missing:
            raise ValidationError("Missing required fields", missing_fields=missing)
        if _has_non_finite(payload):
            raise ValidationError("Build data contains NaN or Infinity")

        now = self._now(now)
        record_id = str(uuid.uuid4())
        clean = {k: v for k, v in payload.items() if k not in ("id", "createdAt")}
        record = BuildRecord.model_validate({
            **clean,
            "id": record_id,
            "originalId": payload.get("id"),
            "timestamp": to_iso(now),
            "createdAt": now,
            "expiresAt": now + self.record_lifetime_ms,
            "kind": RECORD_KIND,
        }).to_dict()

        with self._lock:
            data = self.load()
            data[record_id] = record
            if not self.save(data):
                raise PersistenceError("Error saving build")
        logger.info("Stored build %s (%s)", record_id, record.get("name"))
        return record

    def get(self, record_id: str, now: Optional[int] = None) -> dict:
        data = self.evict(now)
        record = data.get(record_id)
        if record is None:
            raise NotFoundError(record_id)
        return record

    def list_all(self, now: Optional[int] = None) -> list[dict]:
        data = self.evict(now)
        return [{**record, "id": rid} for rid, record in data.items()]

    def stats(self, now: Optional[int] = None, next_cleanup: Optional[int] = None) -> StoreStats:
        """Counts over the raw file; does not evict."""
        now = self._now(now)
        data = self.load()
        records = [r for r in data.values() if isinstance(r, dict)]
        expiring = 0
        for r in records:
            expires_at = r.get("expiresAt")
            if not isinstance(expires_at, (int, float)):
                continue
            left = expires_at - now
            if 0 < left < self.expiring_soon_ms:
                expiring += 1
        return StoreStats(
            total=len(data),
            active=sum(1 for r in records if self._is_alive(r, now)),
            expiring_soon=expiring,
            record_lifetime_ms=self.record_lifetime_ms,
            next_cleanup=next_cleanup if next_cleanup is not None else now + self.cleanup_interval_ms,
        )
