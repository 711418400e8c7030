"""Persistence layer: JSON-file build store and its errors."""

from .errors import BuildStoreError, NotFoundError, PersistenceError, ValidationError
from .file_store import BuildStore, StoreStats

__all__ = [
    "BuildStore",
    "StoreStats",
    "BuildStoreError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
]
