"""Pydantic schemas for stored records."""

from .records import RECORD_KIND, REQUIRED_BUILD_FIELDS, BuildRecord

__all__ = [
    "RECORD_KIND",
    "REQUIRED_BUILD_FIELDS",
    "BuildRecord",
]
