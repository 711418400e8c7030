"""Stored record model for talent builds."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

RECORD_KIND = "wow-talent-build"

REQUIRED_BUILD_FIELDS = (
    "name",
    "className",
    "assignedPoints",
    "totalPoints",
    "availablePoints",
)


class BuildRecord(BaseModel):
    """A persisted build. Any extra payload keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    id: str
    originalId: Optional[Any] = None
    timestamp: str
    createdAt: int
    expiresAt: int
    kind: str = RECORD_KIND

    def to_dict(self) -> dict:
        data = self.model_dump()
        # originalId only appears when the caller sent an id
        if self.originalId is None:
            data.pop("originalId", None)
        return data
