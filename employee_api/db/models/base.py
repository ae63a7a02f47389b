from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class Entity(BaseModel):
    """
    Base class for persisted entities.

    Attributes are snake_case in Python and camelCase in the stored documents.
    Unknown keys in a document are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(..., description="Unique, stable identifier")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    updated_at: datetime = Field(..., description="Last update timestamp (UTC)")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        # Hand-edited documents sometimes carry numeric ids
        return str(v) if isinstance(v, int) else v

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the JSON-compatible, camelCase form kept in the store."""
        return self.model_dump(mode="json", by_alias=True)
