from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, Field, ConfigDict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_bson(value: Any) -> Any:
    """BSON has no date type; store dates as midnight UTC datetimes."""
    if isinstance(value, BaseModel):
        return to_bson(value.model_dump())
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, dict):
        return {k: to_bson(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_bson(v) for v in value]
    return value


class MongoModel(BaseModel):
    """
    Base for persisted records.

    Ids are kept as strings in Python and converted to ObjectId only at the
    collection boundary (see the repositories).
    """
    id: Optional[str] = Field(default=None, validation_alias="_id", serialization_alias="_id")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        from_attributes=True
    )

    @classmethod
    def from_document(cls, doc: dict):
        """Build a model from a raw MongoDB document."""
        doc = dict(doc)
        if isinstance(doc.get("_id"), ObjectId):
            doc["_id"] = str(doc["_id"])
        return cls(**doc)

    def to_document(self) -> dict:
        """Dump to a MongoDB-ready dict (no `_id`; the collection assigns it)."""
        doc = self.model_dump(by_alias=True, exclude={"id"})
        return to_bson(doc)
