"""Base document model shared by every storage backend."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Dict, List, Optional, Tuple

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    """Current UTC time truncated to milliseconds (MongoDB datetime precision)."""
    now = datetime.now(UTC)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


@dataclass(frozen=True)
class IndexSpec:
    """An index over one or more fields, optionally unique."""

    fields: Tuple[str, ...]
    unique: bool = False

    @property
    def name(self) -> str:
        return "_".join(self.fields) + ("_unique" if self.unique else "")


class ClipnestDocument(BaseModel):
    """
    Base document class for clipnest collections.

    Documents are plain pydantic models keyed by a typed ``PydanticObjectId``
    stored under ``_id``. Subclasses declare their collection name and indexes in
    an inner ``Settings`` class, which every backend reads.

    Example:
        .. code-block:: python

            class TagDocument(ClipnestDocument):
                label: str

                class Settings:
                    name = "tags"
                    indexes = [IndexSpec(("label",), unique=True)]
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: Optional[PydanticObjectId] = Field(default=None, alias="_id")
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = ""
        indexes: List[IndexSpec] = []

    @classmethod
    def collection_name(cls) -> str:
        return cls.Settings.name

    @classmethod
    def index_specs(cls) -> List[IndexSpec]:
        return list(getattr(cls.Settings, "indexes", []))

    def to_storage(self) -> Dict[str, Any]:
        """Dump to a storage dict keyed by ``_id`` (omitted while unassigned)."""
        data = self.model_dump(by_alias=True)
        if data.get("_id") is None:
            data.pop("_id", None)
        return data

    @classmethod
    def from_storage(cls, raw: Dict[str, Any]):
        return cls.model_validate(raw)
