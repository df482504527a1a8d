from datetime import datetime
from typing import List, Optional

from beanie import PydanticObjectId
from pydantic import BaseModel, Field

from clipnest.models.documents import PlaylistDocument
from clipnest.schemas.videos import VideoSummary


class PlaylistCreatePayload(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    videos: List[PydanticObjectId] = Field(default_factory=list, description="Initial video ids, in order")


class PlaylistUpdatePayload(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class PlaylistResponse(BaseModel):
    id: PydanticObjectId
    owner: PydanticObjectId
    name: str
    description: str
    videos: List[PydanticObjectId]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, playlist: PlaylistDocument) -> "PlaylistResponse":
        return cls(**playlist.model_dump(exclude={"id"}), id=playlist.id)


class PlaylistDetail(BaseModel):
    """A playlist with its videos resolved in order; deleted videos are omitted."""

    id: PydanticObjectId
    owner: PydanticObjectId
    name: str
    description: str
    videos: List[VideoSummary]
    total_videos: int
    total_views: int
    created_at: datetime
    updated_at: datetime
