from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId
from pydantic import BaseModel, Field

from clipnest.models.documents import VideoDocument
from clipnest.schemas.users import OwnerSummary


class VideoCreatePayload(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    video_file: str = Field(..., min_length=1, description="Video URL in the media store")
    thumbnail: str = Field(..., min_length=1, description="Thumbnail URL in the media store")
    duration: float = Field(0, ge=0, description="Duration in seconds")
    is_published: bool = True


class VideoUpdatePayload(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    is_published: Optional[bool] = None


class VideoResponse(BaseModel):
    id: PydanticObjectId
    owner: PydanticObjectId
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, video: VideoDocument) -> "VideoResponse":
        return cls(**video.model_dump(exclude={"id"}), id=video.id)


class VideoSummary(BaseModel):
    """A video as embedded in derived views, with its owner resolved."""

    id: PydanticObjectId
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    owner: Optional[OwnerSummary] = None

    @classmethod
    def from_document(cls, video: VideoDocument, owner: Optional[OwnerSummary] = None) -> "VideoSummary":
        return cls(
            id=video.id,
            title=video.title,
            description=video.description,
            video_file=video.video_file,
            thumbnail=video.thumbnail,
            duration=video.duration,
            views=video.views,
            is_published=video.is_published,
            created_at=video.created_at,
            owner=owner,
        )
