from typing import List

from pydantic import BaseModel, Field

from clipnest.schemas.users import PublicUser
from clipnest.schemas.videos import VideoSummary


class ChannelProfile(PublicUser):
    """A user's public channel with edge counts computed at read time."""

    subscribers_count: int = Field(..., description="Number of subscription edges to this channel")
    subscribed_to_count: int = Field(..., description="Number of channels this user subscribes to")
    is_subscribed: bool = Field(False, description="Whether the viewer subscribes; False when anonymous")
    videos_count: int = Field(0, description="Number of published videos")


class LikedVideosPage(BaseModel):
    videos: List[VideoSummary]
    total_count: int = Field(..., description="Number of video-like edges, independent of the page")
    page: int
    limit: int
    total_pages: int
