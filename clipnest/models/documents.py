"""Document models for clipnest collections.

Every reference between documents is a typed ``PydanticObjectId`` so ownership and
edge lookups compare ids by value rather than by their string form.
"""

from typing import List, Optional

from beanie import PydanticObjectId
from pydantic import Field

from clipnest.database.document import ClipnestDocument, IndexSpec
from clipnest.models.enums import LikeKind


class UserDocument(ClipnestDocument):
    """A registered identity (user and channel)."""

    username: str
    email: str
    full_name: str
    password_hash: str
    avatar: str
    cover_image: Optional[str] = None
    watch_history: List[PydanticObjectId] = Field(default_factory=list)
    refresh_token: Optional[str] = None

    class Settings:
        name = "users"
        indexes = [
            IndexSpec(("username",), unique=True),
            IndexSpec(("email",), unique=True),
            IndexSpec(("full_name",)),
        ]


class VideoDocument(ClipnestDocument):
    """A published or draft video; media URLs belong to the object store."""

    owner: PydanticObjectId
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: float = 0
    views: int = 0
    is_published: bool = True

    class Settings:
        name = "videos"
        indexes = [
            IndexSpec(("owner",)),
            IndexSpec(("is_published",)),
        ]


class PlaylistDocument(ClipnestDocument):
    owner: PydanticObjectId
    name: str
    description: str = ""
    videos: List[PydanticObjectId] = Field(default_factory=list)

    class Settings:
        name = "playlists"
        indexes = [
            IndexSpec(("owner", "name"), unique=True),
        ]


class CommentDocument(ClipnestDocument):
    video: PydanticObjectId
    owner: PydanticObjectId
    content: str

    class Settings:
        name = "comments"
        indexes = [
            IndexSpec(("video",)),
            IndexSpec(("owner",)),
        ]


class LikeDocument(ClipnestDocument):
    """Like edge: exactly one ``(kind, target)`` per liker."""

    kind: LikeKind
    target: PydanticObjectId
    liked_by: PydanticObjectId

    class Settings:
        name = "likes"
        indexes = [
            IndexSpec(("kind", "target", "liked_by"), unique=True),
            IndexSpec(("liked_by", "kind")),
        ]


class SubscriptionDocument(ClipnestDocument):
    """Subscription edge from ``subscriber`` to ``channel``."""

    subscriber: PydanticObjectId
    channel: PydanticObjectId

    class Settings:
        name = "subscriptions"
        indexes = [
            IndexSpec(("subscriber", "channel"), unique=True),
            IndexSpec(("channel",)),
        ]


DOCUMENT_MODELS = [
    UserDocument,
    VideoDocument,
    PlaylistDocument,
    CommentDocument,
    LikeDocument,
    SubscriptionDocument,
]

__all__ = [
    "UserDocument",
    "VideoDocument",
    "PlaylistDocument",
    "CommentDocument",
    "LikeDocument",
    "SubscriptionDocument",
    "DOCUMENT_MODELS",
]
