from .documents import (
    DOCUMENT_MODELS,
    CommentDocument,
    LikeDocument,
    PlaylistDocument,
    SubscriptionDocument,
    UserDocument,
    VideoDocument,
)
from .enums import LikeKind

__all__ = [
    "DOCUMENT_MODELS",
    "CommentDocument",
    "LikeDocument",
    "LikeKind",
    "PlaylistDocument",
    "SubscriptionDocument",
    "UserDocument",
    "VideoDocument",
]
