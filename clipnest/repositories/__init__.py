from clipnest.repositories.base_repository import BaseRepository
from clipnest.repositories.comment_repository import CommentRepository
from clipnest.repositories.like_repository import LikeRepository
from clipnest.repositories.playlist_repository import PlaylistRepository
from clipnest.repositories.subscription_repository import SubscriptionRepository
from clipnest.repositories.user_repository import UserRepository
from clipnest.repositories.video_repository import VideoRepository

__all__ = [
    "BaseRepository",
    "CommentRepository",
    "LikeRepository",
    "PlaylistRepository",
    "SubscriptionRepository",
    "UserRepository",
    "VideoRepository",
]
