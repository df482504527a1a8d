from clipnest.services.auth_service import AuthService
from clipnest.services.comment_service import CommentService
from clipnest.services.container import ServiceContainer
from clipnest.services.ownership import ensure_owner
from clipnest.services.playlist_service import PlaylistService
from clipnest.services.toggle_service import LikeStatus, ToggleResult, ToggleService
from clipnest.services.token_service import TokenPair, TokenService
from clipnest.services.user_service import UserService
from clipnest.services.video_service import VideoService
from clipnest.services.view_service import ViewService

__all__ = [
    "AuthService",
    "CommentService",
    "LikeStatus",
    "PlaylistService",
    "ServiceContainer",
    "ToggleResult",
    "ToggleService",
    "TokenPair",
    "TokenService",
    "UserService",
    "VideoService",
    "ViewService",
    "ensure_owner",
]
