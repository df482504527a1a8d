from dataclasses import dataclass

from clipnest.core.settings import ClipnestSettings
from clipnest.database.store import DataStore
from clipnest.repositories import (
    CommentRepository,
    LikeRepository,
    PlaylistRepository,
    SubscriptionRepository,
    UserRepository,
    VideoRepository,
)
from clipnest.services.auth_service import AuthService
from clipnest.services.comment_service import CommentService
from clipnest.services.playlist_service import PlaylistService
from clipnest.services.toggle_service import ToggleService
from clipnest.services.token_service import TokenService
from clipnest.services.user_service import UserService
from clipnest.services.video_service import VideoService
from clipnest.services.view_service import ViewService


@dataclass
class ServiceContainer:
    """Every service of one app instance, wired to a single :class:`DataStore`."""

    tokens: TokenService
    auth: AuthService
    users: UserService
    toggles: ToggleService
    videos: VideoService
    comments: CommentService
    playlists: PlaylistService
    views: ViewService

    @classmethod
    def build(cls, settings: ClipnestSettings, store: DataStore) -> "ServiceContainer":
        users = UserRepository(store.users)
        videos = VideoRepository(store.videos)
        playlists = PlaylistRepository(store.playlists)
        comments = CommentRepository(store.comments)
        likes = LikeRepository(store.likes)
        subscriptions = SubscriptionRepository(store.subscriptions)

        tokens = TokenService(settings, users)
        return cls(
            tokens=tokens,
            auth=AuthService(users, tokens),
            users=UserService(users, videos, settings.WATCH_HISTORY_LIMIT),
            toggles=ToggleService(users, videos, comments, likes, subscriptions),
            videos=VideoService(videos, users, settings.WATCH_HISTORY_LIMIT),
            comments=CommentService(comments, videos),
            playlists=PlaylistService(playlists, videos),
            views=ViewService(users, videos, playlists, comments, likes, subscriptions),
        )
