from clipnest.schemas.channels import ChannelProfile, LikedVideosPage
from clipnest.schemas.comments import CommentPayload, CommentResponse, CommentsPage
from clipnest.schemas.playlists import (
    PlaylistCreatePayload,
    PlaylistDetail,
    PlaylistResponse,
    PlaylistUpdatePayload,
)
from clipnest.schemas.users import (
    AuthResponse,
    AvatarPayload,
    ChangePasswordPayload,
    CoverImagePayload,
    LoginPayload,
    MessageResponse,
    OwnerSummary,
    PublicUser,
    RefreshPayload,
    RegisterPayload,
    UpdateProfilePayload,
)
from clipnest.schemas.videos import VideoCreatePayload, VideoResponse, VideoSummary, VideoUpdatePayload

__all__ = [
    "AuthResponse",
    "AvatarPayload",
    "ChangePasswordPayload",
    "ChannelProfile",
    "CommentPayload",
    "CommentResponse",
    "CommentsPage",
    "CoverImagePayload",
    "LikedVideosPage",
    "LoginPayload",
    "MessageResponse",
    "OwnerSummary",
    "PlaylistCreatePayload",
    "PlaylistDetail",
    "PlaylistResponse",
    "PlaylistUpdatePayload",
    "PublicUser",
    "RefreshPayload",
    "RegisterPayload",
    "UpdateProfilePayload",
    "VideoCreatePayload",
    "VideoResponse",
    "VideoSummary",
    "VideoUpdatePayload",
]
