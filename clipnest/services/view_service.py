"""Derived views: read-only projections assembled from users, videos and edges.

Every count is computed from stored edges at read time and every reference is
resolved at read time; references to deleted videos are skipped silently.
"""

import math
from typing import Dict, Iterable, List, Optional

from beanie import PydanticObjectId

from clipnest.core.exceptions import NotFoundError, ValidationError
from clipnest.models.documents import UserDocument, VideoDocument
from clipnest.models.enums import LikeKind
from clipnest.repositories.comment_repository import CommentRepository
from clipnest.repositories.like_repository import LikeRepository
from clipnest.repositories.playlist_repository import PlaylistRepository
from clipnest.repositories.subscription_repository import SubscriptionRepository
from clipnest.repositories.user_repository import UserRepository
from clipnest.repositories.video_repository import VideoRepository
from clipnest.schemas.channels import ChannelProfile, LikedVideosPage
from clipnest.schemas.comments import CommentResponse, CommentsPage
from clipnest.schemas.playlists import PlaylistDetail, PlaylistResponse
from clipnest.schemas.users import OwnerSummary, PublicUser
from clipnest.schemas.videos import VideoSummary
from clipnest.services.ownership import can_view

MAX_PAGE_SIZE = 100


def _check_page(page: int, limit: int) -> None:
    if page < 1:
        raise ValidationError("page must be >= 1")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")


class ViewService:
    def __init__(
        self,
        users: UserRepository,
        videos: VideoRepository,
        playlists: PlaylistRepository,
        comments: CommentRepository,
        likes: LikeRepository,
        subscriptions: SubscriptionRepository,
    ):
        self.users = users
        self.videos = videos
        self.playlists = playlists
        self.comments = comments
        self.likes = likes
        self.subscriptions = subscriptions

    async def _owners(self, owner_ids: Iterable[PydanticObjectId]) -> Dict[PydanticObjectId, OwnerSummary]:
        unique_ids = list(dict.fromkeys(owner_ids))
        return {user.id: OwnerSummary.from_document(user) for user in await self.users.get_many(unique_ids)}

    async def _summaries(
        self, video_ids: List[PydanticObjectId], viewer: Optional[UserDocument]
    ) -> List[VideoSummary]:
        """Resolve ``video_ids`` in order, skipping deleted videos and drafts ``viewer`` does not own."""
        videos = [video for video in await self.videos.get_many(video_ids) if can_view(video, viewer)]
        owners = await self._owners(video.owner for video in videos)
        return [VideoSummary.from_document(video, owners.get(video.owner)) for video in videos]

    async def channel_profile(self, username: str, viewer: Optional[UserDocument] = None) -> ChannelProfile:
        if not username or not username.strip():
            raise ValidationError("username is missing")
        channel = await self.users.get_by_username(username)
        if channel is None:
            raise NotFoundError("Channel does not exist")

        is_subscribed = False
        if viewer is not None:
            is_subscribed = await self.subscriptions.find_edge(viewer.id, channel.id) is not None

        return ChannelProfile(
            **PublicUser.from_document(channel).model_dump(),
            subscribers_count=await self.subscriptions.count_subscribers(channel.id),
            subscribed_to_count=await self.subscriptions.count_subscriptions(channel.id),
            is_subscribed=is_subscribed,
            videos_count=await self.videos.count_published(channel.id),
        )

    async def watch_history(self, user: UserDocument) -> List[VideoSummary]:
        fresh = await self.users.get_by_id(user.id)
        if fresh is None:
            raise NotFoundError("User not found")
        return await self._summaries(list(fresh.watch_history), user)

    async def liked_videos(self, user: UserDocument, page: int = 1, limit: int = 10) -> LikedVideosPage:
        """One page of the user's liked videos, most recently liked first.

        ``total_count`` is the number of video-like edges, so a page can hold fewer
        videos than ``limit`` when some liked videos were deleted.
        """
        _check_page(page, limit)
        total = await self.likes.count_liked(user.id, LikeKind.VIDEO)
        edges = await self.likes.list_liked(user.id, LikeKind.VIDEO, skip=(page - 1) * limit, limit=limit)
        return LikedVideosPage(
            videos=await self._summaries([edge.target for edge in edges], user),
            total_count=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )

    async def playlist_detail(
        self, playlist_id: PydanticObjectId, viewer: Optional[UserDocument] = None
    ) -> PlaylistDetail:
        """Resolve a playlist's videos; drafts are listed only for their owner."""
        playlist = await self.playlists.get_by_id(playlist_id)
        if playlist is None:
            raise NotFoundError("Playlist not found")
        videos = await self._summaries(list(playlist.videos), viewer)
        return PlaylistDetail(
            id=playlist.id,
            owner=playlist.owner,
            name=playlist.name,
            description=playlist.description,
            videos=videos,
            total_videos=len(videos),
            total_views=sum(video.views for video in videos),
            created_at=playlist.created_at,
            updated_at=playlist.updated_at,
        )

    async def channel_subscribers(self, channel_id: PydanticObjectId) -> List[OwnerSummary]:
        if not await self.users.exists(channel_id):
            raise NotFoundError("Channel not found")
        edges = await self.subscriptions.list_subscribers(channel_id)
        owners = await self._owners(edge.subscriber for edge in edges)
        return [owners[edge.subscriber] for edge in edges if edge.subscriber in owners]

    async def subscribed_channels(self, subscriber_id: PydanticObjectId) -> List[OwnerSummary]:
        if not await self.users.exists(subscriber_id):
            raise NotFoundError("User not found")
        edges = await self.subscriptions.list_subscriptions(subscriber_id)
        owners = await self._owners(edge.channel for edge in edges)
        return [owners[edge.channel] for edge in edges if edge.channel in owners]

    async def video_comments(self, video_id: PydanticObjectId, page: int = 1, limit: int = 10) -> CommentsPage:
        _check_page(page, limit)
        if not await self.videos.exists(video_id):
            raise NotFoundError("Video not found")
        total = await self.comments.count_for_video(video_id)
        comments = await self.comments.list_for_video(video_id, skip=(page - 1) * limit, limit=limit)
        owners = await self._owners(comment.owner for comment in comments)
        return CommentsPage(
            comments=[CommentResponse.from_document(comment, owners.get(comment.owner)) for comment in comments],
            total_count=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )

    async def user_playlists(self, owner_id: PydanticObjectId) -> List[PlaylistResponse]:
        return [PlaylistResponse.from_document(p) for p in await self.playlists.list_by_owner(owner_id)]

    async def published_videos(
        self, owner_id: Optional[PydanticObjectId] = None, page: int = 1, limit: int = 10
    ) -> List[VideoSummary]:
        _check_page(page, limit)
        videos: List[VideoDocument] = await self.videos.list_published(
            owner=owner_id, skip=(page - 1) * limit, limit=limit
        )
        owners = await self._owners(video.owner for video in videos)
        return [VideoSummary.from_document(video, owners.get(video.owner)) for video in videos]
