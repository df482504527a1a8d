"""Relationship toggle engine.

A toggle flips the presence of one edge (a like or a subscription). Storage unique
indexes make the edge unique, so two concurrent "add" toggles end with one edge and
both report the edge active. Counts are never cached: they are always the number of
stored edges.
"""

from typing import Any, Union

from beanie import PydanticObjectId
from pydantic import BaseModel

from clipnest.core.exceptions import NotFoundError, ValidationError
from clipnest.core.logging import get_logger
from clipnest.database.exceptions import DuplicateInsertError
from clipnest.models.documents import UserDocument
from clipnest.models.enums import LikeKind
from clipnest.repositories.comment_repository import CommentRepository
from clipnest.repositories.like_repository import LikeRepository
from clipnest.repositories.subscription_repository import SubscriptionRepository
from clipnest.repositories.user_repository import UserRepository
from clipnest.repositories.video_repository import VideoRepository
from clipnest.services.ownership import can_view


class ToggleResult(BaseModel):
    active: bool


class LikeStatus(BaseModel):
    is_liked: bool
    like_count: int


class ToggleService:
    def __init__(
        self,
        users: UserRepository,
        videos: VideoRepository,
        comments: CommentRepository,
        likes: LikeRepository,
        subscriptions: SubscriptionRepository,
    ):
        self.users = users
        self.videos = videos
        self.comments = comments
        self.likes = likes
        self.subscriptions = subscriptions
        self.logger = get_logger("services.toggle")

    async def _ensure_like_target(self, kind: LikeKind, target_id: PydanticObjectId, actor: UserDocument) -> None:
        if kind == LikeKind.VIDEO:
            video = await self.videos.get_by_id(target_id)
            if video is None or not can_view(video, actor):
                raise NotFoundError("Video not found")
        if kind == LikeKind.COMMENT and not await self.comments.exists(target_id):
            raise NotFoundError("Comment not found")

    async def _toggle(self, find, create, delete) -> ToggleResult:
        edge = await find()
        if edge is not None:
            # A concurrent toggle may already have removed it; the outcome is the same.
            await delete(edge)
            return ToggleResult(active=False)
        try:
            await create()
        except DuplicateInsertError:
            pass  # a concurrent toggle inserted the same edge
        return ToggleResult(active=True)

    async def toggle_like(
        self, actor: UserDocument, kind: Union[LikeKind, str], target_id: PydanticObjectId
    ) -> ToggleResult:
        """Flip the actor's like on ``(kind, target_id)``.

        Raises:
            ValidationError: If ``kind`` is not a known like kind.
            NotFoundError: If a video or comment target does not exist, or the video is
                another user's draft.
        """
        kind = _like_kind(kind)
        await self._ensure_like_target(kind, target_id, actor)
        result = await self._toggle(
            lambda: self.likes.find_edge(kind, target_id, actor.id),
            lambda: self.likes.create(kind, target_id, actor.id),
            self.likes.delete_edge,
        )
        self.logger.info(
            "Like toggled", user_id=str(actor.id), kind=kind.value, target=str(target_id), active=result.active
        )
        return result

    async def toggle_subscription(self, actor: UserDocument, channel_id: PydanticObjectId) -> ToggleResult:
        """Flip the actor's subscription to ``channel_id``.

        Raises:
            ValidationError: If the actor tries to subscribe to their own channel.
            NotFoundError: If the channel does not exist.
        """
        if channel_id == actor.id:
            raise ValidationError("You cannot subscribe to your own channel")
        if not await self.users.exists(channel_id):
            raise NotFoundError("Channel not found")
        result = await self._toggle(
            lambda: self.subscriptions.find_edge(actor.id, channel_id),
            lambda: self.subscriptions.create(actor.id, channel_id),
            self.subscriptions.delete_edge,
        )
        self.logger.info(
            "Subscription toggled", user_id=str(actor.id), channel=str(channel_id), active=result.active
        )
        return result

    async def like_status(
        self, actor: UserDocument, kind: Union[LikeKind, str], target_id: PydanticObjectId
    ) -> LikeStatus:
        kind = _like_kind(kind)
        edge = await self.likes.find_edge(kind, target_id, actor.id)
        return LikeStatus(is_liked=edge is not None, like_count=await self.likes.count_for_target(kind, target_id))


def _like_kind(kind: Any) -> LikeKind:
    try:
        return LikeKind(kind)
    except ValueError:
        raise ValidationError(f"Unknown like kind: {kind}")
