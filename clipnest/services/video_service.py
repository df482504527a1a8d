from typing import Optional

from beanie import PydanticObjectId

from clipnest.core.exceptions import NotFoundError, ValidationError
from clipnest.core.logging import get_logger
from clipnest.models.documents import UserDocument, VideoDocument
from clipnest.repositories.user_repository import UserRepository
from clipnest.repositories.video_repository import VideoRepository
from clipnest.services.ownership import can_view, ensure_owner


class VideoService:
    """Owner-gated video mutations, plus the view-counting fetch."""

    def __init__(self, videos: VideoRepository, users: UserRepository, watch_history_limit: int = 100):
        self.videos = videos
        self.users = users
        self.watch_history_limit = watch_history_limit
        self.logger = get_logger("services.video")

    async def _load(self, video_id: PydanticObjectId) -> VideoDocument:
        video = await self.videos.get_by_id(video_id)
        if video is None:
            raise NotFoundError("Video not found")
        return video

    async def _load_owned(self, video_id: PydanticObjectId, actor: UserDocument) -> VideoDocument:
        video = await self._load(video_id)
        ensure_owner(video, actor)
        return video

    async def create(
        self,
        actor: UserDocument,
        *,
        title: str,
        description: str,
        video_file: str,
        thumbnail: str,
        duration: float = 0,
        is_published: bool = True,
    ) -> VideoDocument:
        if not title.strip() or not description.strip():
            raise ValidationError("Title and description are required")
        if duration < 0:
            raise ValidationError("Duration must not be negative")
        video = VideoDocument(
            owner=actor.id,
            title=title.strip(),
            description=description.strip(),
            video_file=video_file,
            thumbnail=thumbnail,
            duration=duration,
            is_published=is_published,
        )
        return await self.videos.create(video)

    async def get_for_viewer(self, video_id: PydanticObjectId, viewer: Optional[UserDocument] = None) -> VideoDocument:
        """Fetch a video, counting one view and recording it in the viewer's history.

        Unpublished videos are only visible to their owner. History is written first, so
        a lost history race leaves the view count untouched.
        """
        video = await self._load(video_id)
        if not can_view(video, viewer):
            raise NotFoundError("Video not found")
        if viewer is not None:
            await self.users.record_watch(viewer.id, video_id, self.watch_history_limit)
        return await self.videos.increment_views(video_id) or video

    async def update(
        self,
        video_id: PydanticObjectId,
        actor: UserDocument,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        thumbnail: Optional[str] = None,
        is_published: Optional[bool] = None,
    ) -> VideoDocument:
        await self._load_owned(video_id, actor)
        changes = {}
        if title is not None:
            if not title.strip():
                raise ValidationError("Title must not be empty")
            changes["title"] = title.strip()
        if description is not None:
            changes["description"] = description.strip()
        if thumbnail is not None:
            changes["thumbnail"] = thumbnail
        if is_published is not None:
            changes["is_published"] = is_published
        updated = await self.videos.update_fields(video_id, **changes)
        if updated is None:
            raise NotFoundError("Video not found")
        return updated

    async def toggle_publish(self, video_id: PydanticObjectId, actor: UserDocument) -> VideoDocument:
        video = await self._load_owned(video_id, actor)
        updated = await self.videos.update_fields(video_id, is_published=not video.is_published)
        if updated is None:
            raise NotFoundError("Video not found")
        return updated

    async def delete(self, video_id: PydanticObjectId, actor: UserDocument) -> None:
        await self._load_owned(video_id, actor)
        if not await self.videos.delete(video_id):
            raise NotFoundError("Video not found")
        self.logger.info("Video deleted", user_id=str(actor.id), video_id=str(video_id))
