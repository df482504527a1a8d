from typing import Optional

from beanie import PydanticObjectId

from clipnest.core.exceptions import ConflictError, NotFoundError, ValidationError
from clipnest.database.exceptions import DuplicateInsertError
from clipnest.models.documents import UserDocument
from clipnest.repositories.user_repository import UserRepository
from clipnest.repositories.video_repository import VideoRepository
from clipnest.services.ownership import can_view


class UserService:
    """Self-service profile updates and watch-history recording."""

    def __init__(self, users: UserRepository, videos: VideoRepository, watch_history_limit: int = 100):
        self.users = users
        self.videos = videos
        self.watch_history_limit = watch_history_limit

    async def _save(self, user: UserDocument, **changes) -> UserDocument:
        try:
            updated = await self.users.update_fields(user.id, **changes)
        except DuplicateInsertError:
            raise ConflictError("User with email or username already exists")
        if updated is None:
            raise NotFoundError("User not found")
        return updated

    async def update_profile(
        self, user: UserDocument, full_name: Optional[str] = None, email: Optional[str] = None
    ) -> UserDocument:
        if not full_name and not email:
            raise ValidationError("full_name or email is required")
        changes = {}
        if full_name:
            changes["full_name"] = full_name.strip()
        if email:
            email = email.strip().lower()
            existing = await self.users.get_by_email(email)
            if existing is not None and existing.id != user.id:
                raise ConflictError("User with email or username already exists")
            changes["email"] = email
        return await self._save(user, **changes)

    async def update_avatar(self, user: UserDocument, avatar: str) -> UserDocument:
        if not avatar:
            raise ValidationError("Avatar URL is required")
        return await self._save(user, avatar=avatar)

    async def update_cover_image(self, user: UserDocument, cover_image: str) -> UserDocument:
        if not cover_image:
            raise ValidationError("Cover image URL is required")
        return await self._save(user, cover_image=cover_image)

    async def add_to_watch_history(self, user: UserDocument, video_id: PydanticObjectId) -> UserDocument:
        video = await self.videos.get_by_id(video_id)
        if video is None or not can_view(video, user):
            raise NotFoundError("Video not found")
        updated = await self.users.record_watch(user.id, video_id, self.watch_history_limit)
        if updated is None:
            raise NotFoundError("User not found")
        return updated
