from beanie import PydanticObjectId

from clipnest.core.exceptions import NotFoundError, ValidationError
from clipnest.models.documents import CommentDocument, UserDocument
from clipnest.repositories.comment_repository import CommentRepository
from clipnest.repositories.video_repository import VideoRepository
from clipnest.services.ownership import ensure_owner


class CommentService:
    def __init__(self, comments: CommentRepository, videos: VideoRepository):
        self.comments = comments
        self.videos = videos

    async def _load_owned(self, comment_id: PydanticObjectId, actor: UserDocument) -> CommentDocument:
        comment = await self.comments.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        ensure_owner(comment, actor)
        return comment

    async def add(self, video_id: PydanticObjectId, actor: UserDocument, content: str) -> CommentDocument:
        if not content or not content.strip():
            raise ValidationError("Comment content is required")
        if not await self.videos.exists(video_id):
            raise NotFoundError("Video not found")
        return await self.comments.create(CommentDocument(video=video_id, owner=actor.id, content=content.strip()))

    async def update(self, comment_id: PydanticObjectId, actor: UserDocument, content: str) -> CommentDocument:
        if not content or not content.strip():
            raise ValidationError("Comment content is required")
        await self._load_owned(comment_id, actor)
        updated = await self.comments.update_fields(comment_id, content=content.strip())
        if updated is None:
            raise NotFoundError("Comment not found")
        return updated

    async def delete(self, comment_id: PydanticObjectId, actor: UserDocument) -> None:
        await self._load_owned(comment_id, actor)
        if not await self.comments.delete(comment_id):
            raise NotFoundError("Comment not found")
