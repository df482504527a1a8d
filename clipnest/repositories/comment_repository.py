from typing import Any, List, Optional

from beanie import PydanticObjectId

from clipnest.database.document import utcnow
from clipnest.models.documents import CommentDocument
from clipnest.repositories.base_repository import BaseRepository


class CommentRepository(BaseRepository[CommentDocument]):
    async def create(self, comment: CommentDocument) -> CommentDocument:
        return await self._backend.insert(comment)

    async def update_fields(self, comment_id: PydanticObjectId, **changes: Any) -> Optional[CommentDocument]:
        changes["updated_at"] = utcnow()
        return await self._backend.update({"_id": comment_id}, changes)

    async def list_for_video(self, video_id: PydanticObjectId, skip: int = 0, limit: int = 0) -> List[CommentDocument]:
        return await self._backend.find(
            {"video": video_id}, sort=[("created_at", -1), ("_id", -1)], skip=skip, limit=limit
        )

    async def count_for_video(self, video_id: PydanticObjectId) -> int:
        return await self._backend.count({"video": video_id})
