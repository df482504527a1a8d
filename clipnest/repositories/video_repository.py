from typing import Any, List, Optional

from beanie import PydanticObjectId

from clipnest.database.document import utcnow
from clipnest.models.documents import VideoDocument
from clipnest.repositories.base_repository import BaseRepository


class VideoRepository(BaseRepository[VideoDocument]):
    async def create(self, video: VideoDocument) -> VideoDocument:
        return await self._backend.insert(video)

    async def update_fields(self, video_id: PydanticObjectId, **changes: Any) -> Optional[VideoDocument]:
        changes["updated_at"] = utcnow()
        return await self._backend.update({"_id": video_id}, changes)

    async def increment_views(self, video_id: PydanticObjectId) -> Optional[VideoDocument]:
        return await self._backend.increment({"_id": video_id}, "views", 1)

    async def list_published(
        self, owner: Optional[PydanticObjectId] = None, skip: int = 0, limit: int = 0
    ) -> List[VideoDocument]:
        query = {"is_published": True}
        if owner is not None:
            query["owner"] = owner
        return await self._backend.find(query, sort=[("created_at", -1), ("_id", -1)], skip=skip, limit=limit)

    async def count_published(self, owner: Optional[PydanticObjectId] = None) -> int:
        query = {"is_published": True}
        if owner is not None:
            query["owner"] = owner
        return await self._backend.count(query)
