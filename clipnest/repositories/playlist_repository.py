from typing import Any, List, Optional

from beanie import PydanticObjectId

from clipnest.database.document import utcnow
from clipnest.models.documents import PlaylistDocument
from clipnest.repositories.base_repository import BaseRepository


class PlaylistRepository(BaseRepository[PlaylistDocument]):
    async def create(self, playlist: PlaylistDocument) -> PlaylistDocument:
        return await self._backend.insert(playlist)

    async def get_by_owner_and_name(self, owner: PydanticObjectId, name: str) -> Optional[PlaylistDocument]:
        return await self._backend.find_one({"owner": owner, "name": name})

    async def list_by_owner(self, owner: PydanticObjectId) -> List[PlaylistDocument]:
        return await self._backend.find({"owner": owner}, sort=[("created_at", -1), ("_id", -1)])

    async def update_fields(self, playlist_id: PydanticObjectId, **changes: Any) -> Optional[PlaylistDocument]:
        changes["updated_at"] = utcnow()
        return await self._backend.update({"_id": playlist_id}, changes)

    async def replace_videos(
        self,
        playlist_id: PydanticObjectId,
        expected: List[PydanticObjectId],
        videos: List[PydanticObjectId],
    ) -> Optional[PlaylistDocument]:
        """Set the video list only if it still equals ``expected``; None on a lost race."""
        return await self._backend.update(
            {"_id": playlist_id, "videos": list(expected)},
            {"videos": list(videos), "updated_at": utcnow()},
        )
