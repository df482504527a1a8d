from typing import List, Optional

from beanie import PydanticObjectId

from clipnest.models.documents import LikeDocument
from clipnest.models.enums import LikeKind
from clipnest.repositories.base_repository import BaseRepository


class LikeRepository(BaseRepository[LikeDocument]):
    """Like edges, keyed by ``(kind, target, liked_by)``."""

    async def find_edge(
        self, kind: LikeKind, target: PydanticObjectId, liked_by: PydanticObjectId
    ) -> Optional[LikeDocument]:
        return await self._backend.find_one({"kind": LikeKind(kind).value, "target": target, "liked_by": liked_by})

    async def create(self, kind: LikeKind, target: PydanticObjectId, liked_by: PydanticObjectId) -> LikeDocument:
        """Insert an edge. Raises DuplicateInsertError if it already exists."""
        return await self._backend.insert(LikeDocument(kind=kind, target=target, liked_by=liked_by))

    async def delete_edge(self, edge: LikeDocument) -> bool:
        return await self._backend.delete_one({"_id": edge.id})

    async def count_for_target(self, kind: LikeKind, target: PydanticObjectId) -> int:
        return await self._backend.count({"kind": LikeKind(kind).value, "target": target})

    async def list_liked(
        self, liked_by: PydanticObjectId, kind: LikeKind = LikeKind.VIDEO, skip: int = 0, limit: int = 0
    ) -> List[LikeDocument]:
        """Edges created by ``liked_by``, most recent first."""
        return await self._backend.find(
            {"liked_by": liked_by, "kind": LikeKind(kind).value},
            sort=[("created_at", -1), ("_id", -1)],
            skip=skip,
            limit=limit,
        )

    async def count_liked(self, liked_by: PydanticObjectId, kind: LikeKind = LikeKind.VIDEO) -> int:
        return await self._backend.count({"liked_by": liked_by, "kind": LikeKind(kind).value})
