from typing import Any, Generic, List, Optional, Sequence

from clipnest.database.backends.odm_backend import ClipnestODMBackend, T
from clipnest.database.exceptions import DocumentNotFoundError


class BaseRepository(Generic[T]):
    """Thin data-access wrapper around one backend."""

    def __init__(self, backend: ClipnestODMBackend[T]) -> None:
        self._backend = backend

    @property
    def backend(self) -> ClipnestODMBackend[T]:
        return self._backend

    async def get_by_id(self, doc_id: Any) -> Optional[T]:
        try:
            return await self._backend.get(doc_id)
        except DocumentNotFoundError:
            return None

    async def get_many(self, doc_ids: Sequence[Any]) -> List[T]:
        """Fetch documents by id, preserving the order of ``doc_ids`` and skipping missing ones."""
        if not doc_ids:
            return []
        found = {doc.id: doc for doc in await self._backend.find({"_id": {"$in": list(doc_ids)}})}
        return [found[doc_id] for doc_id in doc_ids if doc_id in found]

    async def exists(self, doc_id: Any) -> bool:
        return await self._backend.count({"_id": doc_id}) > 0

    async def delete(self, doc_id: Any) -> bool:
        return await self._backend.delete_one({"_id": doc_id})
