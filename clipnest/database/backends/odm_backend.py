from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from clipnest.database.document import ClipnestDocument

T = TypeVar("T", bound=ClipnestDocument)

Query = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]


class ClipnestODMBackend(ABC, Generic[T]):
    """
    Abstract base class for clipnest document backends.

    A backend stores one document model (one collection). Queries use the MongoDB
    filter subset every backend understands: field equality (including array
    membership), ``$in``, ``$ne``, ``$exists`` and a top-level ``$or``. Every write
    must be atomic with respect to the unique indexes declared on the model, so
    correctness under concurrent requests never depends on in-process locks.

    Example:
        .. code-block:: python

            backend = MemoryODMBackend(UserDocument, MemoryStore())
            await backend.initialize()
            user = await backend.insert(UserDocument(username="alice", ...))
            same = await backend.find_one({"username": "alice"})
    """

    def __init__(self, model_cls: Type[T]):
        self.model_cls: Type[T] = model_cls

    def is_async(self) -> bool:
        return True

    def get_raw_model(self) -> Type[T]:
        return self.model_cls

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the collection (create indexes). Safe to call repeatedly."""

    async def close(self) -> None:
        """Release resources held by this backend."""

    @abstractmethod
    async def insert(self, obj: T) -> T:
        """Insert a document and return it with its id populated.

        Raises:
            DuplicateInsertError: If the document violates a unique index.
        """

    @abstractmethod
    async def get(self, id: Any) -> T:
        """Retrieve a document by id.

        Raises:
            DocumentNotFoundError: If no document with the given id exists.
        """

    @abstractmethod
    async def find_one(self, query: Query) -> Optional[T]:
        """Return the first document matching ``query`` or None."""

    @abstractmethod
    async def find(
        self,
        query: Optional[Query] = None,
        *,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[T]:
        """Return documents matching ``query``; ``limit=0`` means no limit."""

    @abstractmethod
    async def count(self, query: Optional[Query] = None) -> int:
        """Count documents matching ``query``."""

    @abstractmethod
    async def update(self, query: Query, changes: Dict[str, Any]) -> Optional[T]:
        """Atomically set ``changes`` on the first document matching ``query``.

        This is the compare-and-set primitive: put the expected current values in
        ``query`` and the write only happens if they still hold.

        Returns:
            The updated document, or None when nothing matched.

        Raises:
            DuplicateInsertError: If the change violates a unique index.
        """

    @abstractmethod
    async def increment(self, query: Query, field: str, amount: int = 1) -> Optional[T]:
        """Atomically add ``amount`` to a numeric field; returns the updated document."""

    @abstractmethod
    async def delete(self, id: Any) -> None:
        """Delete a document by id.

        Raises:
            DocumentNotFoundError: If no document with the given id exists.
        """

    @abstractmethod
    async def delete_one(self, query: Query) -> bool:
        """Delete the first document matching ``query``; True if one was removed."""
