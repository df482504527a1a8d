from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Type

from beanie import PydanticObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from clipnest.database.backends.odm_backend import ClipnestODMBackend, Query, SortSpec, T
from clipnest.database.exceptions import DocumentNotFoundError, DuplicateInsertError, StorageUnavailableError


@contextmanager
def _translate_errors():
    try:
        yield
    except DuplicateKeyError as e:
        raise DuplicateInsertError(f"Duplicate key error: {e}") from e
    except ConnectionFailure as e:
        raise StorageUnavailableError(f"MongoDB is unreachable: {e}") from e


class MongoODMBackend(ClipnestODMBackend[T]):
    """
    MongoDB implementation of the clipnest ODM backend.

    Uses Motor for async MongoDB operations. Unique indexes declared on the model's
    ``Settings.indexes`` are created by :meth:`initialize`, so duplicate edges and
    handles are rejected by the server rather than by application checks.

    Args:
        model_cls (Type[T]): The document model class to use for operations.
        client (AsyncIOMotorClient): Shared Motor client.
        db_name (str): Name of the MongoDB database to use.

    Example:
        .. code-block:: python

            client = AsyncIOMotorClient("mongodb://localhost:27017", tz_aware=True)
            backend = MongoODMBackend(UserDocument, client, "clipnest")
            await backend.initialize()
            user = await backend.insert(UserDocument(username="john", ...))
    """

    def __init__(self, model_cls: Type[T], client: AsyncIOMotorClient, db_name: str):
        super().__init__(model_cls)
        self.client = client
        self.db_name = db_name
        self._is_initialized = False

    @property
    def collection(self) -> AsyncIOMotorCollection:
        return self.client[self.db_name][self.model_cls.collection_name()]

    async def initialize(self) -> None:
        if self._is_initialized:
            return
        with _translate_errors():
            for spec in self.model_cls.index_specs():
                await self.collection.create_index(
                    [(field, 1) for field in spec.fields],
                    unique=spec.unique,
                    name=spec.name,
                )
        self._is_initialized = True

    def _to_model(self, raw: Optional[Dict[str, Any]]) -> Optional[T]:
        if raw is None:
            return None
        return self.model_cls.from_storage(raw)

    async def insert(self, obj: T) -> T:
        data = obj.to_storage()
        with _translate_errors():
            result = await self.collection.insert_one(data)
        obj.id = PydanticObjectId(result.inserted_id)
        return obj

    async def get(self, id: Any) -> T:
        with _translate_errors():
            raw = await self.collection.find_one({"_id": id})
        if raw is None:
            raise DocumentNotFoundError(f"Object with id {id} not found")
        return self._to_model(raw)

    async def find_one(self, query: Query) -> Optional[T]:
        with _translate_errors():
            raw = await self.collection.find_one(query)
        return self._to_model(raw)

    async def find(
        self,
        query: Optional[Query] = None,
        *,
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[T]:
        cursor = self.collection.find(query or {})
        if sort:
            cursor = cursor.sort(list(sort))
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        with _translate_errors():
            docs = await cursor.to_list(length=None)
        return [self._to_model(raw) for raw in docs]

    async def count(self, query: Optional[Query] = None) -> int:
        with _translate_errors():
            return await self.collection.count_documents(query or {})

    async def update(self, query: Query, changes: Dict[str, Any]) -> Optional[T]:
        with _translate_errors():
            raw = await self.collection.find_one_and_update(
                query,
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        return self._to_model(raw)

    async def increment(self, query: Query, field: str, amount: int = 1) -> Optional[T]:
        with _translate_errors():
            raw = await self.collection.find_one_and_update(
                query,
                {"$inc": {field: amount}},
                return_document=ReturnDocument.AFTER,
            )
        return self._to_model(raw)

    async def delete(self, id: Any) -> None:
        with _translate_errors():
            result = await self.collection.delete_one({"_id": id})
        if result.deleted_count == 0:
            raise DocumentNotFoundError(f"Object with id {id} not found")

    async def delete_one(self, query: Query) -> bool:
        with _translate_errors():
            result = await self.collection.delete_one(query)
        return result.deleted_count > 0
