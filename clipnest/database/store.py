"""Wiring of one backend per document model."""

from typing import Dict, Optional, Type

from motor.motor_asyncio import AsyncIOMotorClient

from clipnest.core.settings import ClipnestSettings
from clipnest.database.backends.memory_odm_backend import MemoryODMBackend, MemoryStore
from clipnest.database.backends.mongo_odm_backend import MongoODMBackend
from clipnest.database.backends.odm_backend import ClipnestODMBackend
from clipnest.database.document import ClipnestDocument
from clipnest.models.documents import (
    DOCUMENT_MODELS,
    CommentDocument,
    LikeDocument,
    PlaylistDocument,
    SubscriptionDocument,
    UserDocument,
    VideoDocument,
)


class DataStore:
    """Holds the backend for every clipnest collection.

    Example:
        .. code-block:: python

            store = DataStore.from_settings(settings)
            await store.initialize()   # creates unique indexes
            ...
            await store.close()
    """

    def __init__(
        self,
        backends: Dict[Type[ClipnestDocument], ClipnestODMBackend],
        client: Optional[AsyncIOMotorClient] = None,
    ):
        self._backends = backends
        self._client = client

    @classmethod
    def in_memory(cls, store: Optional[MemoryStore] = None) -> "DataStore":
        store = store or MemoryStore()
        return cls({model: MemoryODMBackend(model, store) for model in DOCUMENT_MODELS})

    @classmethod
    def mongo(cls, uri: str, db_name: str) -> "DataStore":
        client = AsyncIOMotorClient(uri, tz_aware=True)
        return cls({model: MongoODMBackend(model, client, db_name) for model in DOCUMENT_MODELS}, client=client)

    @classmethod
    def from_settings(cls, settings: ClipnestSettings) -> "DataStore":
        if settings.STORAGE_BACKEND == "memory":
            return cls.in_memory()
        return cls.mongo(settings.MONGO_URI, settings.MONGO_DB)

    @property
    def client(self) -> Optional[AsyncIOMotorClient]:
        return self._client

    def backend(self, model: Type[ClipnestDocument]) -> ClipnestODMBackend:
        return self._backends[model]

    @property
    def users(self) -> ClipnestODMBackend[UserDocument]:
        return self._backends[UserDocument]

    @property
    def videos(self) -> ClipnestODMBackend[VideoDocument]:
        return self._backends[VideoDocument]

    @property
    def playlists(self) -> ClipnestODMBackend[PlaylistDocument]:
        return self._backends[PlaylistDocument]

    @property
    def comments(self) -> ClipnestODMBackend[CommentDocument]:
        return self._backends[CommentDocument]

    @property
    def likes(self) -> ClipnestODMBackend[LikeDocument]:
        return self._backends[LikeDocument]

    @property
    def subscriptions(self) -> ClipnestODMBackend[SubscriptionDocument]:
        return self._backends[SubscriptionDocument]

    async def initialize(self) -> None:
        """Initialize every backend (creates the declared indexes)."""
        for backend in self._backends.values():
            await backend.initialize()

    async def close(self) -> None:
        for backend in self._backends.values():
            await backend.close()
        if self._client is not None:
            self._client.close()
            self._client = None
