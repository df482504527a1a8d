from typing import List, Optional

from beanie import PydanticObjectId

from clipnest.models.documents import SubscriptionDocument
from clipnest.repositories.base_repository import BaseRepository


class SubscriptionRepository(BaseRepository[SubscriptionDocument]):
    """Subscription edges from a subscriber to a channel."""

    async def find_edge(
        self, subscriber: PydanticObjectId, channel: PydanticObjectId
    ) -> Optional[SubscriptionDocument]:
        return await self._backend.find_one({"subscriber": subscriber, "channel": channel})

    async def create(self, subscriber: PydanticObjectId, channel: PydanticObjectId) -> SubscriptionDocument:
        """Insert an edge. Raises DuplicateInsertError if it already exists."""
        return await self._backend.insert(SubscriptionDocument(subscriber=subscriber, channel=channel))

    async def delete_edge(self, edge: SubscriptionDocument) -> bool:
        return await self._backend.delete_one({"_id": edge.id})

    async def count_subscribers(self, channel: PydanticObjectId) -> int:
        return await self._backend.count({"channel": channel})

    async def count_subscriptions(self, subscriber: PydanticObjectId) -> int:
        return await self._backend.count({"subscriber": subscriber})

    async def list_subscribers(self, channel: PydanticObjectId) -> List[SubscriptionDocument]:
        return await self._backend.find({"channel": channel}, sort=[("created_at", -1), ("_id", -1)])

    async def list_subscriptions(self, subscriber: PydanticObjectId) -> List[SubscriptionDocument]:
        return await self._backend.find({"subscriber": subscriber}, sort=[("created_at", -1), ("_id", -1)])
