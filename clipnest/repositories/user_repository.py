from typing import Any, Dict, List, Optional

from beanie import PydanticObjectId

from clipnest.core.exceptions import ConflictError
from clipnest.database.document import utcnow
from clipnest.models.documents import UserDocument
from clipnest.repositories.base_repository import BaseRepository

class UserRepository(BaseRepository[UserDocument]):
    """Credential store: identities, password hashes and the current refresh token."""

    async def get_by_username(self, username: str) -> Optional[UserDocument]:
        return await self._backend.find_one({"username": username.strip().lower()})

    async def get_by_email(self, email: str) -> Optional[UserDocument]:
        return await self._backend.find_one({"email": email.strip().lower()})

    async def get_by_username_or_email(
        self, username: Optional[str] = None, email: Optional[str] = None
    ) -> Optional[UserDocument]:
        clauses: List[Dict[str, Any]] = []
        if username:
            clauses.append({"username": username.strip().lower()})
        if email:
            clauses.append({"email": email.strip().lower()})
        if not clauses:
            return None
        return await self._backend.find_one({"$or": clauses})

    async def create(self, user: UserDocument) -> UserDocument:
        return await self._backend.insert(user)

    async def update_fields(self, user_id: PydanticObjectId, **changes: Any) -> Optional[UserDocument]:
        changes["updated_at"] = utcnow()
        return await self._backend.update({"_id": user_id}, changes)

    async def set_refresh_token(self, user_id: PydanticObjectId, token: Optional[str]) -> Optional[UserDocument]:
        return await self._backend.update({"_id": user_id}, {"refresh_token": token})

    async def swap_refresh_token(
        self, user_id: PydanticObjectId, expected: str, new: str
    ) -> Optional[UserDocument]:
        """Replace the stored refresh token only if it still equals ``expected``.

        Returns None when the stored value has already changed.
        """
        return await self._backend.update(
            {"_id": user_id, "refresh_token": expected},
            {"refresh_token": new},
        )

    async def clear_refresh_token(self, user_id: PydanticObjectId) -> Optional[UserDocument]:
        return await self.set_refresh_token(user_id, None)

    async def record_watch(
        self, user_id: PydanticObjectId, video_id: PydanticObjectId, limit: int
    ) -> Optional[UserDocument]:
        """Move ``video_id`` to the front of the watch history, keeping at most ``limit`` entries.

        The write is a single compare-and-set on the history that was read and is
        never retried.

        Raises:
            ConflictError: If a concurrent write changed the history first.
        """
        user = await self.get_by_id(user_id)
        if user is None:
            return None
        current = list(user.watch_history)
        history = [video_id] + [vid for vid in current if vid != video_id]
        if limit > 0:
            history = history[:limit]
        updated = await self._backend.update(
            {"_id": user_id, "watch_history": current},
            {"watch_history": history},
        )
        if updated is None:
            raise ConflictError("Watch history changed concurrently, try again")
        return updated
