from typing import List, Optional, Sequence

from beanie import PydanticObjectId

from clipnest.core.exceptions import ConflictError, NotFoundError, ValidationError
from clipnest.core.logging import get_logger
from clipnest.database.exceptions import DuplicateInsertError
from clipnest.models.documents import PlaylistDocument, UserDocument
from clipnest.repositories.playlist_repository import PlaylistRepository
from clipnest.repositories.video_repository import VideoRepository
from clipnest.services.ownership import can_view, ensure_owner


class PlaylistService:
    """Owner-gated playlist mutations.

    Video membership changes are compare-and-set writes on the exact list that was
    read, so a concurrent edit of the same playlist surfaces as ConflictError
    instead of silently losing one of the writes.
    """

    def __init__(self, playlists: PlaylistRepository, videos: VideoRepository):
        self.playlists = playlists
        self.videos = videos
        self.logger = get_logger("services.playlist")

    async def _load_owned(self, playlist_id: PydanticObjectId, actor: UserDocument) -> PlaylistDocument:
        playlist = await self.playlists.get_by_id(playlist_id)
        if playlist is None:
            raise NotFoundError("Playlist not found")
        ensure_owner(playlist, actor)
        return playlist

    async def _ensure_video(self, video_id: PydanticObjectId, actor: UserDocument) -> None:
        video = await self.videos.get_by_id(video_id)
        if video is None or not can_view(video, actor):
            raise NotFoundError("Video not found")

    async def create(
        self,
        actor: UserDocument,
        name: str,
        description: str = "",
        videos: Optional[Sequence[PydanticObjectId]] = None,
    ) -> PlaylistDocument:
        if not name or not name.strip():
            raise ValidationError("Playlist name is required")
        name = name.strip()
        if await self.playlists.get_by_owner_and_name(actor.id, name):
            raise ConflictError("Playlist with this name already exists")

        video_ids: List[PydanticObjectId] = []
        for video_id in videos or []:
            if video_id in video_ids:
                continue
            await self._ensure_video(video_id, actor)
            video_ids.append(video_id)

        playlist = PlaylistDocument(owner=actor.id, name=name, description=(description or "").strip(), videos=video_ids)
        try:
            return await self.playlists.create(playlist)
        except DuplicateInsertError:
            raise ConflictError("Playlist with this name already exists")

    async def update(
        self,
        playlist_id: PydanticObjectId,
        actor: UserDocument,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> PlaylistDocument:
        await self._load_owned(playlist_id, actor)
        changes = {}
        if name is not None:
            if not name.strip():
                raise ValidationError("Playlist name must not be empty")
            changes["name"] = name.strip()
        if description is not None:
            changes["description"] = description.strip()
        try:
            updated = await self.playlists.update_fields(playlist_id, **changes)
        except DuplicateInsertError:
            raise ConflictError("Playlist with this name already exists")
        if updated is None:
            raise NotFoundError("Playlist not found")
        return updated

    async def delete(self, playlist_id: PydanticObjectId, actor: UserDocument) -> None:
        await self._load_owned(playlist_id, actor)
        if not await self.playlists.delete(playlist_id):
            raise NotFoundError("Playlist not found")

    async def add_video(
        self, playlist_id: PydanticObjectId, video_id: PydanticObjectId, actor: UserDocument
    ) -> PlaylistDocument:
        playlist = await self._load_owned(playlist_id, actor)
        await self._ensure_video(video_id, actor)
        if video_id in playlist.videos:
            raise ConflictError("Video is already in the playlist")
        updated = await self.playlists.replace_videos(playlist_id, playlist.videos, playlist.videos + [video_id])
        if updated is None:
            raise ConflictError("Playlist was modified concurrently, try again")
        self.logger.info("Video added to playlist", playlist_id=str(playlist_id), video_id=str(video_id))
        return updated

    async def remove_video(
        self, playlist_id: PydanticObjectId, video_id: PydanticObjectId, actor: UserDocument
    ) -> PlaylistDocument:
        playlist = await self._load_owned(playlist_id, actor)
        if video_id not in playlist.videos:
            raise ConflictError("Video is not in the playlist")
        remaining = [vid for vid in playlist.videos if vid != video_id]
        updated = await self.playlists.replace_videos(playlist_id, playlist.videos, remaining)
        if updated is None:
            raise ConflictError("Playlist was modified concurrently, try again")
        self.logger.info("Video removed from playlist", playlist_id=str(playlist_id), video_id=str(video_id))
        return updated
