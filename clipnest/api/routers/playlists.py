from typing import List

from fastapi import APIRouter, Depends, status

from clipnest.api.dependencies import get_services, parse_object_id, require_user
from clipnest.models.documents import UserDocument
from clipnest.schemas.playlists import (
    PlaylistCreatePayload,
    PlaylistDetail,
    PlaylistResponse,
    PlaylistUpdatePayload,
)
from clipnest.services.container import ServiceContainer

router = APIRouter(prefix="/playlists", tags=["Playlists"])


@router.get("", response_model=List[PlaylistResponse])
async def list_own_playlists(
    user: UserDocument = Depends(require_user), services: ServiceContainer = Depends(get_services)
) -> List[PlaylistResponse]:
    return await services.views.user_playlists(user.id)


@router.post("", response_model=PlaylistResponse, status_code=status.HTTP_201_CREATED)
async def create_playlist(
    payload: PlaylistCreatePayload,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> PlaylistResponse:
    playlist = await services.playlists.create(user, payload.name, payload.description, payload.videos)
    return PlaylistResponse.from_document(playlist)


@router.get("/{playlist_id}", response_model=PlaylistDetail)
async def get_playlist(
    playlist_id: str,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> PlaylistDetail:
    return await services.views.playlist_detail(parse_object_id(playlist_id, "playlist id"), user)


@router.patch("/{playlist_id}", response_model=PlaylistResponse)
async def update_playlist(
    playlist_id: str,
    payload: PlaylistUpdatePayload,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> PlaylistResponse:
    playlist = await services.playlists.update(
        parse_object_id(playlist_id, "playlist id"), user, name=payload.name, description=payload.description
    )
    return PlaylistResponse.from_document(playlist)


@router.delete("/{playlist_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_playlist(
    playlist_id: str,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> None:
    await services.playlists.delete(parse_object_id(playlist_id, "playlist id"), user)


@router.post("/{playlist_id}/videos/{video_id}", response_model=PlaylistResponse)
async def add_video(
    playlist_id: str,
    video_id: str,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> PlaylistResponse:
    playlist = await services.playlists.add_video(
        parse_object_id(playlist_id, "playlist id"), parse_object_id(video_id, "video id"), user
    )
    return PlaylistResponse.from_document(playlist)


@router.delete("/{playlist_id}/videos/{video_id}", response_model=PlaylistResponse)
async def remove_video(
    playlist_id: str,
    video_id: str,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> PlaylistResponse:
    playlist = await services.playlists.remove_video(
        parse_object_id(playlist_id, "playlist id"), parse_object_id(video_id, "video id"), user
    )
    return PlaylistResponse.from_document(playlist)
