from typing import List

from fastapi import APIRouter, Depends

from clipnest.api.dependencies import get_services, parse_object_id, require_user
from clipnest.models.documents import UserDocument
from clipnest.schemas.channels import LikedVideosPage
from clipnest.schemas.videos import VideoSummary
from clipnest.services.container import ServiceContainer

router = APIRouter(prefix="/me", tags=["Me"])


@router.get("/watch-history", response_model=List[VideoSummary])
async def watch_history(
    user: UserDocument = Depends(require_user), services: ServiceContainer = Depends(get_services)
) -> List[VideoSummary]:
    return await services.views.watch_history(user)


@router.post("/watch-history/{video_id}", response_model=List[VideoSummary])
async def add_to_watch_history(
    video_id: str,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> List[VideoSummary]:
    updated = await services.users.add_to_watch_history(user, parse_object_id(video_id, "video id"))
    return await services.views.watch_history(updated)


@router.get("/liked-videos", response_model=LikedVideosPage)
async def liked_videos(
    page: int = 1,
    limit: int = 10,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> LikedVideosPage:
    return await services.views.liked_videos(user, page=page, limit=limit)
