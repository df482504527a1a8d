from typing import List, Optional

from fastapi import APIRouter, Depends, status

from clipnest.api.dependencies import get_services, optional_user, parse_object_id, require_user
from clipnest.models.documents import UserDocument
from clipnest.schemas.comments import CommentPayload, CommentResponse, CommentsPage
from clipnest.schemas.users import OwnerSummary
from clipnest.schemas.videos import VideoCreatePayload, VideoResponse, VideoSummary, VideoUpdatePayload
from clipnest.services.container import ServiceContainer

router = APIRouter(prefix="/videos", tags=["Videos"])


@router.get("", response_model=List[VideoSummary])
async def list_videos(
    owner: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
    services: ServiceContainer = Depends(get_services),
) -> List[VideoSummary]:
    owner_id = parse_object_id(owner, "owner id") if owner else None
    return await services.views.published_videos(owner_id, page=page, limit=limit)


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
async def create_video(
    payload: VideoCreatePayload,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> VideoResponse:
    video = await services.videos.create(user, **payload.model_dump())
    return VideoResponse.from_document(video)


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(
    video_id: str,
    viewer: Optional[UserDocument] = Depends(optional_user),
    services: ServiceContainer = Depends(get_services),
) -> VideoResponse:
    video = await services.videos.get_for_viewer(parse_object_id(video_id, "video id"), viewer)
    return VideoResponse.from_document(video)


@router.patch("/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: str,
    payload: VideoUpdatePayload,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> VideoResponse:
    video = await services.videos.update(
        parse_object_id(video_id, "video id"), user, **payload.model_dump(exclude_unset=True)
    )
    return VideoResponse.from_document(video)


@router.patch("/{video_id}/publish", response_model=VideoResponse)
async def toggle_publish(
    video_id: str,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> VideoResponse:
    return VideoResponse.from_document(await services.videos.toggle_publish(parse_object_id(video_id, "video id"), user))


@router.delete("/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_video(
    video_id: str,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> None:
    await services.videos.delete(parse_object_id(video_id, "video id"), user)


@router.get("/{video_id}/comments", response_model=CommentsPage)
async def list_comments(
    video_id: str,
    page: int = 1,
    limit: int = 10,
    services: ServiceContainer = Depends(get_services),
) -> CommentsPage:
    return await services.views.video_comments(parse_object_id(video_id, "video id"), page=page, limit=limit)


@router.post("/{video_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    video_id: str,
    payload: CommentPayload,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> CommentResponse:
    comment = await services.comments.add(parse_object_id(video_id, "video id"), user, payload.content)
    return CommentResponse.from_document(comment, OwnerSummary.from_document(user))
