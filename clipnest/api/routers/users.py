from typing import List

from fastapi import APIRouter, Depends

from clipnest.api.dependencies import get_services, parse_object_id, require_user
from clipnest.models.documents import UserDocument
from clipnest.schemas.users import (
    AvatarPayload,
    CoverImagePayload,
    OwnerSummary,
    PublicUser,
    UpdateProfilePayload,
)
from clipnest.services.container import ServiceContainer

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=PublicUser)
async def get_me(user: UserDocument = Depends(require_user)) -> PublicUser:
    return PublicUser.from_document(user)


@router.patch("/me", response_model=PublicUser)
async def update_me(
    payload: UpdateProfilePayload,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> PublicUser:
    updated = await services.users.update_profile(user, full_name=payload.full_name, email=payload.email)
    return PublicUser.from_document(updated)


@router.patch("/me/avatar", response_model=PublicUser)
async def update_avatar(
    payload: AvatarPayload,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> PublicUser:
    return PublicUser.from_document(await services.users.update_avatar(user, payload.avatar))


@router.patch("/me/cover-image", response_model=PublicUser)
async def update_cover_image(
    payload: CoverImagePayload,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> PublicUser:
    return PublicUser.from_document(await services.users.update_cover_image(user, payload.cover_image))


@router.get("/{user_id}/subscriptions", response_model=List[OwnerSummary])
async def subscribed_channels(user_id: str, services: ServiceContainer = Depends(get_services)) -> List[OwnerSummary]:
    return await services.views.subscribed_channels(parse_object_id(user_id, "user id"))
