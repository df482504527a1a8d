from fastapi import APIRouter, Depends

from clipnest.api.dependencies import get_services, parse_object_id, require_user
from clipnest.models.documents import UserDocument
from clipnest.services.container import ServiceContainer
from clipnest.services.toggle_service import LikeStatus, ToggleResult

router = APIRouter(prefix="/relationships", tags=["Relationships"])


@router.post("/subscriptions/{channel_id}", response_model=ToggleResult)
async def toggle_subscription(
    channel_id: str,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> ToggleResult:
    return await services.toggles.toggle_subscription(user, parse_object_id(channel_id, "channel id"))


@router.post("/likes/{kind}/{target_id}", response_model=ToggleResult)
async def toggle_like(
    kind: str,
    target_id: str,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> ToggleResult:
    return await services.toggles.toggle_like(user, kind, parse_object_id(target_id, f"{kind} id"))


@router.get("/likes/{kind}/{target_id}", response_model=LikeStatus)
async def like_status(
    kind: str,
    target_id: str,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> LikeStatus:
    return await services.toggles.like_status(user, kind, parse_object_id(target_id, f"{kind} id"))
