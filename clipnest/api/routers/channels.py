from typing import List, Optional

from fastapi import APIRouter, Depends

from clipnest.api.dependencies import get_services, optional_user, parse_object_id
from clipnest.models.documents import UserDocument
from clipnest.schemas.channels import ChannelProfile
from clipnest.schemas.users import OwnerSummary
from clipnest.services.container import ServiceContainer

router = APIRouter(prefix="/channels", tags=["Channels"])


@router.get("/{username}", response_model=ChannelProfile)
async def channel_profile(
    username: str,
    viewer: Optional[UserDocument] = Depends(optional_user),
    services: ServiceContainer = Depends(get_services),
) -> ChannelProfile:
    return await services.views.channel_profile(username, viewer)


@router.get("/{channel_id}/subscribers", response_model=List[OwnerSummary])
async def channel_subscribers(channel_id: str, services: ServiceContainer = Depends(get_services)) -> List[OwnerSummary]:
    return await services.views.channel_subscribers(parse_object_id(channel_id, "channel id"))
