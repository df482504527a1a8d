"""FastAPI dependencies: service lookup and the access-token gate."""

from typing import Optional

from beanie import PydanticObjectId
from bson.errors import InvalidId
from fastapi import Depends, Request

from clipnest.core.exceptions import AuthenticationError, ValidationError
from clipnest.core.settings import ClipnestSettings
from clipnest.models.documents import UserDocument
from clipnest.services.container import ServiceContainer

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_settings(request: Request) -> ClipnestSettings:
    return request.app.state.settings


def extract_access_token(request: Request) -> Optional[str]:
    """Bearer token from the Authorization header, falling back to the access cookie."""
    auth_header = request.headers.get("Authorization")
    if auth_header:
        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise AuthenticationError("Invalid Authorization header format. Expected: Bearer <token>")
        return parts[1]
    return request.cookies.get(ACCESS_COOKIE)


async def require_user(request: Request, services: ServiceContainer = Depends(get_services)) -> UserDocument:
    """Resolve the authenticated user or raise AuthenticationError (401)."""
    user = await services.tokens.verify_access(extract_access_token(request))
    request.state.user = user
    return user


async def optional_user(
    request: Request, services: ServiceContainer = Depends(get_services)
) -> Optional[UserDocument]:
    """Like :func:`require_user`, but anonymous requests resolve to None.

    A token that is present but invalid is still rejected.
    """
    token = extract_access_token(request)
    if not token:
        return None
    return await require_user(request, services)


def parse_object_id(value: str, name: str = "id") -> PydanticObjectId:
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(f"Invalid {name}: {value}")
