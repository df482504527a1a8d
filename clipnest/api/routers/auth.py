from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status

from clipnest.api.dependencies import ACCESS_COOKIE, REFRESH_COOKIE, get_services, get_settings, require_user
from clipnest.core.settings import ClipnestSettings
from clipnest.models.documents import UserDocument
from clipnest.schemas.users import (
    AuthResponse,
    ChangePasswordPayload,
    LoginPayload,
    MessageResponse,
    PublicUser,
    RefreshPayload,
    RegisterPayload,
)
from clipnest.services.container import ServiceContainer
from clipnest.services.token_service import TokenPair

router = APIRouter(prefix="/auth", tags=["Auth"])


def _set_session_cookies(response: Response, pair: TokenPair, settings: ClipnestSettings) -> None:
    response.set_cookie(
        ACCESS_COOKIE,
        pair.access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRES_IN,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    response.set_cookie(
        REFRESH_COOKIE,
        pair.refresh_token,
        max_age=settings.REFRESH_TOKEN_EXPIRES_IN,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )


def _clear_session_cookies(response: Response, settings: ClipnestSettings) -> None:
    for name in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(name, httponly=True, secure=settings.COOKIE_SECURE, samesite="lax")


@router.post("/register", response_model=PublicUser, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterPayload, services: ServiceContainer = Depends(get_services)) -> PublicUser:
    user = await services.auth.register(
        username=payload.username,
        email=payload.email,
        full_name=payload.full_name,
        password=payload.password,
        avatar=payload.avatar,
        cover_image=payload.cover_image,
    )
    return PublicUser.from_document(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginPayload,
    response: Response,
    services: ServiceContainer = Depends(get_services),
    settings: ClipnestSettings = Depends(get_settings),
) -> AuthResponse:
    user, pair = await services.auth.login(payload.password, username=payload.username, email=payload.email)
    _set_session_cookies(response, pair, settings)
    return AuthResponse(access_token=pair.access_token, refresh_token=pair.refresh_token, user=PublicUser.from_document(user))


@router.post("/refresh", response_model=AuthResponse)
async def refresh(
    request: Request,
    response: Response,
    payload: Optional[RefreshPayload] = None,
    services: ServiceContainer = Depends(get_services),
    settings: ClipnestSettings = Depends(get_settings),
) -> AuthResponse:
    token = (payload.refresh_token if payload else None) or request.cookies.get(REFRESH_COOKIE)
    user, pair = await services.auth.refresh(token)
    _set_session_cookies(response, pair, settings)
    return AuthResponse(access_token=pair.access_token, refresh_token=pair.refresh_token, user=PublicUser.from_document(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
    settings: ClipnestSettings = Depends(get_settings),
) -> MessageResponse:
    await services.auth.logout(user)
    _clear_session_cookies(response, settings)
    return MessageResponse(message="User logged out")


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    payload: ChangePasswordPayload,
    user: UserDocument = Depends(require_user),
    services: ServiceContainer = Depends(get_services),
) -> MessageResponse:
    await services.auth.change_password(user, payload.old_password, payload.new_password)
    return MessageResponse(message="Password changed successfully")
