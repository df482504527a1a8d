from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field, model_validator

from clipnest.models.documents import UserDocument


class PublicUser(BaseModel):
    """API-safe representation of a user (no password hash, no refresh token)."""

    id: PydanticObjectId = Field(..., description="User ID")
    username: str = Field(..., description="Lower-cased unique handle")
    email: str = Field(..., description="Lower-cased unique email")
    full_name: str
    avatar: str = Field(..., description="Avatar URL")
    cover_image: Optional[str] = Field(None, description="Cover image URL")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, user: UserDocument) -> "PublicUser":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar=user.avatar,
            cover_image=user.cover_image,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class OwnerSummary(BaseModel):
    """The owner fields embedded in video and comment views."""

    id: PydanticObjectId
    username: str
    full_name: str
    avatar: str

    @classmethod
    def from_document(cls, user: UserDocument) -> "OwnerSummary":
        return cls(id=user.id, username=user.username, full_name=user.full_name, avatar=user.avatar)


class RegisterPayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field("", description="Unique handle")
    email: str = Field("", description="Unique email")
    full_name: str = ""
    password: str = ""
    avatar: str = Field("", description="Avatar URL in the media store")
    cover_image: Optional[str] = Field(None, description="Cover image URL in the media store")


class LoginPayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: Optional[str] = None
    email: Optional[str] = None
    password: str

    @model_validator(mode="after")
    def _require_identifier(self) -> "LoginPayload":
        if not self.username and not self.email:
            raise ValueError("username or email is required")
        return self


class RefreshPayload(BaseModel):
    refresh_token: Optional[str] = Field(None, description="Falls back to the refresh_token cookie")


class ChangePasswordPayload(BaseModel):
    old_password: str
    new_password: str = Field(..., min_length=1)


class UpdateProfilePayload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: Optional[str] = None
    email: Optional[str] = None


class AvatarPayload(BaseModel):
    avatar: str = Field(..., min_length=1, description="Avatar URL")


class CoverImagePayload(BaseModel):
    cover_image: str = Field(..., min_length=1, description="Cover image URL")


class AuthResponse(BaseModel):
    access_token: str
    refresh_token: str
    user: PublicUser
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str


__all__ = [
    "PublicUser",
    "OwnerSummary",
    "RegisterPayload",
    "LoginPayload",
    "RefreshPayload",
    "ChangePasswordPayload",
    "UpdateProfilePayload",
    "AvatarPayload",
    "CoverImagePayload",
    "AuthResponse",
    "MessageResponse",
]
