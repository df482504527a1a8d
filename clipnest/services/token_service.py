"""Token lifecycle: issuance, verification, rotation and revocation of sessions.

A session is the pair of a short-lived access token and a long-lived refresh token.
Only the refresh token is stored (one per identity); storing a new one invalidates
the previous value, and rotation is a compare-and-set on that stored value.
"""

from typing import Optional, Tuple

from beanie import PydanticObjectId
from bson.errors import InvalidId
from pydantic import BaseModel

from clipnest.core.exceptions import AuthenticationError, InvalidCredentialsError
from clipnest.core.logging import get_logger
from clipnest.core.security import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    decode_token,
    encode_token,
    verify_password,
)
from clipnest.core.settings import ClipnestSettings
from clipnest.models.documents import UserDocument
from clipnest.repositories.user_repository import UserRepository


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str


class TokenService:
    """Issues and validates the dual-token session for an identity.

    Args:
        settings: Frozen settings holding the signing secrets and lifetimes.
        users: Credential store the refresh token is persisted in.
    """

    def __init__(self, settings: ClipnestSettings, users: UserRepository):
        self.settings = settings
        self.users = users
        self.logger = get_logger("services.token")

    def _access_token(self, user: UserDocument) -> str:
        return encode_token(
            {
                "sub": str(user.id),
                "username": user.username,
                "email": user.email,
                "full_name": user.full_name,
            },
            secret=self.settings.ACCESS_TOKEN_SECRET.get_secret_value(),
            algorithm=self.settings.JWT_ALGORITHM,
            expires_in=self.settings.ACCESS_TOKEN_EXPIRES_IN,
            token_type=ACCESS_TOKEN_TYPE,
        )

    def _refresh_token(self, user: UserDocument) -> str:
        return encode_token(
            {"sub": str(user.id)},
            secret=self.settings.REFRESH_TOKEN_SECRET.get_secret_value(),
            algorithm=self.settings.JWT_ALGORITHM,
            expires_in=self.settings.REFRESH_TOKEN_EXPIRES_IN,
            token_type=REFRESH_TOKEN_TYPE,
        )

    @staticmethod
    def _subject_id(claims: dict) -> PydanticObjectId:
        try:
            return PydanticObjectId(claims["sub"])
        except (InvalidId, TypeError, KeyError):
            raise AuthenticationError("Invalid token")

    async def issue(self, user: UserDocument) -> TokenPair:
        """Mint a new pair and store its refresh token, replacing any prior one."""
        pair = TokenPair(access_token=self._access_token(user), refresh_token=self._refresh_token(user))
        stored = await self.users.set_refresh_token(user.id, pair.refresh_token)
        if stored is None:
            raise AuthenticationError("Invalid token")
        user.refresh_token = pair.refresh_token
        self.logger.info("Session issued", user_id=str(user.id))
        return pair

    async def verify_access(self, token: Optional[str]) -> UserDocument:
        """Resolve the identity an access token was issued to.

        Raises:
            AuthenticationError: If the token is absent, malformed, expired, badly
                signed, not an access token, or its subject no longer exists.
        """
        if not token:
            raise AuthenticationError("Unauthorized request")
        claims = decode_token(
            token,
            secret=self.settings.ACCESS_TOKEN_SECRET.get_secret_value(),
            algorithm=self.settings.JWT_ALGORITHM,
            token_type=ACCESS_TOKEN_TYPE,
        )
        user = await self.users.get_by_id(self._subject_id(claims))
        if user is None:
            raise AuthenticationError("Invalid access token")
        return user

    async def refresh(self, token: Optional[str]) -> Tuple[UserDocument, TokenPair]:
        """Rotate a session: trade a valid refresh token for a new pair.

        The stored token is replaced only if it still equals the presented one. A
        presented token that is validly signed but no longer stored (already
        rotated, revoked, or beaten by a concurrent refresh) revokes the session.

        Raises:
            AuthenticationError: If the token is invalid, expired, or not current.
        """
        if not token:
            raise AuthenticationError("Unauthorized request")
        claims = decode_token(
            token,
            secret=self.settings.REFRESH_TOKEN_SECRET.get_secret_value(),
            algorithm=self.settings.JWT_ALGORITHM,
            token_type=REFRESH_TOKEN_TYPE,
        )
        user = await self.users.get_by_id(self._subject_id(claims))
        if user is None:
            raise AuthenticationError("Invalid refresh token")

        pair = TokenPair(access_token=self._access_token(user), refresh_token=self._refresh_token(user))
        rotated = await self.users.swap_refresh_token(user.id, token, pair.refresh_token)
        if rotated is None:
            await self.users.clear_refresh_token(user.id)
            self.logger.warning("Refresh token reuse detected, session revoked", user_id=str(user.id))
            raise AuthenticationError("Refresh token is expired or used")

        self.logger.info("Session refreshed", user_id=str(user.id))
        return rotated, pair

    async def revoke(self, user: UserDocument) -> None:
        await self.users.clear_refresh_token(user.id)
        user.refresh_token = None
        self.logger.info("Session revoked", user_id=str(user.id))

    async def authenticate(
        self, password: str, username: Optional[str] = None, email: Optional[str] = None
    ) -> UserDocument:
        """Check credentials by username or email.

        Raises:
            InvalidCredentialsError: Same error whether the user is unknown or the
                password is wrong.
        """
        user = await self.users.get_by_username_or_email(username=username, email=email)
        if user is None or not verify_password(password, user.password_hash):
            self.logger.warning("Login failed", username=username, email=email)
            raise InvalidCredentialsError()
        return user
