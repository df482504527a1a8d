from typing import Optional, Tuple

from clipnest.core.exceptions import ConflictError, InvalidCredentialsError, ValidationError
from clipnest.core.logging import get_logger
from clipnest.core.security import hash_password, verify_password
from clipnest.database.exceptions import DuplicateInsertError
from clipnest.models.documents import UserDocument
from clipnest.repositories.user_repository import UserRepository
from clipnest.services.token_service import TokenPair, TokenService


class AuthService:
    """Registration, login, logout and password management on top of :class:`TokenService`."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self.users = users
        self.tokens = tokens
        self.logger = get_logger("services.auth")

    async def register(
        self,
        *,
        username: str,
        email: str,
        full_name: str,
        password: str,
        avatar: str,
        cover_image: Optional[str] = None,
    ) -> UserDocument:
        fields = {"username": username, "email": email, "full_name": full_name, "password": password, "avatar": avatar}
        missing = [name for name, value in fields.items() if not value or not str(value).strip()]
        if missing:
            raise ValidationError(f"All fields are required: {', '.join(missing)}")

        username = username.strip().lower()
        email = email.strip().lower()
        if await self.users.get_by_username_or_email(username=username, email=email):
            raise ConflictError("User with email or username already exists")

        user = UserDocument(
            username=username,
            email=email,
            full_name=full_name.strip(),
            password_hash=hash_password(password),
            avatar=avatar,
            cover_image=cover_image or None,
        )
        try:
            user = await self.users.create(user)
        except DuplicateInsertError:
            raise ConflictError("User with email or username already exists")
        self.logger.info("User registered", user_id=str(user.id), username=username)
        return user

    async def login(
        self, password: str, username: Optional[str] = None, email: Optional[str] = None
    ) -> Tuple[UserDocument, TokenPair]:
        if not username and not email:
            raise ValidationError("username or email is required")
        user = await self.tokens.authenticate(password, username=username, email=email)
        pair = await self.tokens.issue(user)
        self.logger.info("User logged in", user_id=str(user.id))
        return user, pair

    async def refresh(self, refresh_token: Optional[str]) -> Tuple[UserDocument, TokenPair]:
        return await self.tokens.refresh(refresh_token)

    async def logout(self, user: UserDocument) -> None:
        await self.tokens.revoke(user)

    async def change_password(self, user: UserDocument, old_password: str, new_password: str) -> None:
        """Replace the password after checking the old one.

        A wrong old password also revokes the session's refresh token.
        """
        if not new_password:
            raise ValidationError("New password is required")
        if not verify_password(old_password, user.password_hash):
            await self.tokens.revoke(user)
            self.logger.warning("Password change rejected", user_id=str(user.id))
            raise InvalidCredentialsError("Invalid old password")
        await self.users.update_fields(user.id, password_hash=hash_password(new_password))
        self.logger.info("Password changed", user_id=str(user.id))
