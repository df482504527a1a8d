"""Password hashing and signed-token helpers."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Optional

import jwt
from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

from clipnest.core.exceptions import AuthenticationError

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def _get_password_hasher() -> PasswordHash:
    """Get or create the password hasher instance.

    Returns:
        PasswordHash instance with recommended settings
    """
    if not hasattr(_get_password_hasher, "cached_instance"):
        _get_password_hasher.cached_instance = PasswordHash.recommended()
    return _get_password_hasher.cached_instance


def hash_password(password: str) -> str:
    """Hash a password using Argon2 (pwdlib recommended hasher).

    Args:
        password: Plain text password to hash

    Returns:
        Salted hash string that can be safely stored in a database
    """
    return _get_password_hasher().hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a password against its stored hash.

    Returns False (never raises) for an empty or unparseable stored hash.
    """
    if not hashed_password:
        return False
    try:
        return _get_password_hasher().verify(plain_password, hashed_password)
    except UnknownHashError:
        return False


def encode_token(
    claims: Dict[str, Any],
    *,
    secret: str,
    algorithm: str,
    expires_in: int,
    token_type: str,
    now: Optional[datetime] = None,
) -> str:
    """Create a signed JWT carrying ``claims`` plus ``type``, ``iat``, ``exp`` and ``jti``.

    The random ``jti`` makes two tokens minted for the same subject in the same
    second distinct, which refresh-token rotation depends on.
    """
    now = now or datetime.now(UTC)
    payload: Dict[str, Any] = {
        **claims,
        "type": token_type,
        "jti": uuid.uuid4().hex,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(token: str, *, secret: str, algorithm: str, token_type: str) -> Dict[str, Any]:
    """Decode and validate a JWT, returning its claims.

    Raises:
        AuthenticationError: If the token is malformed, expired, badly signed, or
            not of the expected ``token_type``.
    """
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp", "iat", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    if claims.get("type") != token_type:
        raise AuthenticationError("Invalid token type")
    return claims


__all__ = [
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "hash_password",
    "verify_password",
    "encode_token",
    "decode_token",
]
