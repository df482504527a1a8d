from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    ClipnestError,
    ConflictError,
    DependencyError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from .logging import get_logger, setup_logger
from .security import decode_token, encode_token, hash_password, verify_password
from .settings import ClipnestSettings, get_clipnest_config, reset_clipnest_config

__all__ = [
    "ClipnestSettings",
    "get_clipnest_config",
    "reset_clipnest_config",
    "get_logger",
    "setup_logger",
    "hash_password",
    "verify_password",
    "encode_token",
    "decode_token",
    "ClipnestError",
    "ValidationError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "DependencyError",
]
