"""Error taxonomy shared by every clipnest layer.

Each error carries a stable ``kind`` and the HTTP status the API boundary renders
it with. The core raises these and never logs-and-swallows them; presentation is
decided in :mod:`clipnest.api.errors`.
"""

from typing import Optional


class ClipnestError(Exception):
    """Base class for all clipnest errors."""

    status_code: int = 500
    kind: str = "internal_error"
    default_message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.message}


class ValidationError(ClipnestError):
    """Malformed or missing input."""

    status_code = 400
    kind = "validation_error"
    default_message = "Invalid request"


class AuthenticationError(ClipnestError):
    """Bad credentials or an invalid, expired or reused token."""

    status_code = 401
    kind = "authentication_error"
    default_message = "Unauthorized request"


class InvalidCredentialsError(AuthenticationError):
    """Login failed. Deliberately does not say whether the user exists."""

    kind = "invalid_credentials"
    default_message = "Invalid username, email or password"


class AuthorizationError(ClipnestError):
    """Valid session, but the actor does not own the aggregate."""

    status_code = 403
    kind = "authorization_error"
    default_message = "You don't have permission to modify this resource"


class NotFoundError(ClipnestError):
    status_code = 404
    kind = "not_found"
    default_message = "Resource not found"


class ConflictError(ClipnestError):
    """Uniqueness or state constraint violated."""

    status_code = 409
    kind = "conflict"
    default_message = "Resource already exists"


class DependencyError(ClipnestError):
    """A collaborator (storage) is unreachable."""

    status_code = 503
    kind = "dependency_error"
    default_message = "Storage is unavailable"


__all__ = [
    "ClipnestError",
    "ValidationError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "DependencyError",
]
