"""Configuration for the clipnest service.

Settings are read once from the environment (``CLIPNEST__`` prefix) or a ``.env``
file and frozen. The resulting object is passed explicitly to the components that
need it (token service, storage, app factory) instead of being read from globals.

Examples:
    ```bash
    export CLIPNEST__MONGO_URI=mongodb://mongo:27017
    export CLIPNEST__ACCESS_TOKEN_SECRET=change-me
    ```

    ```python
    settings = get_clipnest_config()
    print(settings.ACCESS_TOKEN_EXPIRES_IN)  # 900
    ```
"""

from typing import List, Literal, Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClipnestSettings(BaseSettings):
    """clipnest service configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="CLIPNEST__",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    # Service URL
    URL: str = "http://localhost:8080"
    API_PREFIX: str = "/api/v1"

    # Storage
    STORAGE_BACKEND: Literal["mongo", "memory"] = "mongo"
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "clipnest"

    # Auth / JWT
    ACCESS_TOKEN_SECRET: SecretStr = SecretStr("dev-access-secret")
    ACCESS_TOKEN_EXPIRES_IN: int = 15 * 60  # seconds
    REFRESH_TOKEN_SECRET: SecretStr = SecretStr("dev-refresh-secret")
    REFRESH_TOKEN_EXPIRES_IN: int = 10 * 24 * 60 * 60  # seconds
    JWT_ALGORITHM: str = "HS256"
    COOKIE_SECURE: bool = True

    # HTTP
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Relationship graph
    WATCH_HISTORY_LIMIT: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None
    USE_STRUCTLOG: bool = True
    DEBUG: bool = False


_config: Optional[ClipnestSettings] = None


def get_clipnest_config() -> ClipnestSettings:
    """Load the cached settings, honouring ``CLIPNEST__`` env overrides."""
    global _config
    if _config is None:
        _config = ClipnestSettings()
    return _config


def reset_clipnest_config() -> None:
    """Reset config cache (useful in tests)."""
    global _config
    _config = None
