import pytest

from clipnest.core.settings import ClipnestSettings
from clipnest.database.store import DataStore
from clipnest.services.container import ServiceContainer


def by_slow_marker(item):
    is_slow = 0 if item.get_closest_marker("slow") is None else 1
    is_integration = 1 if "integration" in str(item.fspath) else 0
    # unit tests first, then slow unit tests, then integration tests
    return (is_integration, is_slow)


def pytest_addoption(parser):
    parser.addoption("--slow-last", action="store_true", default=False)


def pytest_collection_modifyitems(items, config):
    if config.getoption("--slow-last"):
        items.sort(key=by_slow_marker)


@pytest.fixture
def settings() -> ClipnestSettings:
    """Memory-backed settings with test secrets, independent of the environment's .env file."""
    return ClipnestSettings(
        _env_file=None,
        STORAGE_BACKEND="memory",
        ACCESS_TOKEN_SECRET="test-access-secret",
        REFRESH_TOKEN_SECRET="test-refresh-secret",
        COOKIE_SECURE=False,
        WATCH_HISTORY_LIMIT=5,
        LOG_DIR=None,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def store() -> DataStore:
    return DataStore.in_memory()


@pytest.fixture
def services(settings, store) -> ServiceContainer:
    return ServiceContainer.build(settings, store)


@pytest.fixture
def make_user(services):
    """Factory registering a user through the auth service."""

    async def _make(username: str = "alice", password: str = "correct-horse", **overrides):
        fields = {
            "username": username,
            "email": f"{username}@example.com",
            "full_name": username.title(),
            "password": password,
            "avatar": f"https://media.example.com/avatars/{username}.png",
        }
        fields.update(overrides)
        return await services.auth.register(**fields)

    return _make


@pytest.fixture
def make_video(services):
    """Factory creating a published video owned by ``owner``."""

    async def _make(owner, title: str = "A video", **overrides):
        fields = {
            "title": title,
            "description": f"About {title}",
            "video_file": "https://media.example.com/videos/v.mp4",
            "thumbnail": "https://media.example.com/thumbs/v.png",
            "duration": 12.5,
        }
        fields.update(overrides)
        return await services.videos.create(owner, **fields)

    return _make
