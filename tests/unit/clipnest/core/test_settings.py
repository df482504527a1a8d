import pytest
from pydantic import ValidationError

from clipnest.core.settings import ClipnestSettings, get_clipnest_config, reset_clipnest_config


@pytest.fixture(autouse=True)
def _reset_config():
    reset_clipnest_config()
    yield
    reset_clipnest_config()


def test_defaults():
    settings = ClipnestSettings(_env_file=None)
    assert settings.API_PREFIX == "/api/v1"
    assert settings.ACCESS_TOKEN_EXPIRES_IN == 900
    assert settings.REFRESH_TOKEN_EXPIRES_IN == 10 * 24 * 60 * 60
    assert settings.JWT_ALGORITHM == "HS256"
    assert settings.WATCH_HISTORY_LIMIT == 100


def test_env_prefix_overrides(monkeypatch):
    monkeypatch.setenv("CLIPNEST__MONGO_DB", "clipnest_env")
    monkeypatch.setenv("CLIPNEST__ACCESS_TOKEN_EXPIRES_IN", "60")
    monkeypatch.setenv("CLIPNEST__STORAGE_BACKEND", "memory")
    settings = get_clipnest_config()
    assert settings.MONGO_DB == "clipnest_env"
    assert settings.ACCESS_TOKEN_EXPIRES_IN == 60
    assert settings.STORAGE_BACKEND == "memory"


def test_config_is_cached_until_reset(monkeypatch):
    first = get_clipnest_config()
    assert get_clipnest_config() is first
    reset_clipnest_config()
    assert get_clipnest_config() is not first


def test_secrets_are_masked():
    settings = ClipnestSettings(_env_file=None, ACCESS_TOKEN_SECRET="very-secret")
    assert "very-secret" not in repr(settings)
    assert settings.ACCESS_TOKEN_SECRET.get_secret_value() == "very-secret"


def test_settings_are_frozen():
    settings = ClipnestSettings(_env_file=None)
    with pytest.raises(ValidationError):
        settings.ACCESS_TOKEN_EXPIRES_IN = 1


def test_unknown_storage_backend_rejected():
    with pytest.raises(ValidationError):
        ClipnestSettings(_env_file=None, STORAGE_BACKEND="sqlite")
