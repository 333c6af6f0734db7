"""Unit tests for Settings."""

import pytest
from pydantic import ValidationError

from conduit_client.settings import Settings, get_settings, reset_settings, set_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("CONDUIT_API_BASE_URL", "CONDUIT_STORAGE_BACKEND", "CONDUIT_ARTICLE_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.api_base_url == "https://api.realworld.show/api"
    assert settings.token_key == "jwtToken"
    assert settings.article_page_size == 10
    assert settings.storage_backend == "memory"


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("CONDUIT_API_BASE_URL", "http://localhost:3000/api/")
    monkeypatch.setenv("CONDUIT_ARTICLE_PAGE_SIZE", "20")
    settings = Settings(_env_file=None)
    assert settings.api_base_url == "http://localhost:3000/api"
    assert settings.article_page_size == 20


def test_rejects_non_http_url():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, api_base_url="ftp://example.com")


def test_rejects_unknown_backend():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, storage_backend="redis")


def test_file_backend_requires_path():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, storage_backend="file")


def test_page_size_bounds():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, article_page_size=0)


def test_global_accessor_is_lazy_and_replaceable():
    first = get_settings()
    assert get_settings() is first
    custom = Settings(_env_file=None, article_page_size=5)
    set_settings(custom)
    assert get_settings() is custom


def test_log_config(mock_logger):
    Settings(_env_file=None).log_config(mock_logger)
    assert mock_logger.info.call_args.args[0] == "client_config"
