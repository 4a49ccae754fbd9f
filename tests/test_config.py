"""Tests for settings and service resolution."""

from pathlib import Path

import pytest

from movielog.config import (
    DEFAULT_PROXY_URL,
    Disabled,
    Settings,
    get_settings,
    resolve_contentful,
    resolve_omdb,
)
from movielog.services.contentful import ContentfulService
from movielog.services.omdb import OMDbService


ENV_VARS = [
    "CONTENTFUL_SPACE_ID",
    "CONTENTFUL_ACCESS_TOKEN",
    "CONTENTFUL_ENVIRONMENT",
    "OMDB_API_KEY",
    "MOVIELOG_SITE_DIR",
    "MOVIELOG_PROXY_URL",
    "MOVIELOG_DEBUG",
    "MOVIELOG_ENV",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestGetSettings:
    """Tests for environment loading."""

    def test_defaults(self, clean_env):
        settings = get_settings()
        assert settings.contentful_space_id is None
        assert settings.contentful_environment == "master"
        assert settings.proxy_url == DEFAULT_PROXY_URL
        assert settings.debug is False
        assert settings.snapshot_path == Path("_data") / "cmsData.json"
        assert settings.movies_dir == Path("movies")

    def test_from_environment(self, clean_env, tmp_path):
        clean_env.setenv("CONTENTFUL_SPACE_ID", "space")
        clean_env.setenv("CONTENTFUL_ACCESS_TOKEN", "token")
        clean_env.setenv("OMDB_API_KEY", "key")
        clean_env.setenv("MOVIELOG_SITE_DIR", str(tmp_path))
        clean_env.setenv("MOVIELOG_DEBUG", "true")

        settings = get_settings()

        assert settings.contentful_space_id == "space"
        assert settings.omdb_api_key == "key"
        assert settings.snapshot_path == tmp_path / "_data" / "cmsData.json"
        assert settings.debug is True

    def test_development_env_enables_debug(self, clean_env):
        clean_env.setenv("MOVIELOG_ENV", "development")
        assert get_settings().debug is True


class TestResolve:
    """Tests for the single credential check."""

    def test_contentful_enabled(self):
        source = resolve_contentful(
            Settings(contentful_space_id="space", contentful_access_token="token")
        )
        assert isinstance(source, ContentfulService)
        assert source.space_id == "space"

    def test_contentful_disabled_lists_missing(self):
        source = resolve_contentful(Settings(contentful_space_id="space", contentful_access_token=""))
        assert isinstance(source, Disabled)
        assert source.missing == ["CONTENTFUL_ACCESS_TOKEN"]
        assert "CONTENTFUL_ACCESS_TOKEN" in source.reason

    def test_omdb(self):
        assert isinstance(resolve_omdb(Settings(omdb_api_key="k")), OMDbService)
        assert isinstance(resolve_omdb(Settings()), Disabled)
