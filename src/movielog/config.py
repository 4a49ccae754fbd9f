"""Configuration management using environment variables."""

import os
from functools import lru_cache
from pathlib import Path

from attrs import define, field

from .services.contentful import ContentfulService
from .services.omdb import OMDbService


DEFAULT_PROXY_URL = "http://127.0.0.1:8000"
DEFAULT_ENRICHMENT_PATH = "/api/movie"


def _env_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


@define
class Settings:
    """Application settings."""

    contentful_space_id: str | None = None
    contentful_access_token: str | None = None
    contentful_environment: str = "master"
    omdb_api_key: str | None = None
    site_dir: Path = field(factory=lambda: Path("."), converter=Path)
    proxy_url: str = DEFAULT_PROXY_URL
    debug: bool = False

    @property
    def snapshot_path(self) -> Path:
        return self.site_dir / "_data" / "cmsData.json"

    @property
    def movies_dir(self) -> Path:
        return self.site_dir / "movies"


@define
class Disabled:
    """Marker for a service whose credentials are not configured."""

    missing: list[str]

    @property
    def reason(self) -> str:
        return f"missing {', '.join(self.missing)}"


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment."""
    return Settings(
        contentful_space_id=os.environ.get("CONTENTFUL_SPACE_ID"),
        contentful_access_token=os.environ.get("CONTENTFUL_ACCESS_TOKEN"),
        contentful_environment=os.environ.get("CONTENTFUL_ENVIRONMENT") or "master",
        omdb_api_key=os.environ.get("OMDB_API_KEY"),
        site_dir=os.environ.get("MOVIELOG_SITE_DIR") or ".",
        proxy_url=os.environ.get("MOVIELOG_PROXY_URL") or DEFAULT_PROXY_URL,
        debug=_env_flag(os.environ.get("MOVIELOG_DEBUG"))
        or os.environ.get("MOVIELOG_ENV") == "development",
    )


def resolve_contentful(settings: Settings) -> ContentfulService | Disabled:
    """Build the CMS client, or a Disabled marker when credentials are empty."""
    missing = [
        name
        for name, value in (
            ("CONTENTFUL_SPACE_ID", settings.contentful_space_id),
            ("CONTENTFUL_ACCESS_TOKEN", settings.contentful_access_token),
        )
        if not value
    ]
    if missing:
        return Disabled(missing=missing)
    return ContentfulService(
        space_id=settings.contentful_space_id,
        access_token=settings.contentful_access_token,
        environment=settings.contentful_environment,
    )


def resolve_omdb(settings: Settings) -> OMDbService | Disabled:
    """Build the OMDb client, or a Disabled marker when no key is set."""
    if not settings.omdb_api_key:
        return Disabled(missing=["OMDB_API_KEY"])
    return OMDbService(api_key=settings.omdb_api_key)
