"""Contentful delivery API service for CMS movie entries."""

from typing import Any

import httpx
from attrs import define
from loguru import logger

from ..errors import ParseError, UpstreamError
from ..models.movie import MovieRecord


CONTENTFUL_BASE_URL = "https://cdn.contentful.com"

# entry -> asset: one level of link resolution is enough for posters
LINK_DEPTH = 2


def asset_url(asset: dict[str, Any]) -> str | None:
    """Return the fully-qualified file URL of a Contentful asset."""
    file_info = (asset.get("fields") or {}).get("file") or {}
    url = file_info.get("url") or (file_info.get("file") or {}).get("url")
    if not url:
        return None
    if url.startswith("//"):
        return f"https:{url}"
    return url


@define
class ContentfulService:
    """Client for the Contentful content delivery API."""

    space_id: str
    access_token: str
    environment: str = "master"
    content_type: str = "movie"
    page_size: int = 100
    timeout: float = 30.0
    _client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=CONTENTFUL_BASE_URL,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _get_page(self, skip: int) -> dict[str, Any]:
        client = await self._get_client()
        resp = await client.get(
            f"/spaces/{self.space_id}/environments/{self.environment}/entries",
            params={
                "content_type": self.content_type,
                "include": LINK_DEPTH,
                "access_token": self.access_token,
                "skip": skip,
                "limit": self.page_size,
            },
        )
        if not resp.is_success:
            raise UpstreamError("contentful", resp.status_code)
        try:
            data = resp.json()
        except ValueError as e:
            raise ParseError(f"Contentful returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ParseError("Contentful response is not a JSON object")
        return data

    async def get_movies(self) -> list[MovieRecord]:
        """Fetch every movie entry, following pagination."""
        assets: dict[str, str] = {}
        entries: list[dict[str, Any]] = []
        skip = 0

        while True:
            data = await self._get_page(skip)
            items = data.get("items") or []

            for asset in (data.get("includes") or {}).get("Asset", []):
                url = asset_url(asset)
                if url:
                    assets[asset["sys"]["id"]] = url
            entries.extend(items)

            skip += len(items)
            total = data.get("total", 0)
            if not items or skip >= total:
                break
            logger.debug(f"Fetched {skip}/{total} Contentful entries")

        return [MovieRecord.from_contentful_entry(e, assets) for e in entries]
