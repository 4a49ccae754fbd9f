"""OMDb API service for live movie lookups."""

import httpx
from attrs import define

from ..errors import MovieNotFoundError, ParseError, UpstreamError
from ..models.omdb import LiveMovieData


OMDB_BASE_URL = "https://www.omdbapi.com"


@define
class OMDbService:
    """Client for the OMDb API."""

    api_key: str
    timeout: float = 10.0
    _client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=OMDB_BASE_URL,
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def lookup(self, title: str) -> LiveMovieData:
        """Look up a movie by exact title."""
        client = await self._get_client()
        resp = await client.get("/", params={"apikey": self.api_key, "t": title})
        if not resp.is_success:
            raise UpstreamError("omdb", resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise ParseError(f"OMDb returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ParseError("OMDb response is not a JSON object")

        if data.get("Response") == "False":
            raise MovieNotFoundError(data.get("Error") or "No movie found with that title")

        return LiveMovieData.from_omdb(data)
