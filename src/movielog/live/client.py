"""HTTP client for the live enrichment proxy."""

import httpx
from attrs import define
from loguru import logger

from ..errors import LiveDataError, LiveErrorKind
from ..models.omdb import LiveMovieData
from ..config import DEFAULT_ENRICHMENT_PATH


def _error_from_response(resp: httpx.Response) -> LiveDataError:
    content_type = resp.headers.get("content-type", "")
    if "text/html" in content_type:
        # an HTML error page means the endpoint itself is not deployed
        return LiveDataError(
            LiveErrorKind.UNAVAILABLE,
            "Live data endpoint not available.",
        )

    message = f"HTTP {resp.status_code}"
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error") or message
    else:
        logger.warning(f"Could not parse error response (HTTP {resp.status_code})")
        message = f"Failed to load data (HTTP {resp.status_code})"

    if resp.status_code == 404:
        return LiveDataError(LiveErrorKind.NOT_FOUND, message)
    return LiveDataError(LiveErrorKind.GENERIC, message)


@define
class ProxyClient:
    """Fetches live movie data from the enrichment proxy."""

    base_url: str
    path: str = DEFAULT_ENRICHMENT_PATH
    timeout: float = 15.0
    _client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch(self, title: str) -> LiveMovieData:
        client = await self._get_client()
        try:
            resp = await client.get(self.path, params={"title": title})
        except httpx.TransportError as e:
            raise LiveDataError(
                LiveErrorKind.UNAVAILABLE, f"Live data endpoint not reachable: {e}"
            ) from e

        if not resp.is_success:
            raise _error_from_response(resp)

        try:
            return LiveMovieData.from_dict(resp.json())
        except (ValueError, AttributeError) as e:
            raise LiveDataError(LiveErrorKind.GENERIC, "Invalid live data response") from e
