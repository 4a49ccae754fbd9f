"""Live enrichment proxy: a single GET endpoint in front of OMDb.

The handler is a plain async function returning a ``ProxyResponse`` so it can
run inside any HTTP host; ``create_app`` mounts it on a FastAPI application.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping

from attrs import define, field
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from .config import DEFAULT_ENRICHMENT_PATH, Disabled, get_settings, resolve_omdb
from .errors import MovieNotFoundError, UpstreamError
from .services.omdb import OMDbService


BASE_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}
CACHE_HEADERS = {"Cache-Control": "public, max-age=3600"}

GENERIC_FAILURE_MESSAGE = "Failed to fetch movie data. Please try again later."


@define
class ProxyResponse:
    status_code: int
    body: dict[str, Any]
    headers: dict[str, str] = field(factory=lambda: dict(BASE_HEADERS))


def _error(
    status_code: int,
    error: str,
    message: str,
    details: str | None = None,
) -> ProxyResponse:
    body = {"error": error, "message": message}
    if details is not None:
        body["details"] = details
    return ProxyResponse(status_code=status_code, body=body)


async def handle_movie_request(
    params: Mapping[str, str],
    omdb: OMDbService | Disabled,
    debug: bool = False,
) -> ProxyResponse:
    """Look up ``params["title"]`` and build the HTTP response."""
    title = params.get("title")
    if not title:
        return _error(
            400,
            "Missing required parameter: title",
            "Please provide a movie title in the query string",
        )

    if isinstance(omdb, Disabled):
        logger.warning(f"Live lookup for '{title}' skipped: {omdb.reason}")
        return _error(
            500,
            "Live data disabled",
            "Live movie data is not configured on this server.",
        )

    try:
        logger.info(f"Fetching movie data for: {title}")
        movie = await omdb.lookup(title)
    except MovieNotFoundError as e:
        return _error(404, "Movie not found", str(e))
    except UpstreamError as e:
        logger.error(f"Error in movie lookup: {e}")
        return _error(
            500,
            "Upstream service error",
            GENERIC_FAILURE_MESSAGE,
            details=str(e) if debug else None,
        )
    except Exception as e:
        logger.exception(f"Error in movie lookup: {e}")
        return _error(
            500,
            "Internal server error",
            GENERIC_FAILURE_MESSAGE,
            details=str(e) if debug else None,
        )

    logger.info(f"Successfully fetched data for: {movie.title}")
    return ProxyResponse(
        status_code=200,
        body=movie.to_dict(),
        headers={**BASE_HEADERS, **CACHE_HEADERS},
    )


def create_app(
    omdb: OMDbService | Disabled | None = None,
    debug: bool | None = None,
    path: str = DEFAULT_ENRICHMENT_PATH,
) -> FastAPI:
    """Create the proxy application."""
    if omdb is None or debug is None:
        settings = get_settings()
        if omdb is None:
            omdb = resolve_omdb(settings)
        if debug is None:
            debug = settings.debug

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if isinstance(omdb, OMDbService):
            await omdb.close()

    app = FastAPI(title="MovieLog live data", version="1.0.0", lifespan=lifespan)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "ok", "live_data": not isinstance(omdb, Disabled)}

    @app.get(path)
    async def movie(request: Request) -> JSONResponse:
        result = await handle_movie_request(request.query_params, omdb, debug=debug)
        return JSONResponse(
            content=result.body,
            status_code=result.status_code,
            headers=result.headers,
        )

    return app
