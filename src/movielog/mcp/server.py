"""MCP server exposing the movie collection and live lookups."""

import asyncio
import json

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from ..collection import build_all_movies
from ..config import Disabled, Settings, get_settings, resolve_contentful, resolve_omdb
from ..models.movie import MovieRecord
from ..proxy import handle_movie_request
from ..services.omdb import OMDbService
from ..snapshot import refresh_snapshot


def summarize(movie: MovieRecord) -> dict:
    return {
        "id": movie.id,
        "title": movie.title,
        "year": movie.release_year,
        "genre": movie.genre,
        "rating": movie.rating,
        "source": movie.source.value,
    }


def list_movies_page(settings: Settings, offset: int = 0, limit: int = 100) -> dict:
    """One page of the merged collection, with the total count."""
    movies = build_all_movies(settings.snapshot_path, settings.movies_dir)
    page = movies[offset : offset + limit]
    return {
        "total_count": len(movies),
        "offset": offset,
        "limit": limit,
        "returned": len(page),
        "movies": [summarize(m) for m in page],
    }


def find_movie(settings: Settings, movie_id: str) -> MovieRecord | None:
    movies = build_all_movies(settings.snapshot_path, settings.movies_dir)
    return next((m for m in movies if m.id == movie_id), None)


async def run_tool(
    name: str,
    arguments: dict,
    settings: Settings,
    omdb: OMDbService | Disabled,
) -> list[TextContent]:
    """Execute one tool call; failures come back as text."""
    try:
        if name == "list_movies":
            result = list_movies_page(
                settings,
                offset=arguments.get("offset", 0),
                limit=arguments.get("limit", 100),
            )
            return [TextContent(type="text", text=json.dumps(result, indent=2))]

        elif name == "get_movie":
            movie = find_movie(settings, arguments["movie_id"])
            if not movie:
                return [TextContent(type="text", text="Movie not found")]
            return [
                TextContent(type="text", text=json.dumps(movie.to_dict(), indent=2))
            ]

        elif name == "refresh_snapshot":
            snapshot = await refresh_snapshot(
                resolve_contentful(settings), settings.snapshot_path
            )
            return [
                TextContent(
                    type="text",
                    text=f"Saved {len(snapshot.movies)} CMS movies to {settings.snapshot_path}",
                )
            ]

        elif name == "lookup_live_movie":
            response = await handle_movie_request(
                {"title": arguments.get("title", "")}, omdb, debug=settings.debug
            )
            result = {"status": response.status_code, "body": response.body}
            return [TextContent(type="text", text=json.dumps(result, indent=2))]

        else:
            return [TextContent(type="text", text=f"Unknown tool: {name}")]

    except Exception as e:
        return [TextContent(type="text", text=f"Error: {str(e)}")]


def create_mcp_server() -> Server:
    """Create and configure the MCP server."""
    server = Server("movielog")
    settings = get_settings()
    omdb = resolve_omdb(settings)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name="list_movies",
                description="List the merged movie collection (CMS snapshot plus local records), newest first. Supports pagination.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "offset": {
                            "type": "integer",
                            "description": "Number of movies to skip (default 0)",
                        },
                        "limit": {
                            "type": "integer",
                            "description": "Maximum number of movies to return (default 100)",
                        },
                    },
                },
            ),
            Tool(
                name="get_movie",
                description="Get every field of one movie in the collection",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "movie_id": {
                            "type": "string",
                            "description": "Movie ID (Contentful entry ID or local file slug)",
                        },
                    },
                    "required": ["movie_id"],
                },
            ),
            Tool(
                name="refresh_snapshot",
                description="Re-fetch movies from Contentful and rewrite the CMS snapshot",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
            ),
            Tool(
                name="lookup_live_movie",
                description="Look up live OMDb data for a title, as the enrichment endpoint would serve it",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "title": {
                            "type": "string",
                            "description": "Exact movie title",
                        },
                    },
                    "required": ["title"],
                },
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        return await run_tool(name, arguments, settings, omdb)

    return server


async def main():
    """Run the MCP server."""
    server = create_mcp_server()
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())
