"""Command-line entry point for MovieLog.

    movielog fetch            write _data/cmsData.json from Contentful
    movielog collect          print the merged movie collection
    movielog serve            run the live enrichment proxy
    movielog live TITLE       render live data for a title via the proxy
    movielog check            report Contentful credentials and a sample entry
    movielog mcp              run the MCP stdio server
"""

import argparse
import asyncio
import json
import sys

from loguru import logger

from .collection import ConcatenateStrategy, DedupeByTitleStrategy, build_all_movies
from .config import Disabled, Settings, get_settings, resolve_contentful
from .live import LiveMovieController, MemoryPage, ProxyClient, REGIONS
from .snapshot import refresh_snapshot


def configure_logging(verbose: bool = False) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def cmd_fetch(settings: Settings, args: argparse.Namespace) -> int:
    asyncio.run(refresh_snapshot(resolve_contentful(settings), settings.snapshot_path))
    return 0


def cmd_collect(settings: Settings, args: argparse.Namespace) -> int:
    strategy = DedupeByTitleStrategy() if args.dedupe else ConcatenateStrategy()
    movies = build_all_movies(settings.snapshot_path, settings.movies_dir, strategy)
    if args.json:
        print(json.dumps([m.to_dict() for m in movies], indent=2, ensure_ascii=False))
    else:
        for m in movies:
            print(f"{m.release_year:>4}  {m.title}  [{m.source.value}]")
    return 0


def cmd_serve(settings: Settings, args: argparse.Namespace) -> int:
    import uvicorn

    from .proxy import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


async def _render_live(settings: Settings, title: str, refresh: bool) -> MemoryPage:
    page = MemoryPage(title=title)
    client = ProxyClient(base_url=settings.proxy_url)
    controller = LiveMovieController(page=page, fetcher=client)
    try:
        await controller.load()
        if refresh:
            await controller.refresh()
    finally:
        await controller.aclose()
        await client.close()
    return page


def cmd_live(settings: Settings, args: argparse.Namespace) -> int:
    page = asyncio.run(_render_live(settings, args.title, args.refresh))
    for region_id in REGIONS:
        print(f"{region_id:<13} {page.text(region_id)}")
    return 0


async def _check_contentful(settings: Settings) -> int:
    print(f"Space ID: {settings.contentful_space_id or 'Missing'}")
    print(f"Access Token: {'Found' if settings.contentful_access_token else 'Missing'}")

    source = resolve_contentful(settings)
    if isinstance(source, Disabled):
        print(f"Contentful disabled: {source.reason}")
        return 1

    try:
        movies = await source.get_movies()
    except Exception as e:
        print(f"Error: {e}")
        return 1
    finally:
        await source.close()

    print(f"\nTotal movies: {len(movies)}")
    if movies:
        print("\nFirst movie:")
        print(json.dumps(movies[0].to_dict(), indent=2, ensure_ascii=False))
    else:
        print("\nNo movies found in Contentful!")
    return 0


def cmd_check(settings: Settings, args: argparse.Namespace) -> int:
    return asyncio.run(_check_contentful(settings))


def cmd_mcp(settings: Settings, args: argparse.Namespace) -> int:
    from .mcp.server import main as mcp_main

    asyncio.run(mcp_main())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="movielog", description="MovieLog content pipeline")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    fetch = sub.add_parser("fetch", help="Write the CMS snapshot")
    fetch.set_defaults(func=cmd_fetch)

    collect = sub.add_parser("collect", help="Print the merged movie collection")
    collect.add_argument("--json", action="store_true", help="Print records as JSON")
    collect.add_argument("--dedupe", action="store_true", help="Drop repeated titles")
    collect.set_defaults(func=cmd_collect)

    serve = sub.add_parser("serve", help="Run the live enrichment proxy")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(func=cmd_serve)

    live = sub.add_parser("live", help="Render live data for a title")
    live.add_argument("title")
    live.add_argument("--refresh", action="store_true", help="Refetch after the first load")
    live.set_defaults(func=cmd_live)

    check = sub.add_parser("check", help="Check Contentful credentials")
    check.set_defaults(func=cmd_check)

    mcp = sub.add_parser("mcp", help="Run the MCP server")
    mcp.set_defaults(func=cmd_mcp)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.command != "mcp":
        configure_logging(args.verbose)
    return args.func(get_settings(), args)


if __name__ == "__main__":
    sys.exit(main())
