"""Build-time snapshot of CMS movies (``_data/cmsData.json``)."""

import json
import os
import tempfile
from pathlib import Path

import httpx
from loguru import logger

from .config import Disabled
from .errors import ParseError, UpstreamError
from .models.movie import MovieRecord, Snapshot
from .services.contentful import ContentfulService


def write_snapshot(path: Path, snapshot: Snapshot) -> None:
    """Replace the snapshot file with ``snapshot``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_snapshot(path: Path) -> list[MovieRecord]:
    """Read snapshot movies; a missing or unreadable file yields no movies."""
    path = Path(path)
    if not path.exists():
        logger.info(f"No snapshot at {path}, using zero CMS movies")
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ParseError("snapshot root is not an object")
        movies = data.get("movies") or []
        if not isinstance(movies, list):
            raise ParseError("snapshot 'movies' is not a list")
    except (OSError, ValueError, ParseError) as e:
        logger.error(f"Error reading {path}: {e}")
        return []

    return [MovieRecord.from_dict(m) for m in movies if isinstance(m, dict)]


async def refresh_snapshot(
    source: ContentfulService | Disabled, path: Path
) -> Snapshot:
    """Fetch CMS movies and write the snapshot, degrading to an empty one."""
    if isinstance(source, Disabled):
        logger.warning(f"Contentful disabled ({source.reason}); writing empty snapshot")
        snapshot = Snapshot.empty()
        write_snapshot(path, snapshot)
        return snapshot

    try:
        logger.info("Fetching movies from Contentful...")
        movies = await source.get_movies()
        snapshot = Snapshot(movies=movies)
        logger.info(f"Loaded {len(movies)} movies from Contentful")
    except (UpstreamError, ParseError, httpx.HTTPError) as e:
        logger.error(f"Error loading Contentful data: {e}")
        snapshot = Snapshot.empty()
    except Exception as e:
        logger.exception(f"Unexpected error loading Contentful data: {e}")
        snapshot = Snapshot.empty()
    finally:
        await source.close()

    write_snapshot(path, snapshot)
    logger.info(f"Saved CMS data to {path}")
    return snapshot
