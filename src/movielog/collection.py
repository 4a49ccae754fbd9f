"""Merged movie collection: CMS snapshot plus local markdown records."""

import re
from pathlib import Path
from typing import Any, Protocol, Sequence

import yaml
from loguru import logger

from .models.movie import MovieRecord, MovieSource, parse_year
from .snapshot import read_snapshot


FRONT_MATTER_RE = re.compile(r"\A---\s*\n(.*?)\n---\s*(?:\n|\Z)(.*)\Z", re.DOTALL)


class MergeStrategy(Protocol):
    """Combines remote and local records into one ordered collection."""

    def merge(
        self, remote: Sequence[MovieRecord], local: Sequence[MovieRecord]
    ) -> list[MovieRecord]:
        ...


def sort_by_release_year(movies: Sequence[MovieRecord]) -> list[MovieRecord]:
    """Newest first; equal years keep their incoming order."""
    return sorted(movies, key=lambda m: m.release_year or 0, reverse=True)


class ConcatenateStrategy:
    """Remote records then local records, sorted by release year."""

    def merge(
        self, remote: Sequence[MovieRecord], local: Sequence[MovieRecord]
    ) -> list[MovieRecord]:
        return sort_by_release_year([*remote, *local])


def normalize_title(title: str) -> str:
    return " ".join(title.casefold().split())


class DedupeByTitleStrategy:
    """Like ConcatenateStrategy, keeping the first record per normalized title."""

    def merge(
        self, remote: Sequence[MovieRecord], local: Sequence[MovieRecord]
    ) -> list[MovieRecord]:
        seen: set[str] = set()
        unique = []
        for movie in [*remote, *local]:
            key = normalize_title(movie.title)
            if key in seen:
                logger.debug(f"Dropping duplicate '{movie.title}' from {movie.source.value}")
                continue
            seen.add(key)
            unique.append(movie)
        return sort_by_release_year(unique)


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a markdown document into its YAML front matter and body."""
    match = FRONT_MATTER_RE.match(text)
    if not match:
        return {}, text
    meta = yaml.safe_load(match.group(1)) or {}
    if not isinstance(meta, dict):
        raise ValueError("front matter is not a mapping")
    return meta, match.group(2)


def _read_local_file(path: Path) -> tuple[dict[str, Any], str] | None:
    try:
        return split_front_matter(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Skipping {path.name}: {e}")
        return None


def load_local_movies(movies_dir: Path) -> list[MovieRecord]:
    """Load every ``*.md`` record in ``movies_dir``."""
    movies_dir = Path(movies_dir)
    if not movies_dir.is_dir():
        return []

    movies = []
    for path in sorted(movies_dir.glob("*.md")):
        parsed = _read_local_file(path)
        if parsed is None:
            continue
        meta, body = parsed

        source = MovieSource.LOCAL
        if meta.get("source") is not None:
            override = MovieSource.parse(meta["source"])
            if override is None:
                logger.warning(f"{path.name}: ignoring unknown source {meta['source']!r}")
            else:
                source = override

        movies.append(
            MovieRecord.from_front_matter(path.stem, meta, body.strip(), source=source)
        )
    return movies


def remote_movies(snapshot_path: Path) -> list[MovieRecord]:
    """CMS movies only, in snapshot order."""
    return read_snapshot(snapshot_path)


def build_all_movies(
    snapshot_path: Path,
    movies_dir: Path,
    strategy: MergeStrategy | None = None,
) -> list[MovieRecord]:
    """Build the full, ordered movie collection from what is on disk now."""
    strategy = strategy or ConcatenateStrategy()
    remote = read_snapshot(snapshot_path)
    local = load_local_movies(movies_dir)
    logger.info(f"Found {len(local)} local movies")

    movies = strategy.merge(remote, local)
    logger.info(f"Total movies: {len(movies)}")
    return movies


def _tags(meta: dict[str, Any]) -> list[str]:
    tags = meta.get("tags")
    if tags is None:
        return []
    if isinstance(tags, (list, tuple)):
        return [str(t) for t in tags]
    return [str(tags)]


def _tagged_year(meta: dict[str, Any]) -> int:
    # "year" wins over "releaseYear" in the legacy collection.
    return parse_year(meta.get("year")) or parse_year(meta.get("releaseYear"))


def tagged_movies(movies_dir: Path, tag: str = "movies") -> list[MovieRecord]:
    """Local records carrying ``tag`` in their front matter, newest first.

    Ordered by ``year``, falling back to ``releaseYear`` when ``year`` is
    missing or not a number.
    """
    movies_dir = Path(movies_dir)
    if not movies_dir.is_dir():
        return []

    tagged = []
    for path in sorted(movies_dir.glob("*.md")):
        parsed = _read_local_file(path)
        if parsed is None:
            continue
        meta, body = parsed
        if tag in _tags(meta):
            movie = MovieRecord.from_front_matter(path.stem, meta, body.strip())
            tagged.append((_tagged_year(meta), movie))

    tagged.sort(key=lambda pair: pair[0], reverse=True)
    return [movie for _, movie in tagged]
