"""Data models for MovieLog."""

from .movie import MovieRecord, MovieSource, Snapshot, PLACEHOLDER_POSTER_URL
from .omdb import LiveMovieData, NOT_AVAILABLE

__all__ = [
    "MovieRecord",
    "MovieSource",
    "Snapshot",
    "PLACEHOLDER_POSTER_URL",
    "LiveMovieData",
    "NOT_AVAILABLE",
]
