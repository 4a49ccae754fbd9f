"""In-memory cache of live movie data, keyed by exact page title."""

import time

from attrs import define, field
from loguru import logger

from ..models.omdb import LiveMovieData


@define
class CacheEntry:
    data: LiveMovieData
    timestamp: float
    cached: bool = True


@define
class LiveMovieCache:
    """Title -> live data for one browsing session.

    Keys are compared exactly (case-sensitive, no trimming). Entries never
    expire; only ``invalidate`` and ``clear`` remove them.
    """

    _entries: dict[str, CacheEntry] = field(factory=dict)

    def get(self, title: str) -> LiveMovieData | None:
        entry = self._entries.get(title)
        if entry is None:
            return None
        logger.debug(f"Using cached state for '{title}'")
        return entry.data

    def put(self, title: str, data: LiveMovieData) -> CacheEntry:
        entry = CacheEntry(data=data, timestamp=time.time())
        self._entries[title] = entry
        logger.debug(f"Saved '{title}' to state cache")
        return entry

    def invalidate(self, title: str) -> bool:
        """Drop one entry; returns whether it existed."""
        return self._entries.pop(title, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def entry(self, title: str) -> CacheEntry | None:
        return self._entries.get(title)

    def __contains__(self, title: str) -> bool:
        return title in self._entries

    def __len__(self) -> int:
        return len(self._entries)
