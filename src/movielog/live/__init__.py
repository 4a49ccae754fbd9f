"""Client-side live enrichment: cache, page regions and controller."""

from .cache import CacheEntry, LiveMovieCache
from .client import ProxyClient
from .controller import LiveDataFetcher, LiveMovieController
from .page import REGIONS, MemoryPage, Page, RegionState

__all__ = [
    "CacheEntry",
    "LiveMovieCache",
    "ProxyClient",
    "LiveDataFetcher",
    "LiveMovieController",
    "REGIONS",
    "MemoryPage",
    "Page",
    "RegionState",
]
