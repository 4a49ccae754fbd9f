"""Page controller: serve live data from cache or fetch it, then render."""

import asyncio
from typing import Protocol

from attrs import define, field
from loguru import logger

from ..errors import LiveDataError, LiveErrorKind
from ..models.omdb import LiveMovieData
from .cache import LiveMovieCache
from .page import Page, render_data, render_error, render_loading


class LiveDataFetcher(Protocol):
    async def fetch(self, title: str) -> LiveMovieData:
        ...


@define
class LiveMovieController:
    """Drives live enrichment for one page.

    Each lookup key owns one request slot: starting a request for a key
    cancels the one already in flight for it, and a cancelled request never
    renders.
    """

    page: Page
    fetcher: LiveDataFetcher
    cache: LiveMovieCache = field(factory=LiveMovieCache)
    _in_flight: dict[str, asyncio.Task] = field(factory=dict, init=False)

    async def load(self) -> LiveMovieData | None:
        """Enrich the page; returns the data rendered, if any."""
        title = self.page.lookup_key()
        if title is None:
            logger.debug("No lookup key on page, skipping live data")
            return None
        if not title:
            render_error(
                self.page,
                LiveDataError(LiveErrorKind.GENERIC, "Movie title not specified"),
            )
            return None

        cached = self.cache.get(title)
        if cached is not None:
            render_data(self.page, cached)
            return cached

        render_loading(self.page)

        previous = self._in_flight.get(title)
        if previous is not None and not previous.done():
            logger.debug(f"Cancelling in-flight request for '{title}'")
            previous.cancel()

        task = asyncio.ensure_future(self.fetcher.fetch(title))
        self._in_flight[title] = task
        try:
            data = await task
        except asyncio.CancelledError:
            if task.cancelled() and self._in_flight.get(title) is not task:
                # superseded by a newer request for the same key
                return None
            raise
        except LiveDataError as e:
            logger.error(f"Error loading live movie data: {e.message}")
            render_error(self.page, e)
            return None
        except Exception as e:
            logger.exception(f"Unexpected error loading live movie data: {e}")
            render_error(self.page, LiveDataError(LiveErrorKind.GENERIC, str(e)))
            return None
        finally:
            if self._in_flight.get(title) is task:
                del self._in_flight[title]

        self.cache.put(title, data)
        render_data(self.page, data)
        return data

    async def refresh(self) -> LiveMovieData | None:
        """Drop the current page's cache entry and fetch again."""
        title = self.page.lookup_key()
        if title:
            self.cache.invalidate(title)
            logger.info(f"Cleared cache for '{title}'")
        return await self.load()

    async def aclose(self) -> None:
        tasks = [t for t in self._in_flight.values() if not t.done()]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._in_flight.clear()
