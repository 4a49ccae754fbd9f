"""Display regions of a movie page and how live data is rendered into them."""

from enum import Enum
from typing import Protocol

from attrs import define, field

from ..errors import LiveDataError, LiveErrorKind
from ..models.omdb import NOT_AVAILABLE, LiveMovieData


RATING = "live-rating"
RUNTIME = "live-runtime"
GENRE = "live-genre"
ACTORS = "live-actors"
PLOT = "live-plot"

REGIONS = (RATING, RUNTIME, GENRE, ACTORS, PLOT)

LOADING_TEXT = "Loading..."

NOT_FOUND_EXPLANATION = (
    "This movie is not available in the OMDb database (primarily Hollywood "
    'movies). Try viewing a Hollywood movie like "Inception" or "The Matrix" '
    "to see live data."
)
UNAVAILABLE_EXPLANATION = (
    "Live data is available only when the enrichment service is running. "
    "This movie may also not be in the OMDb database."
)


class RegionState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class Page(Protocol):
    """The parts of a rendered movie page the live renderer touches."""

    def lookup_key(self) -> str | None:
        """Title to enrich, or None when the page has no enrichable content."""
        ...

    def set_region(self, region_id: str, text: str, state: RegionState) -> None:
        ...


@define
class Region:
    text: str
    state: RegionState


@define
class MemoryPage:
    """A page held in memory; regions are created on first write."""

    title: str | None = None
    regions: dict[str, Region] = field(factory=dict)

    def lookup_key(self) -> str | None:
        return self.title

    def set_region(self, region_id: str, text: str, state: RegionState) -> None:
        self.regions[region_id] = Region(text=text, state=state)

    def text(self, region_id: str) -> str | None:
        region = self.regions.get(region_id)
        return region.text if region else None

    def snapshot(self) -> dict[str, str]:
        return {rid: region.text for rid, region in self.regions.items()}


def format_rating(imdb_rating: str) -> str:
    if imdb_rating == NOT_AVAILABLE:
        return NOT_AVAILABLE
    return f"⭐ {imdb_rating}/10"


def render_loading(page: Page) -> None:
    for region_id in REGIONS:
        page.set_region(region_id, LOADING_TEXT, RegionState.LOADING)


def render_data(page: Page, data: LiveMovieData) -> None:
    updates = {
        RATING: format_rating(data.imdb_rating),
        RUNTIME: data.runtime,
        GENRE: data.genre,
        ACTORS: data.actors,
        PLOT: data.plot,
    }
    for region_id, text in updates.items():
        page.set_region(region_id, text, RegionState.READY)


def explain_error(error: LiveDataError) -> str:
    if error.kind is LiveErrorKind.NOT_FOUND:
        return NOT_FOUND_EXPLANATION
    if error.kind is LiveErrorKind.UNAVAILABLE:
        return UNAVAILABLE_EXPLANATION
    return f"Unable to load live data: {error.message}"


def render_error(page: Page, error: LiveDataError) -> None:
    for region_id in REGIONS:
        page.set_region(region_id, NOT_AVAILABLE, RegionState.ERROR)
    page.set_region(PLOT, explain_error(error), RegionState.ERROR)
