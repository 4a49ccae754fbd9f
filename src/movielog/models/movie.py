"""Canonical movie record shared by the remote and local sources."""

from enum import Enum
from typing import Any

from attrs import define, field


PLACEHOLDER_POSTER_URL = "https://via.placeholder.com/300x450"

DEFAULT_TITLE = "Untitled"
DEFAULT_DIRECTOR = "Unknown"
DEFAULT_GENRE = "Unknown"


class MovieSource(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"

    @classmethod
    def parse(cls, value: Any) -> "MovieSource | None":
        """Parse a source tag, accepting the legacy "contentful" tag."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        tag = value.strip().lower()
        if tag == "contentful":
            return cls.REMOTE
        try:
            return cls(tag)
        except ValueError:
            return None


def _text(value: Any, default: str) -> str:
    if not value:
        return default
    return str(value)


def parse_year(value: Any) -> int:
    try:
        year = int(float(value)) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(year, 0)


def _rating(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


@define
class MovieRecord:
    """A fully defaulted movie, ready to be merged and rendered."""

    id: str
    source: MovieSource
    title: str = DEFAULT_TITLE
    director: str = DEFAULT_DIRECTOR
    release_year: int = 0
    genre: str = DEFAULT_GENRE
    rating: float = 0.0
    description: str = ""
    poster_url: str = PLACEHOLDER_POSTER_URL
    created_at: str | None = None
    updated_at: str | None = None
    url: str | None = None
    date: str | None = None
    body: str = field(default="", repr=False)

    @classmethod
    def from_fields(
        cls,
        id: str,
        source: MovieSource,
        fields: dict[str, Any],
        poster_url: str | None = None,
        **extra: Any,
    ) -> "MovieRecord":
        """Apply the per-field defaults to a raw field mapping.

        Falsy values (missing, None, "", 0) take the default.
        """
        return cls(
            id=str(id),
            source=source,
            title=_text(fields.get("title"), DEFAULT_TITLE),
            director=_text(fields.get("director"), DEFAULT_DIRECTOR),
            release_year=parse_year(fields.get("releaseYear")),
            genre=_text(fields.get("genre"), DEFAULT_GENRE),
            rating=_rating(fields.get("rating")),
            description=_text(fields.get("description"), ""),
            poster_url=poster_url or PLACEHOLDER_POSTER_URL,
            **extra,
        )

    @classmethod
    def from_contentful_entry(
        cls, entry: dict[str, Any], assets: dict[str, str]
    ) -> "MovieRecord":
        """Normalize a Contentful entry, resolving its first poster asset."""
        sys = entry.get("sys") or {}
        fields = entry.get("fields") or {}

        poster_url = None
        posters = fields.get("poster")
        if isinstance(posters, list) and posters:
            poster_id = (posters[0].get("sys") or {}).get("id")
            poster_url = assets.get(poster_id)

        return cls.from_fields(
            id=sys.get("id", ""),
            source=MovieSource.REMOTE,
            fields=fields,
            poster_url=poster_url,
            created_at=sys.get("createdAt"),
            updated_at=sys.get("updatedAt"),
        )

    @classmethod
    def from_front_matter(
        cls,
        slug: str,
        meta: dict[str, Any],
        body: str = "",
        source: MovieSource = MovieSource.LOCAL,
    ) -> "MovieRecord":
        """Normalize the front matter of a local markdown record."""
        fields = dict(meta)
        if not fields.get("releaseYear"):
            fields["releaseYear"] = fields.get("year")
        return cls.from_fields(
            id=slug,
            source=source,
            fields=fields,
            poster_url=fields.get("posterUrl") or fields.get("poster"),
            url=f"/movies/{slug}/",
            date=_optional_text(fields.get("date")),
            body=body,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MovieRecord":
        """Rebuild a record from its snapshot form."""
        source = MovieSource.parse(data.get("source")) or MovieSource.REMOTE
        return cls.from_fields(
            id=data.get("id", ""),
            source=source,
            fields=data,
            poster_url=data.get("posterUrl") or data.get("poster"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            url=data.get("url"),
            date=data.get("date"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "director": self.director,
            "releaseYear": self.release_year,
            "genre": self.genre,
            "rating": self.rating,
            "description": self.description,
            "posterUrl": self.poster_url,
            "source": self.source.value,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.url is not None:
            data["url"] = self.url
        if self.date is not None:
            data["date"] = self.date
        return data


@define
class Snapshot:
    """The on-disk copy of the last remote fetch."""

    movies: list[MovieRecord] = field(factory=list)

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    def to_dict(self) -> dict[str, Any]:
        return {"movies": [m.to_dict() for m in self.movies]}
