"""OMDb live enrichment data models."""

from typing import Any

from attrs import define


NOT_AVAILABLE = "N/A"


def _field(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None or value == "":
        return NOT_AVAILABLE
    return str(value)


@define
class LiveMovieData:
    """Live movie details served by the enrichment proxy."""

    title: str = NOT_AVAILABLE
    imdb_rating: str = NOT_AVAILABLE
    runtime: str = NOT_AVAILABLE
    genre: str = NOT_AVAILABLE
    actors: str = NOT_AVAILABLE
    plot: str = NOT_AVAILABLE
    poster: str | None = None
    year: str = NOT_AVAILABLE
    director: str = NOT_AVAILABLE

    @classmethod
    def from_omdb(cls, data: dict[str, Any]) -> "LiveMovieData":
        """Reshape an OMDb payload, defaulting absent fields to "N/A"."""
        poster = data.get("Poster")
        return cls(
            title=_field(data, "Title"),
            imdb_rating=_field(data, "imdbRating"),
            runtime=_field(data, "Runtime"),
            genre=_field(data, "Genre"),
            actors=_field(data, "Actors"),
            plot=_field(data, "Plot"),
            poster=None if not poster or poster == NOT_AVAILABLE else str(poster),
            year=_field(data, "Year"),
            director=_field(data, "Director"),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LiveMovieData":
        poster = data.get("poster")
        return cls(
            title=_field(data, "title"),
            imdb_rating=_field(data, "imdbRating"),
            runtime=_field(data, "runtime"),
            genre=_field(data, "genre"),
            actors=_field(data, "actors"),
            plot=_field(data, "plot"),
            poster=None if not poster or poster == NOT_AVAILABLE else str(poster),
            year=_field(data, "year"),
            director=_field(data, "director"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "imdbRating": self.imdb_rating,
            "runtime": self.runtime,
            "genre": self.genre,
            "actors": self.actors,
            "plot": self.plot,
            "poster": self.poster,
            "year": self.year,
            "director": self.director,
        }
