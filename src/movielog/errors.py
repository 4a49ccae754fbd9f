"""Error types shared by the build pipeline, the proxy and the live client."""

from enum import Enum


class MovieLogError(Exception):
    """Base class for MovieLog errors."""


class UpstreamError(MovieLogError):
    """An external API answered with a non-2xx status."""

    def __init__(self, service: str, status_code: int):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service} API error: {status_code}")


class ParseError(MovieLogError):
    """A payload (API response or snapshot file) could not be decoded."""


class MovieNotFoundError(MovieLogError):
    """The lookup API reported no match for a title."""


class LiveErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"
    GENERIC = "generic"


class LiveDataError(MovieLogError):
    """A live enrichment request failed on the client side."""

    def __init__(self, kind: LiveErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(message)
