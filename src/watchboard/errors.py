"""Error taxonomy shared by the source clients, the aggregator and the API layer."""

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminant carried by every watchboard error."""

    TRANSPORT = "transport"
    UPSTREAM_API = "upstream_api"
    PARSE = "parse"
    NOT_FOUND = "not_found"
    STORE = "store"


class WatchboardError(Exception):
    """Base class for errors raised while fetching or merging source data."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(WatchboardError):
    """A source could not be reached (network or I/O failure)."""

    kind = ErrorKind.TRANSPORT


class UpstreamAPIError(WatchboardError):
    """The tracker answered with a structured error payload."""

    kind = ErrorKind.UPSTREAM_API

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status

    def __repr__(self) -> str:
        return f"UpstreamAPIError(status={self.status!r}, message={self.message!r})"


class ParseError(WatchboardError):
    """A source returned a body that does not have the expected shape."""

    kind = ErrorKind.PARSE


class NotFoundError(WatchboardError):
    """A caller-supplied media identifier could not be resolved."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, media_type: str, identifier: str) -> None:
        super().__init__(f"Could not find {media_type} {identifier}")
        self.media_type = media_type
        self.identifier = identifier


class StoreError(WatchboardError):
    """The alt-title document store failed to index, read or decode."""

    kind = ErrorKind.STORE
