"""Map raised errors to HTTP status codes and user-facing messages."""

from watchboard.errors import ErrorKind, UpstreamAPIError, WatchboardError

GENERIC_MESSAGE = "Whoops..."

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.TRANSPORT: 500,
    ErrorKind.PARSE: 500,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE: 500,
}


def unwrap_error(error: BaseException) -> BaseException:
    """Strip one level of wrapping: an exception group yields its first member."""
    if isinstance(error, BaseExceptionGroup) and error.exceptions:
        return error.exceptions[0]
    return error


def classify(error: BaseException) -> int:
    """
    Return the HTTP status code for an error.

    Upstream API errors keep the status the tracker reported; every kind
    without a dedicated status, and any foreign exception, is a 500.
    """
    error = unwrap_error(error)
    if not isinstance(error, WatchboardError):
        return 500
    if isinstance(error, UpstreamAPIError):
        return error.status
    return STATUS_BY_KIND.get(error.kind, 500)


def public_message(error: BaseException, status: int) -> str:
    """Message safe to show callers; server-side failures stay generic."""
    if status >= 500:
        return GENERIC_MESSAGE
    return str(unwrap_error(error))
