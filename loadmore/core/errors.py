"""Error taxonomy for the pagination controller.

Three kinds of outcome are distinguished:

- Boundary no-ops are not errors at all. Navigating past the first or last
  item reports a zero-item result and a ``boundary`` event.
- ``TransportError`` means a remote page could not be fetched. The
  controller rolls back, reports it through ``load_failed`` and stays
  ready for a retry.
- ``ConfigurationError`` means the controller was built with invalid
  options. It is raised at construction time only.

Example:
    from loadmore.core.errors import TransportError, classify_error

    try:
        payload = await fetch(page, page_size, params)
    except Exception as ex:
        raise TransportError(
            f"fetching page {page} failed",
            direction=direction,
            page=page,
            cause=ex,
        ) from ex
"""

import asyncio
from enum import Enum, auto

from loadmore.core.window import Direction


class ErrorCategory(Enum):
    """Classification of transport failures."""

    # Transient - reissuing the navigation may succeed
    RATE_LIMIT = auto()
    TIMEOUT = auto()
    NETWORK = auto()
    SERVICE_UNAVAILABLE = auto()

    # Permanent - reissuing will fail the same way
    INVALID_INPUT = auto()
    AUTH_FAILURE = auto()
    NOT_FOUND = auto()
    MALFORMED_RESPONSE = auto()
    UNKNOWN = auto()


RETRYABLE_CATEGORIES = {
    ErrorCategory.RATE_LIMIT,
    ErrorCategory.TIMEOUT,
    ErrorCategory.NETWORK,
    ErrorCategory.SERVICE_UNAVAILABLE,
}


class LoadMoreError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(LoadMoreError, ValueError):
    """Raised when a controller or presenter is built with invalid options.

    Attributes:
        option: Name of the offending option, when a single one is at fault.
    """

    def __init__(self, message: str, option: str | None = None) -> None:
        super().__init__(message)
        self.option = option


class FetchError(LoadMoreError):
    """Raised by HTTP fetchers when an endpoint cannot deliver a page.

    Attributes:
        status: HTTP status code, or None for network-level failures.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class TransportError(LoadMoreError):
    """A remote page request failed.

    Attributes:
        direction: The navigation direction that was attempted.
        page: The page number that was requested.
        cause: The underlying exception raised by the fetch collaborator.
        category: Classification of the cause.
    """

    def __init__(
        self,
        message: str,
        direction: Direction,
        page: int,
        cause: BaseException | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        super().__init__(message)
        self.direction = direction
        self.page = page
        self.cause = cause
        if category is None:
            category = (
                classify_error(cause)
                if isinstance(cause, Exception)
                else ErrorCategory.UNKNOWN
            )
        self.category = category

    @property
    def retryable(self) -> bool:
        return is_retryable(self.category)


def _status_category(status: int) -> ErrorCategory:
    if status == 429:
        return ErrorCategory.RATE_LIMIT
    if status in (401, 403):
        return ErrorCategory.AUTH_FAILURE
    if status == 404:
        return ErrorCategory.NOT_FOUND
    if status in (408, 504):
        return ErrorCategory.TIMEOUT
    if status >= 500:
        return ErrorCategory.SERVICE_UNAVAILABLE
    if status >= 400:
        return ErrorCategory.INVALID_INPUT
    return ErrorCategory.UNKNOWN


def classify_error(error: Exception) -> ErrorCategory:
    """Classify a fetch failure into an error category.

    Args:
        error: The exception raised while fetching a page.

    Returns:
        The ErrorCategory that best matches the error.
    """
    if isinstance(error, FetchError) and error.status is not None:
        return _status_category(error.status)

    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(error, ConnectionError):
        return ErrorCategory.NETWORK

    if isinstance(error, (KeyError, TypeError, ValueError)):
        return ErrorCategory.MALFORMED_RESPONSE

    error_str = str(error).lower()

    if "connection" in error_str or "network" in error_str:
        return ErrorCategory.NETWORK
    if "429" in error_str or "rate limit" in error_str:
        return ErrorCategory.RATE_LIMIT
    if "too many requests" in error_str:
        return ErrorCategory.RATE_LIMIT
    if "503" in error_str or "service unavailable" in error_str:
        return ErrorCategory.SERVICE_UNAVAILABLE
    if "502" in error_str or "bad gateway" in error_str:
        return ErrorCategory.SERVICE_UNAVAILABLE
    if "401" in error_str or "unauthorized" in error_str:
        return ErrorCategory.AUTH_FAILURE
    if "403" in error_str or "forbidden" in error_str:
        return ErrorCategory.AUTH_FAILURE
    if "404" in error_str or "not found" in error_str:
        return ErrorCategory.NOT_FOUND
    if "400" in error_str or "bad request" in error_str:
        return ErrorCategory.INVALID_INPUT

    return ErrorCategory.UNKNOWN


def is_retryable(category: ErrorCategory) -> bool:
    """Check whether reissuing the same navigation may succeed.

    Args:
        category: The error category to check.

    Returns:
        True if the failure is transient.
    """
    return category in RETRYABLE_CATEGORIES
