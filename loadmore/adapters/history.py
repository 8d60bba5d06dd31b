"""Query-string history helpers.

``QueryStringHistory`` records a new location every time the controller
applies a navigation, writing the page under ``key`` in the query string
while preserving the other parameters. It can also seed the initial page
from the location it was created with, and step back through its entries
the way a browser ``popstate`` would.
"""

from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from loadmore.core.logging import get_logger

logger = get_logger(__name__)


def page_from_url(url: str, key: str = "page") -> int | None:
    """Read a positive page number from ``url``'s query string.

    Returns None when the parameter is absent, not an integer or below 1.
    """
    values = parse_qs(urlsplit(url).query).get(key)
    if not values:
        return None
    try:
        page = int(values[0])
    except ValueError:
        return None
    return page if page >= 1 else None


def url_with_page(url: str, page: int, key: str = "page") -> str:
    """Return ``url`` with ``key`` set to ``page``, other parameters kept."""
    parts = urlsplit(url)
    query = parse_qs(parts.query, keep_blank_values=True)
    query[key] = [str(page)]
    return urlunsplit(parts._replace(query=urlencode(query, doseq=True)))


class QueryStringHistory:
    """In-memory history stack of page URLs.

    Attributes:
        key: Query parameter holding the page number.
        entries: Every URL pushed so far, the initial one first.
    """

    def __init__(self, url: str, key: str = "page") -> None:
        self.key = key
        self.entries: list[str] = [url]
        self._position = 0

    @property
    def current_url(self) -> str:
        return self.entries[self._position]

    @property
    def current_page(self) -> int:
        # A location without the parameter shows the first page
        return page_from_url(self.current_url, self.key) or 1

    def initial_page(self) -> int | None:
        return page_from_url(self.entries[0], self.key)

    def on_navigation_applied(self, page: int) -> None:
        """Push a location for ``page``, dropping any forward entries."""
        if self.current_page == page:
            return
        del self.entries[self._position + 1 :]
        self.entries.append(url_with_page(self.current_url, page, self.key))
        self._position += 1
        logger.debug("history_pushed", page=page, url=self.current_url)

    def back(self) -> int | None:
        """Step back one entry and return its page, like a popstate."""
        if self._position == 0:
            return None
        self._position -= 1
        return self.current_page

    def forward(self) -> int | None:
        if self._position >= len(self.entries) - 1:
            return None
        self._position += 1
        return self.current_page
