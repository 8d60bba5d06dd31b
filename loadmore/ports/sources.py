"""Content source protocols.

This module defines the interfaces the navigation controller uses to obtain
items. Implementations may slice an in-memory sequence or call a remote
paged endpoint. All types are host-agnostic (no DOM, no HTTP types).
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

from loadmore.core.config import SourceMode
from loadmore.core.window import Direction

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class PageRequest:
    """A request for the items of one window.

    Local sources read ``start_index``/``end_index``; remote sources read
    ``page``/``page_size``. Both are always populated and consistent:
    ``start_index == (page - 1) * page_size`` for page-aligned requests.

    Attributes:
        start_index: Absolute index of the first requested item.
        end_index: Absolute index one past the last requested item.
        page: One-based page number.
        page_size: Items per page at the time of the request.
        direction: Direction of travel that produced the request.
    """

    start_index: int
    end_index: int
    page: int
    page_size: int
    direction: Direction


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """Items returned for a PageRequest.

    Attributes:
        items: The items, in index order.
        total: Collection size reported by the source.
    """

    items: list[T] = field(default_factory=list)
    total: int = 0


# =============================================================================
# Protocols
# =============================================================================


class ContentSource(Protocol[T_co]):
    """Protocol for item providers.

    Both variants are asynchronous so the controller has a single code path
    and its loading state is always observable.
    """

    @property
    def mode(self) -> SourceMode:
        """Whether this source is local or remote."""
        ...

    def size(self) -> int | None:
        """Known collection size, or None if not known yet."""
        ...

    async def load(self, request: PageRequest) -> PageResult[T_co]:
        """Resolve the items for ``request``.

        Raises:
            TransportError: If a remote source cannot deliver the page.
        """
        ...


# Remote fetch collaborator: (page, page_size, static_params) -> raw response
PageFetcher = Callable[[int, int, Mapping[str, Any]], Awaitable[Mapping[str, Any]]]


class MutableSource(Protocol[T]):
    """A local source whose sequence can be changed after construction."""

    def append(self, items: Sequence[T]) -> None: ...

    def prepend(self, items: Sequence[T]) -> None: ...

    def replace(self, items: Sequence[T]) -> None: ...
