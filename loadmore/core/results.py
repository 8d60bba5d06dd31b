"""Result and event payload types emitted by the navigation controller."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from loadmore.core.config import RetentionMode
from loadmore.core.errors import ErrorCategory
from loadmore.core.window import Direction

T = TypeVar("T")


@dataclass(frozen=True)
class BeforeLoad:
    """Payload of ``before_load``: what is about to be fetched."""

    direction: Direction
    page: int


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    """Outcome of a settled navigation.

    Attributes:
        items: Items loaded by this navigation, in index order.
        start_index: Absolute index of the first loaded item.
        end_index: Absolute index one past the last loaded item.
        direction: Direction of travel.
        total_items: Collection size after the load (0 while unknown).
        page: Page the controller is on after the load.
        evicted: Absolute indices evicted by the retention policy.
        retention_mode: Whether ``evicted`` should be removed or hidden.
        already_shown: Loaded indices the host was already showing.
        unhidden: Loaded indices the host held hidden, now visible again.
        noop: True for boundary and already-loaded navigations.
    """

    items: list[T]
    start_index: int
    end_index: int
    direction: Direction
    total_items: int
    page: int
    evicted: tuple[int, ...] = ()
    retention_mode: RetentionMode = RetentionMode.REMOVE
    already_shown: tuple[int, ...] = ()
    unhidden: tuple[int, ...] = ()
    noop: bool = False

    @property
    def count(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class LoadFailure:
    """Payload of ``load_failed``; state was left as it was before the request."""

    direction: Direction
    page: int
    cause: BaseException | None
    category: ErrorCategory
    retryable: bool
    message: str = ""


@dataclass(frozen=True)
class WindowSnapshot:
    """Read-only copy of the window state, used for UI updates."""

    current_index: int
    current_page: int
    items_per_page: int
    total_items: int | None
    total_pages: int
    direction: Direction
    loading: bool
    can_load_more: bool
    can_load_previous: bool
    has_next_page: bool
    has_previous_page: bool
    retained_indices: tuple[int, ...] = field(default_factory=tuple)
