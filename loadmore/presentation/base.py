"""Shared machinery for presentation adapters.

A presenter subscribes to a controller's events and turns them into two
kinds of display directives, pushed to a ``DisplaySink``:

- ``ContentPatch``: which rendered items to insert, remove, hide or reveal.
- a view object describing the navigation controls (labels, disabled and
  busy flags), specific to each presenter.

Presenters read controller snapshots and call its navigation methods; they
never touch the window state or the content source.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar

from loadmore.core.config import RetentionMode
from loadmore.core.controller import NavigationController, NavigationOutcome
from loadmore.core.events import EventType
from loadmore.core.logging import get_logger
from loadmore.core.results import BeforeLoad, LoadFailure, LoadResult, WindowSnapshot
from loadmore.core.window import IndexRange

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")
R_contra = TypeVar("R_contra", contravariant=True)


class Placement(Enum):
    """Where newly rendered items go relative to the existing ones."""

    APPEND = "append"
    PREPEND = "prepend"
    REPLACE = "replace"


@dataclass
class ContentPatch(Generic[R]):
    """Content changes produced by one controller event.

    Attributes:
        placement: How ``rendered`` relates to the items already shown.
        rendered: ``(absolute_index, renderable)`` pairs in index order. For
            APPEND and PREPEND only indices the host does not hold yet.
        removed: Indices to drop from the host.
        hidden: Indices to keep in the host but hide.
        revealed: Previously hidden indices to show again.
        visible_range: For REPLACE, the only range that should be visible.
    """

    placement: Placement
    rendered: list[tuple[int, R]] = field(default_factory=list)
    removed: list[int] = field(default_factory=list)
    hidden: list[int] = field(default_factory=list)
    revealed: list[int] = field(default_factory=list)
    visible_range: IndexRange | None = None


@dataclass(frozen=True)
class ControlState:
    """Display state of one navigation control."""

    label: str
    disabled: bool
    busy: bool = False
    aria_label: str | None = None


@dataclass(frozen=True)
class PresenterTexts:
    """User-facing strings used by the presenters."""

    load_more: str = "Load More"
    load_previous: str = "Load Previous"
    loading: str = "Loading..."
    no_more: str = "No more items"
    previous_page: str = "Previous"
    next_page: str = "Next"
    previous_symbol: str = "«"
    next_symbol: str = "»"
    ellipsis: str = "..."


class DisplaySink(Protocol[R_contra]):
    """Host binding that applies display directives."""

    def apply_patch(self, patch: ContentPatch[R_contra]) -> None:
        """Apply content changes to the host."""
        ...

    def update_controls(self, view: Any) -> None:
        """Apply a presenter-specific control view to the host."""
        ...


class Presenter(Generic[T, R]):
    """Base class wiring controller events to a display sink.

    Subclasses implement ``build_view`` and ``build_patch``.

    Attributes:
        view: The most recent control view pushed to the sink.
        last_failure: The most recent load failure, cleared by a success.
    """

    def __init__(
        self,
        controller: NavigationController[T],
        render_template: Callable[[T], R],
        sink: DisplaySink[R],
        texts: PresenterTexts | None = None,
    ) -> None:
        self._controller = controller
        self._render_template = render_template
        self._sink = sink
        self.texts = texts or PresenterTexts()
        self.last_failure: LoadFailure | None = None
        self._loading = False
        self._snapshot = controller.snapshot()

        events = controller.events
        self._unbinders = [
            events.on(EventType.BEFORE_LOAD, self._on_before_load),
            events.on(EventType.LOADED, self._on_loaded),
            events.on(EventType.LOAD_FAILED, self._on_load_failed),
            events.on(EventType.AFTER_LOAD, self._on_settled),
            events.on(EventType.BOUNDARY, self._on_settled),
            events.on(EventType.DESTROYED, self._on_destroyed),
        ]
        self.view = self.build_view(self._snapshot, loading=False)

    @property
    def controller(self) -> NavigationController[T]:
        return self._controller

    @property
    def bound(self) -> bool:
        return bool(self._unbinders)

    async def start(self) -> NavigationOutcome[T]:
        """Push the initial controls and run the initial load if configured."""
        self._sink.update_controls(self.view)
        if not self._controller.config.initial_load:
            return None
        return await self._controller.start()

    def unbind(self) -> None:
        """Stop listening to the controller. Safe to call more than once."""
        for unbind in self._unbinders:
            unbind()
        self._unbinders = []

    def build_view(self, snapshot: WindowSnapshot, loading: bool) -> Any:
        raise NotImplementedError

    def build_patch(self, result: LoadResult[T]) -> ContentPatch[R]:
        raise NotImplementedError

    def render(self, result: LoadResult[T]) -> list[tuple[int, R]]:
        return [
            (result.start_index + offset, self._render_template(item))
            for offset, item in enumerate(result.items)
        ]

    def replace_patch(self, result: LoadResult[T]) -> ContentPatch[R]:
        """Patch showing only the loaded window, for page-at-a-time presenters."""
        removed, hidden = self.split_evicted(result)
        return ContentPatch(
            placement=Placement.REPLACE,
            rendered=self.render(result),
            removed=removed,
            hidden=hidden,
            visible_range=IndexRange(result.start_index, result.end_index),
        )

    @staticmethod
    def split_evicted(result: LoadResult[Any]) -> tuple[list[int], list[int]]:
        """Split evicted indices into ``(removed, hidden)`` by retention mode."""
        if result.retention_mode is RetentionMode.HIDE:
            return [], list(result.evicted)
        return list(result.evicted), []

    def _push_controls(self) -> None:
        self.view = self.build_view(self._snapshot, loading=self._loading)
        self._sink.update_controls(self.view)

    def _on_before_load(self, payload: BeforeLoad) -> None:
        self._loading = True
        self._push_controls()

    def _on_loaded(self, result: LoadResult[T]) -> None:
        self.last_failure = None
        self._sink.apply_patch(self.build_patch(result))

    def _on_load_failed(self, failure: LoadFailure) -> None:
        self.last_failure = failure
        logger.info(
            "presenter_load_failed",
            page=failure.page,
            direction=failure.direction.value,
        )

    def _on_settled(self, snapshot: WindowSnapshot) -> None:
        self._loading = False
        self._snapshot = snapshot
        self._push_controls()

    def _on_destroyed(self, revealed: list[int]) -> None:
        if revealed:
            self._sink.apply_patch(
                ContentPatch(placement=Placement.REPLACE, revealed=list(revealed))
            )
        self.unbind()
