"""Single-flight navigation controller - platform agnostic.

The controller owns the window state and the retained item set. Every
navigation runs through the same cycle:

    IDLE --request--> LOADING --success--> IDLE
                              --failure--> FAILED --> IDLE

At most one navigation is in flight. A request that arrives while another
is loading is dropped (logged, never queued). Nothing is mutated before the
content source answers, so a failed load leaves the state exactly as it was
and retrying is simply reissuing the same navigation.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Generic, TypeVar, cast

from loadmore.core.config import LoadMoreConfig, RetentionMode, SourceMode
from loadmore.core.errors import ConfigurationError, TransportError
from loadmore.core.events import EventBus, EventType
from loadmore.core.eviction import RetainedSet, centered_trim, directional_trim
from loadmore.core.logging import get_logger
from loadmore.core.responsive import ItemsPerPageResolver
from loadmore.core.results import BeforeLoad, LoadFailure, LoadResult, WindowSnapshot
from loadmore.core.window import Direction, IndexRange, WindowState
from loadmore.ports.history import HistorySink, SeedingHistorySink
from loadmore.ports.sources import ContentSource, MutableSource, PageRequest, PageResult

logger = get_logger(__name__)

T = TypeVar("T")

NavigationOutcome = LoadResult[T] | LoadFailure | None


class ControllerState(Enum):
    IDLE = auto()
    LOADING = auto()
    FAILED = auto()


class _NavKind(Enum):
    STEP = auto()
    PAGE = auto()


@dataclass(frozen=True)
class _LoadPlan:
    kind: _NavKind
    direction: Direction
    window: IndexRange
    page: int
    page_size: int


class NavigationController(Generic[T]):
    """Tracks position in a collection and materializes windows of it.

    Args:
        config: Validated widget configuration.
        source: Content source matching ``config.mode``.
        history: Optional sink notified after each applied navigation when
            ``config.update_history`` is set. A sink that implements
            ``initial_page()`` also seeds the first page.
        viewport_width: Optional provider of the current viewport width,
            consulted on every navigation for responsive page sizes.

    Raises:
        ConfigurationError: If the source mode does not match the config.
    """

    def __init__(
        self,
        config: LoadMoreConfig,
        source: ContentSource[T],
        *,
        history: HistorySink | None = None,
        viewport_width: Callable[[], int] | None = None,
    ) -> None:
        if source.mode is not config.mode:
            raise ConfigurationError(
                f"Content source is {source.mode.value} but config.mode is "
                f"{config.mode.value}",
                option="mode",
            )
        self.config = config
        self.events = EventBus()
        self._source = source
        self._history = history
        self._resolver = ItemsPerPageResolver(
            config.items_per_page,
            config.responsive_items_per_page,
            viewport_width,
        )
        self._state = WindowState(
            items_per_page=self._resolver.resolve(),
            total_items=source.size(),
        )
        self._retained: RetainedSet[T] = RetainedSet()
        self._status = ControllerState.IDLE
        self._window_loaded = False
        self._dispatching = False
        self._destroyed = False
        self._log = logger.bind(mode=config.mode.value)

        self._initial_page = config.initial_page
        if (
            config.update_history
            and isinstance(history, SeedingHistorySink)
            and (seed := history.initial_page()) is not None
        ):
            self._initial_page = seed

    # -- accessors ---------------------------------------------------------

    @property
    def state(self) -> WindowState:
        """A copy of the window state."""
        return replace(self._state)

    @property
    def status(self) -> ControllerState:
        return self._status

    @property
    def loading(self) -> bool:
        return self._status is ControllerState.LOADING

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def current_page(self) -> int:
        return self._state.current_page

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def total_items(self) -> int:
        return self._state.total_items or 0

    @property
    def total_pages(self) -> int:
        return self._state.total_pages

    @property
    def items_per_page(self) -> int:
        return self._state.items_per_page

    @property
    def initial_page(self) -> int:
        return self._initial_page

    @property
    def retained_items(self) -> list[T]:
        return self._retained.items()

    @property
    def retained_indices(self) -> list[int]:
        return self._retained.indices()

    @property
    def hidden_indices(self) -> list[int]:
        return self._retained.hidden_indices()

    def snapshot(self) -> WindowSnapshot:
        state = self._state
        return WindowSnapshot(
            current_index=state.current_index,
            current_page=state.current_page,
            items_per_page=state.items_per_page,
            total_items=state.total_items,
            total_pages=state.total_pages,
            direction=state.direction,
            loading=self.loading,
            can_load_more=state.can_load_more,
            can_load_previous=state.can_load_previous,
            has_next_page=state.has_next_page,
            has_previous_page=state.has_previous_page,
            retained_indices=tuple(self._retained.indices()),
        )

    # -- navigation --------------------------------------------------------

    async def start(self) -> NavigationOutcome[T]:
        """Load the first window.

        Paged presentations load ``initial_page``; incremental presentation
        loads the first step forward.
        """
        if self.config.paged:
            return await self.go_to_page(self._initial_page)
        return await self.next()

    async def next(self) -> NavigationOutcome[T]:
        """Load the next window after the cursor."""
        return await self._step(Direction.NEXT)

    async def previous(self) -> NavigationOutcome[T]:
        """Load the window before the cursor."""
        return await self._step(Direction.PREVIOUS)

    async def go_to_page(self, page: int) -> NavigationOutcome[T]:
        """Load ``page``, clamped into ``[1, total_pages]``.

        Asking for the page that is already shown is a no-op. While a remote
        total is still unknown only the lower bound applies; a page past the
        end then settles on the last page once the total arrives.
        """
        return await self._go_to_page(page, force=False)

    async def _step(self, direction: Direction) -> NavigationOutcome[T]:
        if self._rejects(direction.value):
            return None

        page_size = self._resolver.resolve()
        plan = self._plan_step(direction, page_size)
        if plan is None:
            return await self._boundary(direction)
        return await self._execute(plan)

    async def _go_to_page(self, page: int, force: bool) -> NavigationOutcome[T]:
        if self._rejects("go_to_page"):
            return None

        state = self._state
        page_size = self._resolver.resolve()
        target = state.clamp_page(page, page_size)
        already_shown = (
            self._window_loaded
            and target == state.current_page
            and page_size == state.items_per_page
        )
        if already_shown and not force:
            self._log.debug("page_already_shown", page=target)
            return await self._boundary(state.direction)

        direction = (
            Direction.PREVIOUS
            if self._window_loaded and target < state.current_page
            else Direction.NEXT
        )
        window = state.page_range(target, page_size)
        if window.is_empty and state.total_items is not None:
            return await self._boundary(direction)

        plan = _LoadPlan(_NavKind.PAGE, direction, window, target, page_size)
        outcome = await self._execute(plan)
        if (
            isinstance(outcome, LoadResult)
            and not outcome.items
            and outcome.page < target
        ):
            # Jumped past the end of a collection whose size was unknown
            return await self._go_to_page(outcome.page, force=True)
        return outcome

    def _rejects(self, operation: str) -> bool:
        if self._destroyed:
            self._log.debug("navigation_after_destroy", operation=operation)
            return True
        if self.loading or self._dispatching:
            self._log.debug("navigation_dropped", operation=operation)
            return True
        return False

    def _plan_step(self, direction: Direction, page_size: int) -> _LoadPlan | None:
        state = self._state
        if self._source.mode is SourceMode.LOCAL:
            window = state.compute_range(direction, page_size, self._source.size())
            if window.is_empty:
                return None
            page = window.start // page_size + 1
            return _LoadPlan(_NavKind.STEP, direction, window, page, page_size)

        page = state.step_page(direction, page_size)
        if page is None:
            return None
        window = state.page_range(page, page_size)
        return _LoadPlan(_NavKind.STEP, direction, window, page, page_size)

    # -- load cycle --------------------------------------------------------

    async def _execute(self, plan: _LoadPlan) -> NavigationOutcome[T]:
        # Set before the first await so concurrent requests see it
        self._status = ControllerState.LOADING
        try:
            await self.events.emit(
                EventType.BEFORE_LOAD, BeforeLoad(plan.direction, plan.page)
            )
            request = PageRequest(
                start_index=plan.window.start,
                end_index=plan.window.end,
                page=plan.page,
                page_size=plan.page_size,
                direction=plan.direction,
            )
            try:
                page_result = await self._source.load(request)
            except TransportError as ex:
                return await self._fail(plan, ex)
        except BaseException:
            self._status = ControllerState.IDLE
            raise

        if self._destroyed:
            self._status = ControllerState.IDLE
            self._log.info("late_response_discarded", page=plan.page)
            return None

        result = self._apply(plan, page_result)
        self._status = ControllerState.IDLE
        self._log.info(
            "window_loaded",
            direction=plan.direction.value,
            page=result.page,
            start=result.start_index,
            end=result.end_index,
            total=result.total_items,
            evicted=len(result.evicted),
        )

        # Listeners run inside the cycle, so requests they issue are dropped
        self._dispatching = True
        try:
            await self.events.emit(EventType.LOADED, result)
            await self.events.emit(EventType.PAGE_CHANGE, result.page)
            self._notify_history(result.page)
            await self.events.emit(EventType.AFTER_LOAD, self.snapshot())
        finally:
            self._dispatching = False
        return result

    async def _fail(self, plan: _LoadPlan, error: TransportError) -> LoadFailure | None:
        self._status = ControllerState.FAILED
        if self._destroyed:
            self._status = ControllerState.IDLE
            return None

        failure = LoadFailure(
            direction=error.direction,
            page=error.page,
            cause=error.cause,
            category=error.category,
            retryable=error.retryable,
            message=str(error),
        )
        self._log.warning(
            "window_load_failed",
            direction=plan.direction.value,
            page=plan.page,
            category=error.category.name,
            retryable=error.retryable,
        )
        self._status = ControllerState.IDLE
        self._dispatching = True
        try:
            await self.events.emit(EventType.LOAD_FAILED, failure)
            await self.events.emit(EventType.AFTER_LOAD, self.snapshot())
        finally:
            self._dispatching = False
        return failure

    def _apply(self, plan: _LoadPlan, page_result: PageResult[T]) -> LoadResult[T]:
        state = self._state
        items = list(page_result.items)
        total = page_result.total
        shown, hidden = self._retained.held(
            IndexRange(plan.window.start, plan.window.start + len(items))
        )
        loaded = self._retained.put(plan.window.start, items)

        if (
            self._source.mode is SourceMode.REMOTE
            and plan.direction is Direction.NEXT
            and not items
        ):
            # An empty page ends the collection whatever the reported total
            total = min(total, loaded.start)

        state.total_items = total
        state.items_per_page = plan.page_size
        state.direction = plan.direction

        if plan.kind is _NavKind.STEP:
            if self._source.mode is SourceMode.LOCAL:
                cursor = plan.window.end if plan.direction is Direction.NEXT else plan.window.start
            else:
                cursor = loaded.end if plan.direction is Direction.NEXT else loaded.start
            state.current_index = min(cursor, total)
            state.current_page = loaded.start // plan.page_size + 1
        else:
            state.current_index = min(loaded.start, total)
            state.current_page = plan.page

        # The reported total can shrink mid-session; re-clamp right away
        state.current_page = max(1, min(state.current_page, state.total_pages))
        self._window_loaded = True

        evicted = self._evict(plan, loaded)
        return LoadResult(
            items=items,
            start_index=loaded.start,
            end_index=loaded.end,
            direction=plan.direction,
            total_items=total,
            page=state.current_page,
            evicted=tuple(evicted),
            retention_mode=self.config.retention_mode,
            already_shown=tuple(shown),
            unhidden=tuple(hidden),
        )

    def _evict(self, plan: _LoadPlan, loaded: IndexRange) -> list[int]:
        if not self.config.optimize:
            return []

        retained = self._retained.indices()
        if plan.kind is _NavKind.STEP:
            evicted = directional_trim(
                retained, loaded, plan.direction, self.config.max_retained
            )
        else:
            evicted = centered_trim(retained, loaded, self.config.max_retained)

        if not evicted:
            return []
        if self.config.retention_mode is RetentionMode.HIDE:
            self._retained.hide(evicted)
        else:
            self._retained.remove(evicted)
        self._log.debug(
            "items_evicted",
            count=len(evicted),
            retention=self.config.retention_mode.value,
        )
        return sorted(evicted)

    async def _boundary(self, direction: Direction) -> LoadResult[T]:
        state = self._state
        self._log.debug(
            "navigation_at_boundary",
            direction=direction.value,
            index=state.current_index,
            page=state.current_page,
        )
        await self.events.emit(EventType.BOUNDARY, self.snapshot())
        return LoadResult(
            items=[],
            start_index=state.current_index,
            end_index=state.current_index,
            direction=direction,
            total_items=state.total_items or 0,
            page=state.current_page,
            retention_mode=self.config.retention_mode,
            noop=True,
        )

    def _notify_history(self, page: int) -> None:
        if not self.config.update_history or self._history is None:
            return
        try:
            self._history.on_navigation_applied(page)
        except Exception:
            self._log.exception("history_update_failed", page=page)

    # -- data operations ---------------------------------------------------

    async def append_data(self, items: list[T]) -> NavigationOutcome[T]:
        """Add items at the end of a local collection and refresh."""
        source = self._mutable_source("append_data")
        if source is None:
            return None
        source.append(items)
        return await self.refresh()

    async def prepend_data(self, items: list[T]) -> NavigationOutcome[T]:
        """Add items at the start of a local collection and refresh.

        Retained indices and the cursor shift so they keep pointing at the
        same items.
        """
        source = self._mutable_source("prepend_data")
        if source is None:
            return None
        source.prepend(items)
        if self._window_loaded:
            self._retained.shift(len(items))
            self._state.current_index += len(items)
        return await self.refresh()

    async def replace_data(self, items: list[T]) -> NavigationOutcome[T]:
        """Swap the whole local collection and start over."""
        source = self._mutable_source("replace_data")
        if source is None:
            return None
        source.replace(items)
        return await self.reset()

    def _mutable_source(self, operation: str) -> MutableSource[T] | None:
        if self._rejects(operation):
            return None
        if self._source.mode is not SourceMode.LOCAL:
            self._log.warning("data_operation_ignored", operation=operation)
            return None
        return cast(MutableSource[T], self._source)

    async def reset(self) -> NavigationOutcome[T]:
        """Return to the first window, dropping every retained item.

        Reloads the first window when ``config.initial_load`` is set.
        """
        if self._rejects("reset"):
            return None

        self._state.reset()
        self._retained.clear()
        self._window_loaded = False
        forget_total = getattr(self._source, "forget_total", None)
        if forget_total is not None:
            forget_total()
        self._state.total_items = self._source.size()
        self._state.items_per_page = self._resolver.resolve()
        self._log.info("controller_reset")

        await self.events.emit(EventType.BOUNDARY, self.snapshot())
        if self.config.initial_load:
            return await self.start()
        return None

    async def refresh(self) -> NavigationOutcome[T]:
        """Recompute totals after the collection changed.

        Paged presentations reload the (re-clamped) current page; incremental
        presentation only refreshes its boundary flags.
        """
        if self._rejects("refresh"):
            return None

        state = self._state
        if self._source.mode is SourceMode.LOCAL:
            state.total_items = self._source.size()
        if state.total_items is not None:
            state.current_index = min(state.current_index, state.total_items)

        page_size = self._resolver.resolve()
        target = state.clamp_page(state.current_page, page_size)
        if self.config.paged and self._window_loaded:
            return await self._go_to_page(target, force=True)

        state.items_per_page = page_size
        state.current_page = target
        return await self._boundary(state.direction)

    async def destroy(self) -> None:
        """Unbind every listener. Safe to call more than once.

        An in-flight load is not cancelled; its response is discarded. In
        hide retention mode all hidden items are revealed first.
        """
        if self._destroyed:
            return
        self._destroyed = True

        revealed: list[int] = []
        if self.config.retention_mode is RetentionMode.HIDE:
            revealed = self._retained.reveal_all()
        await self.events.emit(EventType.DESTROYED, revealed)
        self.events.clear()
        self._history = None
        self._log.info("controller_destroyed", revealed=len(revealed))
