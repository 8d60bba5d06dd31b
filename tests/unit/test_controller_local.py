"""Tests for incremental navigation over local data."""

import asyncio

import pytest

from loadmore.adapters.local_source import LocalContentSource
from loadmore.adapters.remote_source import RemoteContentSource
from loadmore.core.config import LoadMoreConfig, RetentionMode, SourceMode
from loadmore.core.controller import ControllerState, NavigationController
from loadmore.core.errors import ConfigurationError
from loadmore.core.events import EventType
from loadmore.core.results import LoadResult
from loadmore.core.window import Direction
from tests.mocks.collaborators import EventRecorder, FakeFetcher


def _controller(count: int, **options) -> NavigationController[int]:
    config = LoadMoreConfig(**options)
    return NavigationController(config, LocalContentSource(range(count)))


class TestConstruction:
    def test_initial_state(self, local_controller):
        assert local_controller.status is ControllerState.IDLE
        assert local_controller.current_index == 0
        assert local_controller.current_page == 1
        assert local_controller.total_items == 25
        assert local_controller.total_pages == 3
        assert local_controller.retained_items == []

    def test_source_mode_must_match_config(self):
        with pytest.raises(ConfigurationError) as exc_info:
            NavigationController(
                LoadMoreConfig(mode=SourceMode.REMOTE), LocalContentSource([1])
            )
        assert exc_info.value.option == "mode"

    def test_state_is_a_copy(self, local_controller):
        state = local_controller.state
        state.current_index = 99
        assert local_controller.current_index == 0


class TestNext:
    @pytest.mark.asyncio
    async def test_cursor_advances_by_page_until_end(self, local_controller):
        cursors = []
        for _ in range(3):
            result = await local_controller.next()
            assert isinstance(result, LoadResult)
            cursors.append(local_controller.current_index)

        assert cursors == [10, 20, 25]
        assert local_controller.retained_items == [f"item-{i}" for i in range(25)]

    @pytest.mark.asyncio
    async def test_result_describes_loaded_window(self, local_controller):
        await local_controller.next()
        result = await local_controller.next()

        assert result.items == [f"item-{i}" for i in range(10, 20)]
        assert result.start_index == 10
        assert result.end_index == 20
        assert result.direction is Direction.NEXT
        assert result.total_items == 25
        assert result.page == 2
        assert not result.noop

    @pytest.mark.asyncio
    async def test_next_at_end_is_boundary_noop(self, local_controller):
        recorder = EventRecorder(local_controller.events)
        for _ in range(3):
            await local_controller.next()
        recorder.clear()

        result = await local_controller.next()

        assert result.noop
        assert result.items == []
        assert local_controller.current_index == 25
        assert recorder.types == [EventType.BOUNDARY]
        assert not recorder.payloads(EventType.BOUNDARY)[0].can_load_more

    @pytest.mark.asyncio
    async def test_empty_collection(self):
        controller = _controller(0)
        result = await controller.next()
        assert result.noop
        assert controller.total_pages == 1


class TestPrevious:
    @pytest.mark.asyncio
    async def test_previous_at_start_is_boundary_noop(self, local_controller):
        result = await local_controller.previous()
        assert result.noop
        assert local_controller.current_index == 0

    @pytest.mark.asyncio
    async def test_retraces_to_start(self, local_controller):
        for _ in range(3):
            await local_controller.next()

        cursors = []
        for _ in range(3):
            result = await local_controller.previous()
            assert result.direction is Direction.PREVIOUS
            cursors.append(local_controller.current_index)

        assert cursors == [15, 5, 0]
        final = await local_controller.previous()
        assert final.noop


class TestEvents:
    @pytest.mark.asyncio
    async def test_load_cycle_order(self, local_controller):
        recorder = EventRecorder(local_controller.events)

        await local_controller.next()

        assert recorder.types == [
            EventType.BEFORE_LOAD,
            EventType.LOADED,
            EventType.PAGE_CHANGE,
            EventType.AFTER_LOAD,
        ]
        before = recorder.payloads(EventType.BEFORE_LOAD)[0]
        assert before.direction is Direction.NEXT
        assert before.page == 1
        assert recorder.payloads(EventType.PAGE_CHANGE) == [1]
        after = recorder.payloads(EventType.AFTER_LOAD)[0]
        assert after.current_index == 10
        assert not after.loading

    @pytest.mark.asyncio
    async def test_loading_is_observable(self, local_controller):
        seen = []
        local_controller.events.on(
            EventType.BEFORE_LOAD,
            lambda _: seen.append((local_controller.loading, local_controller.status)),
        )

        await local_controller.next()

        assert seen == [(True, ControllerState.LOADING)]
        assert not local_controller.loading

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_break_navigation(self, local_controller):
        def broken(_):
            raise RuntimeError("listener bug")

        local_controller.events.on(EventType.LOADED, broken)
        recorder = EventRecorder(local_controller.events)

        result = await local_controller.next()

        assert result.count == 10
        assert local_controller.status is ControllerState.IDLE
        assert recorder.types == [
            EventType.BEFORE_LOAD,
            EventType.LOADED,
            EventType.PAGE_CHANGE,
            EventType.AFTER_LOAD,
        ]


class TestSingleFlight:
    @pytest.mark.asyncio
    async def test_concurrent_request_is_dropped(self, local_controller):
        recorder = EventRecorder(local_controller.events)

        first, second = await asyncio.gather(
            local_controller.next(), local_controller.next()
        )

        assert isinstance(first, LoadResult)
        assert second is None
        assert recorder.count(EventType.LOADED) == 1
        assert local_controller.current_index == 10

    @pytest.mark.asyncio
    async def test_every_navigation_kind_is_dropped_while_loading(
        self, local_controller
    ):
        outcomes = []

        async def during_load(_):
            outcomes.append(await local_controller.previous())
            outcomes.append(await local_controller.go_to_page(2))
            outcomes.append(await local_controller.refresh())
            outcomes.append(await local_controller.reset())
            outcomes.append(await local_controller.append_data(["late"]))

        local_controller.events.on(EventType.BEFORE_LOAD, during_load)

        await local_controller.next()

        assert outcomes == [None, None, None, None, None]
        assert local_controller.total_items == 25

    @pytest.mark.asyncio
    async def test_navigation_from_a_loaded_listener_is_dropped(
        self, local_controller
    ):
        recorder = EventRecorder(local_controller.events)
        nested = []

        async def chain(_):
            nested.append(await local_controller.next())

        local_controller.events.on(EventType.LOADED, chain)

        await local_controller.next()

        assert nested == [None]
        assert local_controller.current_index == 10
        assert recorder.types == [
            EventType.BEFORE_LOAD,
            EventType.LOADED,
            EventType.PAGE_CHANGE,
            EventType.AFTER_LOAD,
        ]

    @pytest.mark.asyncio
    async def test_navigation_accepted_once_after_load_has_fired(
        self, local_controller
    ):
        await local_controller.next()

        result = await local_controller.next()

        assert isinstance(result, LoadResult)
        assert local_controller.current_index == 20


class TestEviction:
    @pytest.mark.asyncio
    async def test_six_forward_loads_evict_ten_earliest(self):
        controller = _controller(100, max_retained=50)
        results = [await controller.next() for _ in range(6)]

        assert [r.evicted for r in results[:5]] == [()] * 5
        assert results[5].evicted == tuple(range(10))
        assert controller.retained_indices == list(range(10, 60))
        assert len(controller.retained_items) == 50

    @pytest.mark.asyncio
    async def test_retained_never_exceeds_limit(self):
        controller = _controller(100, items_per_page=7, max_retained=20)
        for _ in range(12):
            await controller.next()
            assert len(controller.retained_indices) <= 20

    @pytest.mark.asyncio
    async def test_backward_travel_evicts_from_tail(self):
        controller = _controller(50, max_retained=20)
        for _ in range(3):
            await controller.next()
        assert controller.retained_indices == list(range(10, 30))

        results = [await controller.previous() for _ in range(3)]

        assert results[-1].evicted == tuple(range(20, 30))
        assert controller.retained_indices == list(range(0, 20))

    @pytest.mark.asyncio
    async def test_page_larger_than_limit_is_kept_whole(self):
        controller = _controller(100, items_per_page=30, max_retained=20)
        result = await controller.next()
        assert result.evicted == ()
        assert len(controller.retained_indices) == 30

    @pytest.mark.asyncio
    async def test_hide_mode_keeps_evicted_items(self):
        controller = _controller(
            100, max_retained=50, retention_mode=RetentionMode.HIDE
        )
        results = [await controller.next() for _ in range(6)]

        assert results[5].retention_mode is RetentionMode.HIDE
        assert controller.hidden_indices == list(range(10))
        assert len(controller.retained_indices) == 50

    @pytest.mark.asyncio
    async def test_optimize_off_retains_everything(self):
        controller = _controller(100, max_retained=50, optimize=False)
        for _ in range(6):
            await controller.next()
        assert len(controller.retained_indices) == 60


class TestDataOperations:
    @pytest.mark.asyncio
    async def test_append_reopens_forward_navigation(self, local_controller):
        for _ in range(3):
            await local_controller.next()

        result = await local_controller.append_data(["extra-0", "extra-1"])

        assert result.noop
        assert local_controller.total_items == 27
        assert local_controller.snapshot().can_load_more

        loaded = await local_controller.next()
        assert loaded.items == ["extra-0", "extra-1"]
        assert local_controller.current_index == 27

    @pytest.mark.asyncio
    async def test_prepend_shifts_retained_items(self, local_controller):
        await local_controller.next()

        await local_controller.prepend_data(["first"])

        assert local_controller.total_items == 26
        assert local_controller.retained_indices == list(range(1, 11))
        assert local_controller.current_index == 11

        loaded = await local_controller.next()
        assert loaded.start_index == 11
        assert loaded.items[0] == "item-10"

    @pytest.mark.asyncio
    async def test_replace_starts_over(self, local_controller):
        await local_controller.next()
        await local_controller.next()

        result = await local_controller.replace_data(["a", "b", "c"])

        assert result.items == ["a", "b", "c"]
        assert local_controller.total_items == 3
        assert local_controller.retained_items == ["a", "b", "c"]
        assert not local_controller.snapshot().can_load_more

    @pytest.mark.asyncio
    async def test_data_operations_ignored_in_remote_mode(self):
        controller = NavigationController(
            LoadMoreConfig(mode=SourceMode.REMOTE),
            RemoteContentSource(FakeFetcher(range(5))),
        )
        assert await controller.append_data([1]) is None
        assert await controller.prepend_data([1]) is None
        assert await controller.replace_data([1]) is None


class TestReset:
    @pytest.mark.asyncio
    async def test_reset_reloads_first_window(self, local_controller):
        await local_controller.next()
        await local_controller.next()

        result = await local_controller.reset()

        assert result.start_index == 0
        assert local_controller.current_index == 10
        assert local_controller.retained_indices == list(range(10))

    @pytest.mark.asyncio
    async def test_reset_without_initial_load(self):
        controller = _controller(25, initial_load=False)
        await controller.next()

        assert await controller.reset() is None
        assert controller.current_index == 0
        assert controller.retained_indices == []


class TestResponsive:
    @pytest.mark.asyncio
    async def test_page_size_follows_viewport(self):
        width = {"value": 320}
        controller = NavigationController(
            LoadMoreConfig(items_per_page=10, responsive_items_per_page={"xs": 2}),
            LocalContentSource(range(25)),
            viewport_width=lambda: width["value"],
        )

        first = await controller.next()
        width["value"] = 1300
        second = await controller.next()

        assert first.count == 2
        assert second.count == 10
        assert controller.current_index == 12


class TestDestroy:
    @pytest.mark.asyncio
    async def test_navigation_after_destroy_is_ignored(self, local_controller):
        await local_controller.destroy()

        assert local_controller.destroyed
        assert await local_controller.next() is None
        assert await local_controller.go_to_page(2) is None
        assert await local_controller.reset() is None

    @pytest.mark.asyncio
    async def test_destroy_is_idempotent(self, local_controller):
        recorder = EventRecorder(local_controller.events)

        await local_controller.destroy()
        await local_controller.destroy()

        assert recorder.types == [EventType.DESTROYED]
        assert local_controller.events.listener_count() == 0

    @pytest.mark.asyncio
    async def test_destroy_reveals_hidden_items(self):
        controller = _controller(
            100, max_retained=50, retention_mode=RetentionMode.HIDE
        )
        for _ in range(6):
            await controller.next()
        revealed = []
        controller.events.on(EventType.DESTROYED, revealed.extend)

        await controller.destroy()

        assert revealed == list(range(10))
        assert controller.hidden_indices == []
