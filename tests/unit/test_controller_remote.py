"""Tests for navigation over a remote paged source."""

import asyncio

import pytest

from loadmore.adapters.remote_source import RemoteContentSource
from loadmore.core.config import LoadMoreConfig, PresentationType, SourceMode
from loadmore.core.controller import ControllerState, NavigationController
from loadmore.core.errors import ErrorCategory, FetchError
from loadmore.core.events import EventType
from loadmore.core.results import LoadFailure, LoadResult
from loadmore.core.window import Direction
from tests.mocks.collaborators import EventRecorder, FakeFetcher


def _controller(fetcher: FakeFetcher, **options) -> NavigationController[int]:
    config = LoadMoreConfig(mode=SourceMode.REMOTE, **options)
    return NavigationController(config, RemoteContentSource(fetcher))


class TestRemoteNext:
    @pytest.mark.asyncio
    async def test_total_learned_from_first_response(self, remote_controller):
        assert remote_controller.state.total_items is None
        assert remote_controller.snapshot().can_load_more

        result = await remote_controller.next()

        assert result.items == [f"item-{i}" for i in range(10)]
        assert remote_controller.total_items == 25
        assert remote_controller.total_pages == 3
        assert remote_controller.current_index == 10

    @pytest.mark.asyncio
    async def test_requests_consecutive_pages(self, remote_controller, fake_fetcher):
        for _ in range(3):
            await remote_controller.next()

        result = await remote_controller.next()

        assert result.noop
        assert fake_fetcher.pages == [1, 2, 3]
        assert remote_controller.current_index == 25
        assert remote_controller.current_page == 3

    @pytest.mark.asyncio
    async def test_short_collection_is_exhausted_immediately(self):
        fetcher = FakeFetcher(range(8))
        controller = _controller(fetcher, items_per_page=10)

        await controller.next()

        assert controller.total_pages == 1
        assert not controller.snapshot().can_load_more
        assert (await controller.next()).noop
        assert fetcher.call_count == 1

    @pytest.mark.asyncio
    async def test_empty_page_ends_collection(self):
        fetcher = FakeFetcher(range(10), total_override=100)
        controller = _controller(fetcher)
        await controller.next()

        result = await controller.next()

        assert isinstance(result, LoadResult)
        assert result.count == 0
        assert controller.total_items == 10
        assert controller.current_page == 1
        assert not controller.snapshot().can_load_more

    @pytest.mark.asyncio
    async def test_shrinking_total_reclamps_page(self):
        fetcher = FakeFetcher(range(30))
        controller = _controller(fetcher)
        await controller.next()
        fetcher.total_override = 5

        await controller.next()

        assert controller.total_pages == 1
        assert controller.current_page == 1
        assert controller.current_index == 5

    @pytest.mark.asyncio
    async def test_previous_requests_page_before_cursor(
        self, remote_controller, fake_fetcher
    ):
        await remote_controller.next()
        await remote_controller.next()

        result = await remote_controller.previous()

        assert fake_fetcher.pages == [1, 2, 2]
        assert result.direction is Direction.PREVIOUS
        assert remote_controller.current_index == 10


class TestTransportFailure:
    @pytest.mark.asyncio
    async def test_failure_leaves_state_untouched(
        self, remote_controller, fake_fetcher
    ):
        await remote_controller.next()
        fake_fetcher.fail_page(2, FetchError("Request failed", status=503))
        recorder = EventRecorder(remote_controller.events)
        before = remote_controller.snapshot()

        outcome = await remote_controller.next()

        assert isinstance(outcome, LoadFailure)
        assert outcome.page == 2
        assert outcome.direction is Direction.NEXT
        assert outcome.category == ErrorCategory.SERVICE_UNAVAILABLE
        assert outcome.retryable
        assert remote_controller.snapshot() == before
        assert remote_controller.status is ControllerState.IDLE
        assert recorder.types == [
            EventType.BEFORE_LOAD,
            EventType.LOAD_FAILED,
            EventType.AFTER_LOAD,
        ]

    @pytest.mark.asyncio
    async def test_retry_after_failure(self, remote_controller, fake_fetcher):
        await remote_controller.next()
        fake_fetcher.fail_page(2, TimeoutError())
        await remote_controller.next()

        result = await remote_controller.next()

        assert isinstance(result, LoadResult)
        assert result.page == 2
        assert fake_fetcher.pages == [1, 2, 2]

    @pytest.mark.asyncio
    async def test_first_load_failure(self, fake_fetcher):
        fake_fetcher.fail_page(1, ConnectionError("refused"))
        controller = _controller(fake_fetcher)

        outcome = await controller.next()

        assert isinstance(outcome, LoadFailure)
        assert outcome.category == ErrorCategory.NETWORK
        assert controller.state.total_items is None
        assert controller.retained_indices == []


class TestInFlight:
    @pytest.mark.asyncio
    async def test_retry_from_a_failure_listener_is_dropped(self, fake_fetcher):
        fake_fetcher.fail_page(1, ConnectionError("connection reset"))
        controller = _controller(fake_fetcher)
        recorder = EventRecorder(controller.events)
        retries = []

        async def retry(_):
            retries.append(await controller.next())

        controller.events.on(EventType.LOAD_FAILED, retry)

        outcome = await controller.next()

        assert isinstance(outcome, LoadFailure)
        assert retries == [None]
        assert fake_fetcher.call_count == 1
        assert recorder.types == [
            EventType.BEFORE_LOAD,
            EventType.LOAD_FAILED,
            EventType.AFTER_LOAD,
        ]

    @pytest.mark.asyncio
    async def test_requests_during_load_are_dropped(
        self, remote_controller, fake_fetcher
    ):
        recorder = EventRecorder(remote_controller.events)
        gate = fake_fetcher.hold()
        task = asyncio.create_task(remote_controller.next())
        await asyncio.sleep(0)

        assert remote_controller.loading
        assert await remote_controller.next() is None
        assert await remote_controller.previous() is None

        gate.set()
        result = await task

        assert isinstance(result, LoadResult)
        assert fake_fetcher.call_count == 1
        assert recorder.count(EventType.LOADED) == 1
        assert recorder.count(EventType.BEFORE_LOAD) == 1

    @pytest.mark.asyncio
    async def test_late_response_after_destroy_is_discarded(
        self, remote_controller, fake_fetcher
    ):
        gate = fake_fetcher.hold()
        task = asyncio.create_task(remote_controller.next())
        await asyncio.sleep(0)

        await remote_controller.destroy()
        gate.set()

        assert await task is None
        assert remote_controller.retained_indices == []
        assert remote_controller.status is ControllerState.IDLE

    @pytest.mark.asyncio
    async def test_cancelled_load_returns_to_idle(
        self, remote_controller, fake_fetcher
    ):
        fake_fetcher.hold()
        task = asyncio.create_task(remote_controller.next())
        await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert remote_controller.status is ControllerState.IDLE


class TestRemotePaging:
    @pytest.mark.asyncio
    async def test_jump_past_unknown_end_settles_on_last_page(self, fake_fetcher):
        controller = _controller(
            fake_fetcher, presentation_type=PresentationType.NUMBERED
        )

        result = await controller.go_to_page(7)

        assert fake_fetcher.pages == [7, 3]
        assert result.page == 3
        assert result.items == [f"item-{i}" for i in range(20, 25)]
        assert controller.current_page == 3

    @pytest.mark.asyncio
    async def test_reset_forgets_total(self, remote_controller, fake_fetcher):
        await remote_controller.next()
        await remote_controller.next()

        await remote_controller.reset()

        assert fake_fetcher.pages == [1, 2, 1]
        assert remote_controller.current_index == 10
