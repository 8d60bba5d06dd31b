"""Shared pytest fixtures for loadmore tests."""

import pytest

from loadmore.adapters.local_source import LocalContentSource
from loadmore.adapters.remote_source import RemoteContentSource
from loadmore.core.config import LoadMoreConfig, PresentationType, SourceMode
from loadmore.core.controller import NavigationController
from tests.mocks.collaborators import FakeFetcher, RecordingHistory, RecordingSink


@pytest.fixture
def items() -> list[str]:
    """Provide a 25-item collection.

    Returns:
        list[str]: ``["item-0", ..., "item-24"]``.
    """
    return [f"item-{i}" for i in range(25)]


@pytest.fixture
def local_controller(items: list[str]) -> NavigationController[str]:
    """Provide an incremental controller over the local 25-item collection."""
    config = LoadMoreConfig(items_per_page=10)
    return NavigationController(config, LocalContentSource(items))


@pytest.fixture
def paged_controller(items: list[str]) -> NavigationController[str]:
    """Provide a numbered-pagination controller over the local collection."""
    config = LoadMoreConfig(
        items_per_page=10, presentation_type=PresentationType.NUMBERED
    )
    return NavigationController(config, LocalContentSource(items))


@pytest.fixture
def fake_fetcher(items: list[str]) -> FakeFetcher:
    """Provide a fetcher serving the 25-item collection.

    For tests requiring a different collection or response keys, create the
    fetcher directly.

    Example:
        def test_custom_collection():
            fetcher = FakeFetcher(items=list(range(8)))
    """
    return FakeFetcher(items=items)


@pytest.fixture
def remote_controller(fake_fetcher: FakeFetcher) -> NavigationController[str]:
    """Provide an incremental controller over the fake remote endpoint."""
    config = LoadMoreConfig(mode=SourceMode.REMOTE, items_per_page=10)
    return NavigationController(config, RemoteContentSource(fake_fetcher))


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def recording_history() -> RecordingHistory:
    return RecordingHistory()
