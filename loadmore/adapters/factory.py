"""Factory functions wiring a content source to a navigation controller.

Supported modes:
- ``SourceMode.LOCAL``: items come from an in-memory sequence (``data``)
- ``SourceMode.REMOTE``: items come from a fetch callable (``fetch``) or an
  HTTP endpoint (``url``)

Example:
    # Local data, incremental presentation
    controller = create_controller(LoadMoreConfig(), data=articles)

    # Remote endpoint, numbered pagination
    controller = create_controller(
        LoadMoreConfig(
            mode=SourceMode.REMOTE,
            presentation_type=PresentationType.NUMBERED,
        ),
        url="https://example.com/api/articles",
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Union

from loadmore.adapters.http_fetcher import HttpPageFetcher
from loadmore.adapters.local_source import LocalContentSource
from loadmore.adapters.remote_source import RemoteContentSource
from loadmore.core.config import LoadMoreConfig, SourceMode
from loadmore.core.controller import NavigationController
from loadmore.core.errors import ConfigurationError
from loadmore.core.logging import get_logger
from loadmore.ports.history import HistorySink
from loadmore.ports.sources import PageFetcher

logger = get_logger(__name__)

SourceType = Union[LocalContentSource[Any], RemoteContentSource[Any]]


def create_source(
    config: LoadMoreConfig,
    *,
    data: Iterable[Any] | None = None,
    fetch: PageFetcher | None = None,
    url: str | None = None,
    **fetch_options: Any,
) -> SourceType:
    """Create the content source matching ``config.mode``.

    Args:
        config: Widget configuration.
        data: Items for local mode.
        fetch: Fetch collaborator for remote mode.
        url: Endpoint for remote mode when no ``fetch`` is given; an
            ``HttpPageFetcher`` is built from it and ``fetch_options``.
        **fetch_options: Extra ``HttpPageFetcher`` arguments (``method``,
            ``page_param``, ``per_page_param``, ``timeout``, ``headers``).

    Raises:
        ConfigurationError: If the collaborators do not match the mode.
    """
    if config.mode is SourceMode.LOCAL:
        if fetch is not None or url is not None:
            raise ConfigurationError(
                "Local mode takes 'data', not 'fetch' or 'url'", option="mode"
            )
        if data is None:
            raise ConfigurationError("'data' is required for local mode", option="data")
        return LocalContentSource(data, delay=config.local_delay)

    if data is not None:
        raise ConfigurationError("Remote mode does not take 'data'", option="mode")
    if fetch is None:
        if url is None:
            raise ConfigurationError(
                "Remote mode requires 'fetch' or 'url'", option="fetch"
            )
        fetch = HttpPageFetcher(url, **fetch_options)
    elif fetch_options:
        raise ConfigurationError(
            f"HTTP options {sorted(fetch_options)} need 'url', not 'fetch'",
            option="fetch",
        )
    return RemoteContentSource(
        fetch,
        static_params=config.static_params,
        data_key=config.data_key,
        total_key=config.total_key,
    )


def create_controller(
    config: LoadMoreConfig | None = None,
    *,
    data: Iterable[Any] | None = None,
    fetch: PageFetcher | None = None,
    url: str | None = None,
    history: HistorySink | None = None,
    viewport_width: Callable[[], int] | None = None,
    **fetch_options: Any,
) -> NavigationController[Any]:
    """Build a navigation controller and its content source.

    Raises:
        ConfigurationError: If the options are invalid or inconsistent.
    """
    config = config or LoadMoreConfig()
    source = create_source(config, data=data, fetch=fetch, url=url, **fetch_options)
    if config.update_history and history is None:
        logger.warning("history_sink_missing", history_key=config.history_key)
    return NavigationController(
        config, source, history=history, viewport_width=viewport_width
    )
