"""Windowed pagination for long item collections.

A ``NavigationController`` shows a collection a page at a time, loading
items from memory or a remote endpoint, keeping a bounded number of them
retained, and emitting lifecycle events that presenters turn into
display directives.
"""

from loadmore.core import (
    ConfigurationError,
    Direction,
    EventType,
    LoadFailure,
    LoadMoreConfig,
    LoadMoreError,
    LoadResult,
    NavigationController,
    PresentationType,
    RetentionMode,
    SourceMode,
    TransportError,
    WindowSnapshot,
    configure_logging,
    widget_context,
)
from loadmore.adapters import (
    HttpPageFetcher,
    LocalContentSource,
    QueryStringHistory,
    RemoteContentSource,
    create_controller,
)
from loadmore.presentation import create_presenter

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Direction",
    "EventType",
    "HttpPageFetcher",
    "LoadFailure",
    "LoadMoreConfig",
    "LoadMoreError",
    "LoadResult",
    "LocalContentSource",
    "NavigationController",
    "PresentationType",
    "QueryStringHistory",
    "RemoteContentSource",
    "RetentionMode",
    "SourceMode",
    "TransportError",
    "WindowSnapshot",
    "configure_logging",
    "create_controller",
    "create_presenter",
    "widget_context",
    "__version__",
]
