"""Core pagination logic.

This module contains the host-agnostic window arithmetic, eviction
policies, the single-flight navigation controller and its event types.
"""

from loadmore.core.config import (
    LoadMoreConfig,
    PresentationType,
    RetentionMode,
    SourceMode,
)
from loadmore.core.controller import ControllerState, NavigationController
from loadmore.core.errors import (
    ConfigurationError,
    ErrorCategory,
    FetchError,
    LoadMoreError,
    TransportError,
    classify_error,
    is_retryable,
)
from loadmore.core.events import EventBus, EventType
from loadmore.core.eviction import (
    RetainedItem,
    RetainedSet,
    centered_trim,
    directional_trim,
)
from loadmore.core.logging import (
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    current_context,
    get_logger,
    widget_context,
)
from loadmore.core.responsive import (
    DEFAULT_BREAKPOINTS,
    Breakpoint,
    ItemsPerPageResolver,
    breakpoint_for,
)
from loadmore.core.results import BeforeLoad, LoadFailure, LoadResult, WindowSnapshot
from loadmore.core.throttle import Throttle, ThrottleResult
from loadmore.core.window import Direction, IndexRange, WindowState, count_pages

__all__ = [
    # Configuration
    "LoadMoreConfig",
    "PresentationType",
    "RetentionMode",
    "SourceMode",
    # Controller
    "ControllerState",
    "NavigationController",
    # Errors
    "ConfigurationError",
    "ErrorCategory",
    "FetchError",
    "LoadMoreError",
    "TransportError",
    "classify_error",
    "is_retryable",
    # Events and results
    "BeforeLoad",
    "EventBus",
    "EventType",
    "LoadFailure",
    "LoadResult",
    "WindowSnapshot",
    # Eviction
    "RetainedItem",
    "RetainedSet",
    "centered_trim",
    "directional_trim",
    # Logging
    "bind_contextvars",
    "clear_contextvars",
    "configure_logging",
    "current_context",
    "get_logger",
    "widget_context",
    # Responsive sizing
    "DEFAULT_BREAKPOINTS",
    "Breakpoint",
    "ItemsPerPageResolver",
    "breakpoint_for",
    # Throttling
    "Throttle",
    "ThrottleResult",
    # Window arithmetic
    "Direction",
    "IndexRange",
    "WindowState",
    "count_pages",
]
