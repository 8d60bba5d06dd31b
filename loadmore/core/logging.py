"""Structured logging for pagination sessions.

Every module logs through ``get_logger(__name__)``. Events are named after
what happened to the window (``window_loaded``, ``window_load_failed``,
``navigation_dropped``) and carry the page, direction and range as fields.
Enum field values are logged by their wire value, so ``Direction.NEXT``
appears as ``"next"`` in both console and JSON output.

A host embedding several widgets tags each session with ``widget_context``:

    from loadmore.core.logging import configure_logging, widget_context

    configure_logging(development=False)

    with widget_context("news-feed"):
        await controller.start()
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from os import getenv
from typing import IO, Any, cast

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Third-party loggers that are noisy at INFO while pages are being fetched
QUIET_LOGGERS = ("aiohttp", "asyncio")


def _resolve_level(log_level: str | None) -> int:
    if log_level is None:
        log_level = getenv("LOADMORE_LOG_LEVEL") or getenv("LOG_LEVEL", "INFO")
    return logging.getLevelNamesMapping().get(log_level.upper(), logging.INFO)


def _is_development(development: bool | None) -> bool:
    if development is not None:
        return development
    return getenv("LOADMORE_ENV", "development").lower() != "production"


def enum_values(
    _logger: WrappedLogger, _method: str, event_dict: EventDict
) -> EventDict:
    """Replace Enum field values with their ``value``."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def configure_logging(
    development: bool | None = None,
    log_level: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        development: Pretty console output when True, JSON lines when False.
            Defaults to development unless LOADMORE_ENV is "production".
        log_level: Level name. Defaults to LOADMORE_LOG_LEVEL, then
            LOG_LEVEL, then INFO. Unknown names fall back to INFO.
        stream: Destination for rendered lines. Defaults to stdout.
    """
    level = _resolve_level(log_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        enum_values,
        structlog.processors.StackInfoRenderer(),
    ]
    if _is_development(development):
        processors.append(structlog.dev.ConsoleRenderer(colors=stream is None))
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stdout,
        level=level,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structured logger, usually ``get_logger(__name__)``."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


@contextmanager
def widget_context(widget: str, **fields: Any) -> Iterator[None]:
    """Tag every log event inside the block with ``widget`` and ``fields``.

    Bindings made by the caller before entering are restored on exit.
    """
    with structlog.contextvars.bound_contextvars(widget=widget, **fields):
        yield


def bind_contextvars(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_contextvars() -> None:
    structlog.contextvars.clear_contextvars()


def current_context() -> dict[str, Any]:
    """A copy of the fields currently bound for this task."""
    return dict(structlog.contextvars.get_contextvars())
