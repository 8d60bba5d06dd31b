"""Presentation adapters.

Presenters translate controller events into display directives for a host
binding. One presenter exists per ``PresentationType``:

- ``IncrementalPresenter``: load-more / load-previous buttons
- ``NumberedPresenter``: numbered page links with ellipses
- ``PrevNextPresenter``: previous / next page buttons
"""

import time
from collections.abc import Callable
from typing import Any

from loadmore.core.config import PresentationType
from loadmore.core.controller import NavigationController
from loadmore.presentation.base import (
    ContentPatch,
    ControlState,
    DisplaySink,
    Placement,
    Presenter,
    PresenterTexts,
)
from loadmore.presentation.incremental import IncrementalPresenter, IncrementalView
from loadmore.presentation.numbered import (
    LinkKind,
    NumberedPresenter,
    NumberedView,
    PageLink,
    build_page_links,
    visible_page_range,
)
from loadmore.presentation.prevnext import PrevNextPresenter, PrevNextView


def create_presenter(
    controller: NavigationController[Any],
    render_template: Callable[[Any], Any],
    sink: DisplaySink[Any],
    texts: PresenterTexts | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> Presenter[Any, Any]:
    """Create the presenter for ``controller.config.presentation_type``."""
    presentation_type = controller.config.presentation_type
    if presentation_type is PresentationType.NUMBERED:
        return NumberedPresenter(controller, render_template, sink, texts, clock=clock)
    if presentation_type is PresentationType.PREV_NEXT:
        return PrevNextPresenter(controller, render_template, sink, texts)
    return IncrementalPresenter(controller, render_template, sink, texts)


__all__ = [
    "ContentPatch",
    "ControlState",
    "DisplaySink",
    "IncrementalPresenter",
    "IncrementalView",
    "LinkKind",
    "NumberedPresenter",
    "NumberedView",
    "PageLink",
    "Placement",
    "PrevNextPresenter",
    "PrevNextView",
    "Presenter",
    "PresenterTexts",
    "build_page_links",
    "create_presenter",
    "visible_page_range",
]
