"""Numbered pagination with ellipsis markers.

Shows at most ``visible_pages`` consecutive page links around the current
page, plus links to the first and last page separated by ellipses when the
window does not reach them, and previous/next links at both ends.

For 12 pages, 5 visible and page 6 current::

    «  1  ...  4  5  [6]  7  8  ...  12  »

When ``visible_pages`` is even the extra link goes after the current page.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from loadmore.core.controller import NavigationController, NavigationOutcome
from loadmore.core.logging import get_logger
from loadmore.core.results import LoadResult, WindowSnapshot
from loadmore.core.throttle import Throttle
from loadmore.presentation.base import (
    ContentPatch,
    DisplaySink,
    Presenter,
    PresenterTexts,
)

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class LinkKind(Enum):
    PREVIOUS = "prev"
    NEXT = "next"
    PAGE = "page"
    ELLIPSIS = "ellipsis"


@dataclass(frozen=True)
class PageLink:
    """One entry of the pagination bar."""

    kind: LinkKind
    label: str
    page: int | None = None
    active: bool = False
    disabled: bool = False
    aria_label: str | None = None


@dataclass(frozen=True)
class NumberedView:
    links: list[PageLink]
    busy: bool = False


def visible_page_range(current: int, total: int, visible: int) -> tuple[int, int]:
    """First and last page number of the link window, inclusive."""
    if total <= visible:
        return 1, total

    before = (visible - 1) // 2
    after = visible - 1 - before
    start = current - before
    end = current + after
    if start < 1:
        start, end = 1, visible
    elif end > total:
        start, end = total - visible + 1, total
    return start, end


def build_page_links(
    current: int,
    total: int,
    visible: int,
    texts: PresenterTexts | None = None,
    busy: bool = False,
) -> list[PageLink]:
    """Links for the pagination bar, previous and next included."""
    texts = texts or PresenterTexts()
    start, end = visible_page_range(current, total, visible)

    links = [
        PageLink(
            LinkKind.PREVIOUS,
            texts.previous_symbol,
            disabled=busy or current <= 1,
            aria_label=texts.previous_page,
        )
    ]

    if start > 1:
        links.append(_page_link(1, current, busy))
        if start > 2:
            links.append(PageLink(LinkKind.ELLIPSIS, texts.ellipsis, disabled=True))

    links.extend(_page_link(page, current, busy) for page in range(start, end + 1))

    if end < total:
        if end < total - 1:
            links.append(PageLink(LinkKind.ELLIPSIS, texts.ellipsis, disabled=True))
        links.append(_page_link(total, current, busy))

    links.append(
        PageLink(
            LinkKind.NEXT,
            texts.next_symbol,
            disabled=busy or current >= total,
            aria_label=texts.next_page,
        )
    )
    return links


def _page_link(page: int, current: int, busy: bool) -> PageLink:
    return PageLink(
        LinkKind.PAGE,
        str(page),
        page=page,
        active=page == current,
        disabled=busy,
        aria_label=f"Page {page}",
    )


class NumberedPresenter(Presenter[T, R]):
    """Page-number bar; each click replaces the visible page.

    Clicks closer together than ``config.click_interval`` are dropped.
    """

    def __init__(
        self,
        controller: NavigationController[T],
        render_template: Callable[[T], R],
        sink: DisplaySink[R],
        texts: PresenterTexts | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._throttle = Throttle(controller.config.click_interval, clock)
        super().__init__(controller, render_template, sink, texts)

    async def click(self, target: int | str) -> NavigationOutcome[T]:
        """Handle a click on a link: a page number, ``"prev"`` or ``"next"``."""
        if not self._throttle.acquire():
            logger.debug("page_click_throttled", target=target)
            return None

        current = self.controller.current_page
        if target == LinkKind.PREVIOUS.value:
            if current <= 1:
                return None
            return await self.controller.go_to_page(current - 1)
        if target == LinkKind.NEXT.value:
            if current >= self.controller.total_pages:
                return None
            return await self.controller.go_to_page(current + 1)
        if isinstance(target, int) and not isinstance(target, bool):
            return await self.controller.go_to_page(target)

        logger.warning("page_click_unknown_target", target=target)
        return None

    def build_view(self, snapshot: WindowSnapshot, loading: bool) -> NumberedView:
        links = build_page_links(
            snapshot.current_page,
            snapshot.total_pages,
            self.controller.config.visible_pages,
            self.texts,
            busy=loading,
        )
        return NumberedView(links=links, busy=loading)

    def build_patch(self, result: LoadResult[T]) -> ContentPatch[R]:
        return self.replace_patch(result)
