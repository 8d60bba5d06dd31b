"""Incremental "load more" presentation.

Forward loads are appended after the items already shown, backward loads
are prepended before them. The forward control is disabled once the
collection is exhausted, the backward control once the cursor is back at
the first item.
"""

from dataclasses import dataclass
from typing import TypeVar

from loadmore.core.controller import NavigationOutcome
from loadmore.core.results import LoadResult, WindowSnapshot
from loadmore.core.window import Direction
from loadmore.presentation.base import ContentPatch, ControlState, Placement, Presenter

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class IncrementalView:
    load_more: ControlState
    load_previous: ControlState


class IncrementalPresenter(Presenter[T, R]):
    """Load-more / load-previous buttons over an append-only list."""

    async def load_more(self) -> NavigationOutcome[T]:
        return await self.controller.next()

    async def load_previous(self) -> NavigationOutcome[T]:
        return await self.controller.previous()

    def build_view(self, snapshot: WindowSnapshot, loading: bool) -> IncrementalView:
        texts = self.texts
        more_exhausted = not snapshot.can_load_more
        previous_exhausted = snapshot.current_index <= 0

        return IncrementalView(
            load_more=ControlState(
                label=texts.loading if loading
                else texts.no_more if more_exhausted
                else texts.load_more,
                disabled=loading or more_exhausted,
                busy=loading,
                aria_label="Load more items",
            ),
            load_previous=ControlState(
                label=texts.loading if loading
                else texts.no_more if previous_exhausted
                else texts.load_previous,
                disabled=loading or previous_exhausted,
                busy=loading,
                aria_label="Load previous items",
            ),
        )

    def build_patch(self, result: LoadResult[T]) -> ContentPatch[R]:
        removed, hidden = self.split_evicted(result)
        placement = (
            Placement.APPEND if result.direction is Direction.NEXT else Placement.PREPEND
        )
        # Items the host still holds are revealed, never inserted twice
        held = set(result.already_shown) | set(result.unhidden)
        return ContentPatch(
            placement=placement,
            rendered=[pair for pair in self.render(result) if pair[0] not in held],
            removed=removed,
            hidden=hidden,
            revealed=list(result.unhidden),
        )
