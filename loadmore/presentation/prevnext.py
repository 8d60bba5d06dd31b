"""Previous / next page presentation without page numbers."""

from dataclasses import dataclass
from typing import TypeVar

from loadmore.core.controller import NavigationOutcome
from loadmore.core.results import LoadResult, WindowSnapshot
from loadmore.presentation.base import ContentPatch, ControlState, Presenter

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class PrevNextView:
    previous: ControlState
    next: ControlState


class PrevNextPresenter(Presenter[T, R]):
    """Two buttons that step one whole page at a time."""

    async def previous(self) -> NavigationOutcome[T]:
        if self.controller.current_page <= 1:
            return None
        return await self.controller.go_to_page(self.controller.current_page - 1)

    async def next(self) -> NavigationOutcome[T]:
        if self.controller.current_page >= self.controller.total_pages:
            return None
        return await self.controller.go_to_page(self.controller.current_page + 1)

    def build_view(self, snapshot: WindowSnapshot, loading: bool) -> PrevNextView:
        texts = self.texts
        return PrevNextView(
            previous=ControlState(
                label=texts.previous_page,
                disabled=loading or not snapshot.has_previous_page,
                busy=loading,
                aria_label="Previous page",
            ),
            next=ControlState(
                label=texts.next_page,
                disabled=loading or not snapshot.has_next_page,
                busy=loading,
                aria_label="Next page",
            ),
        )

    def build_patch(self, result: LoadResult[T]) -> ContentPatch[R]:
        return self.replace_patch(result)
