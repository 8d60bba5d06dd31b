"""In-memory content source."""

import asyncio
from collections.abc import Iterable, Sequence
from typing import Generic, TypeVar

from loadmore.core.config import SourceMode
from loadmore.core.logging import get_logger
from loadmore.ports.sources import PageRequest, PageResult

logger = get_logger(__name__)

T = TypeVar("T")


class LocalContentSource(Generic[T]):
    """Serves windows of an in-memory ordered sequence.

    Loads never fail. Each load completes after a scheduling yield of
    ``delay`` seconds so callers always observe the loading state.
    """

    def __init__(self, data: Iterable[T] = (), delay: float = 0.0) -> None:
        self._data: list[T] = list(data)
        self._delay = delay

    @property
    def mode(self) -> SourceMode:
        return SourceMode.LOCAL

    @property
    def data(self) -> list[T]:
        return self._data

    def size(self) -> int:
        return len(self._data)

    async def load(self, request: PageRequest) -> PageResult[T]:
        await asyncio.sleep(self._delay)
        items = self._data[request.start_index : request.end_index]
        logger.debug(
            "local_window_sliced",
            start=request.start_index,
            end=request.end_index,
            count=len(items),
        )
        return PageResult(items=items, total=len(self._data))

    def append(self, items: Sequence[T]) -> None:
        self._data.extend(items)

    def prepend(self, items: Sequence[T]) -> None:
        self._data[:0] = list(items)

    def replace(self, items: Sequence[T]) -> None:
        self._data = list(items)
