"""Window state and index arithmetic - platform agnostic."""

import math
from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Direction of travel for a navigation request."""

    NEXT = "next"
    PREVIOUS = "previous"


@dataclass(frozen=True)
class IndexRange:
    """Half-open range ``[start, end)`` of absolute item indices."""

    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    def __len__(self) -> int:
        return max(0, self.end - self.start)

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index < self.end


def count_pages(total_items: int | None, items_per_page: int) -> int:
    """Number of pages for a collection, never less than one."""
    if not total_items or total_items <= 0:
        return 1
    return max(1, math.ceil(total_items / items_per_page))


@dataclass
class WindowState:
    """Logical position of the controller within the collection.

    ``total_items`` is None until the first remote page arrives.
    """

    current_index: int = 0
    current_page: int = 1
    items_per_page: int = 10
    total_items: int | None = None
    direction: Direction = Direction.NEXT

    @property
    def total_pages(self) -> int:
        return count_pages(self.total_items, self.items_per_page)

    @property
    def can_load_more(self) -> bool:
        if self.total_items is None:
            return True
        return self.current_index < self.total_items

    @property
    def can_load_previous(self) -> bool:
        return self.current_index > 0

    @property
    def has_next_page(self) -> bool:
        if self.total_items is None:
            return True
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    def compute_range(
        self,
        direction: Direction,
        items_per_page: int,
        collection_size: int | None,
    ) -> IndexRange:
        """Range to load for a step in ``direction`` from the cursor.

        Returns an empty range at either boundary. An unknown collection
        size never limits a forward step.
        """
        if direction is Direction.NEXT:
            start = self.current_index
            end = start + items_per_page
            if collection_size is not None:
                if start >= collection_size:
                    return IndexRange(start, start)
                end = min(end, collection_size)
            return IndexRange(start, end)

        end = self.current_index
        start = max(0, end - items_per_page)
        if start <= 0 and self.current_index <= 0:
            return IndexRange(0, 0)
        return IndexRange(start, end)

    def step_page(self, direction: Direction, items_per_page: int) -> int | None:
        """Page-aligned equivalent of ``compute_range`` for paged sources.

        Returns None when the step would cross a boundary.
        """
        if direction is Direction.NEXT:
            if not self.can_load_more:
                return None
            return self.current_index // items_per_page + 1
        if self.current_index <= 0:
            return None
        return (self.current_index - 1) // items_per_page + 1

    def clamp_page(self, page: int, items_per_page: int) -> int:
        """Clamp ``page`` into ``[1, total_pages]`` for ``items_per_page``.

        Only the lower bound applies while the total is unknown.
        """
        page = max(1, page)
        if self.total_items is None:
            return page
        return min(page, count_pages(self.total_items, items_per_page))

    def page_range(self, page: int, items_per_page: int) -> IndexRange:
        start = (page - 1) * items_per_page
        end = start + items_per_page
        if self.total_items is not None:
            end = min(end, self.total_items)
            start = min(start, end)
        return IndexRange(start, end)

    def reset(self) -> None:
        self.current_index = 0
        self.current_page = 1
        self.direction = Direction.NEXT
