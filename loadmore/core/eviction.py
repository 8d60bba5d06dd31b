"""Retained item bookkeeping and eviction policies.

The retained set is the ordered collection of items currently materialized
by the host, each tagged with its absolute index in the collection. Two
policies decide which entries to evict after a load:

- ``directional_trim`` drops the overflow from the end opposite to the
  direction of travel. Used by incremental (append/prepend) navigation.
- ``centered_trim`` keeps a symmetric buffer of ``max_retained // 2``
  indices around the loaded window. Used by page navigation.

Neither policy ever evicts an index inside the just-loaded range, even when
that range alone exceeds ``max_retained``.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from loadmore.core.window import Direction, IndexRange

T = TypeVar("T")


@dataclass
class RetainedItem(Generic[T]):
    """A materialized item and its absolute index."""

    index: int
    item: T
    hidden: bool = False


class RetainedSet(Generic[T]):
    """Materialized items keyed by absolute index.

    Hidden entries stay addressable but do not count toward ``len()``.
    """

    def __init__(self) -> None:
        self._entries: dict[int, RetainedItem[T]] = {}

    def __len__(self) -> int:
        return sum(1 for entry in self._entries.values() if not entry.hidden)

    def __contains__(self, index: object) -> bool:
        entry = self._entries.get(index) if isinstance(index, int) else None
        return entry is not None and not entry.hidden

    def __iter__(self) -> Iterator[RetainedItem[T]]:
        for index in sorted(self._entries):
            entry = self._entries[index]
            if not entry.hidden:
                yield entry

    def put(self, start: int, items: Sequence[T]) -> IndexRange:
        """Place ``items`` at consecutive indices starting at ``start``.

        Existing entries at those indices are replaced and unhidden.
        """
        for offset, item in enumerate(items):
            self._entries[start + offset] = RetainedItem(start + offset, item)
        return IndexRange(start, start + len(items))

    def held(self, window: IndexRange) -> tuple[list[int], list[int]]:
        """Indices of ``window`` already materialized, as ``(shown, hidden)``."""
        shown: list[int] = []
        hidden: list[int] = []
        for index in range(window.start, window.end):
            entry = self._entries.get(index)
            if entry is not None:
                (hidden if entry.hidden else shown).append(index)
        return shown, hidden

    def indices(self) -> list[int]:
        return [entry.index for entry in self]

    def items(self) -> list[T]:
        return [entry.item for entry in self]

    def hidden_indices(self) -> list[int]:
        return sorted(i for i, entry in self._entries.items() if entry.hidden)

    def get(self, index: int) -> T | None:
        entry = self._entries.get(index)
        return entry.item if entry is not None else None

    def remove(self, indices: Iterable[int]) -> None:
        for index in indices:
            self._entries.pop(index, None)

    def hide(self, indices: Iterable[int]) -> None:
        for index in indices:
            entry = self._entries.get(index)
            if entry is not None:
                entry.hidden = True

    def reveal_all(self) -> list[int]:
        """Unhide every hidden entry, returning the indices revealed."""
        revealed = self.hidden_indices()
        for index in revealed:
            self._entries[index].hidden = False
        return revealed

    def shift(self, offset: int) -> None:
        """Move every entry by ``offset`` after items were prepended upstream."""
        shifted: dict[int, RetainedItem[T]] = {}
        for index, entry in self._entries.items():
            entry.index = index + offset
            shifted[entry.index] = entry
        self._entries = shifted

    def clear(self) -> None:
        self._entries.clear()


def directional_trim(
    retained: Sequence[int],
    loaded: IndexRange,
    direction: Direction,
    max_retained: int,
) -> list[int]:
    """Indices to evict after an append (NEXT) or prepend (PREVIOUS).

    Args:
        retained: Sorted indices currently retained, loaded range included.
        loaded: The range that was just loaded.
        direction: Direction of travel of the load.
        max_retained: Upper bound on retained items.

    Returns:
        Indices to evict, in the order they were chosen.
    """
    excess = len(retained) - max_retained
    if excess <= 0:
        return []

    # Forward travel evicts from the head, backward from the tail
    candidates = retained if direction is Direction.NEXT else reversed(retained)
    evicted: list[int] = []
    for index in candidates:
        if len(evicted) >= excess:
            break
        if index in loaded:
            continue
        evicted.append(index)
    return evicted


def centered_trim(
    retained: Sequence[int],
    loaded: IndexRange,
    max_retained: int,
) -> list[int]:
    """Indices to evict after a page jump to ``loaded``.

    Everything outside ``[start - buffer, end + buffer]`` goes first. If the
    survivors still exceed ``max_retained``, the ones farthest from the
    loaded range follow.
    """
    buffer = max_retained // 2
    first_to_keep = loaded.start - buffer
    last_to_keep = loaded.end + buffer

    evicted = [i for i in retained if i < first_to_keep or i > last_to_keep]
    survivors = [i for i in retained if first_to_keep <= i <= last_to_keep]

    excess = len(survivors) - max_retained
    if excess > 0:
        outside = [i for i in survivors if i not in loaded]
        outside.sort(key=lambda i: _distance(i, loaded), reverse=True)
        evicted.extend(outside[:excess])
    return evicted


def _distance(index: int, window: IndexRange) -> int:
    if index < window.start:
        return window.start - index
    return index - (window.end - 1)
