"""History collaborator protocol.

The controller never reads or writes URLs. When ``update_history`` is set it
reports every applied, non-no-op navigation to a history sink, and it may
ask the sink once for an initial page seed.
"""

from typing import Protocol, runtime_checkable


class HistorySink(Protocol):
    """Receives the page after every successful navigation."""

    def on_navigation_applied(self, page: int) -> None:
        """Record that ``page`` is now current."""
        ...


@runtime_checkable
class SeedingHistorySink(HistorySink, Protocol):
    """A history sink that can also seed the first page to load."""

    def initial_page(self) -> int | None:
        """Page encoded in the current location, or None."""
        ...
