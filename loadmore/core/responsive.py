"""Responsive page sizing from a breakpoint table."""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Breakpoint:
    """A named minimum viewport width."""

    name: str
    min_width: int


# Ordered widest first; the first threshold the width reaches wins.
DEFAULT_BREAKPOINTS: tuple[Breakpoint, ...] = (
    Breakpoint("xl", 1200),
    Breakpoint("lg", 992),
    Breakpoint("md", 768),
    Breakpoint("sm", 576),
    Breakpoint("xs", 0),
)


def breakpoint_for(
    width: int, breakpoints: Sequence[Breakpoint] = DEFAULT_BREAKPOINTS
) -> str:
    """Return the name of the breakpoint a viewport width falls into."""
    for bp in breakpoints:
        if width >= bp.min_width:
            return bp.name
    return breakpoints[-1].name


class ItemsPerPageResolver:
    """Resolves the page size for the current viewport.

    The viewport width is read on every call, never cached, so a resize
    between two navigations changes the size of the next page.
    """

    def __init__(
        self,
        default: int,
        responsive: Mapping[str, int] | None = None,
        viewport_width: Callable[[], int] | None = None,
        breakpoints: Sequence[Breakpoint] = DEFAULT_BREAKPOINTS,
    ) -> None:
        self._default = default
        self._responsive = dict(responsive or {})
        self._viewport_width = viewport_width
        self._breakpoints = tuple(breakpoints)

    @property
    def is_responsive(self) -> bool:
        return bool(self._responsive) and self._viewport_width is not None

    def resolve(self) -> int:
        if not self.is_responsive:
            return self._default
        assert self._viewport_width is not None
        name = breakpoint_for(self._viewport_width(), self._breakpoints)
        return self._responsive.get(name) or self._default
