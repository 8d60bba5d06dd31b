"""Minimum-interval throttling for UI controls.

Page-link clicks arriving faster than ``interval`` seconds apart are
dropped, so a double click during a transition cannot submit two
navigations.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass
class ThrottleResult:
    """Result of a throttle check.

    Attributes:
        allowed: Whether the action may run now.
        wait_seconds: Seconds until the next action would be allowed.
    """

    allowed: bool
    wait_seconds: float = 0.0


class Throttle:
    """Accepts at most one action per ``interval`` seconds.

    The first action is always accepted.
    """

    def __init__(
        self, interval: float, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._interval = interval
        self._clock = clock
        self._last: float | None = None

    @property
    def interval(self) -> float:
        return self._interval

    def check(self) -> ThrottleResult:
        """Check whether an action is allowed without recording it."""
        if self._last is None:
            return ThrottleResult(allowed=True)
        elapsed = self._clock() - self._last
        if elapsed >= self._interval:
            return ThrottleResult(allowed=True)
        return ThrottleResult(allowed=False, wait_seconds=self._interval - elapsed)

    def acquire(self) -> bool:
        """Record an action if allowed; return whether it was."""
        if not self.check().allowed:
            return False
        self._last = self._clock()
        return True

    def reset(self) -> None:
        self._last = None
