"""Leading-edge throttle on virtual time."""
from __future__ import annotations

from typing import Any, Callable

from pulse.timers import TimerScope


class Throttle:
    """Run the first call in each ``limit_ms`` window and drop the rest."""

    def __init__(
        self, timers: TimerScope, limit_ms: float, fn: Callable[..., None]
    ) -> None:
        if limit_ms <= 0:
            raise ValueError(f"limit_ms must be positive, got {limit_ms}")
        self._timers = timers
        self._limit = limit_ms
        self._fn = fn
        self._in_window = False

    @property
    def in_window(self) -> bool:
        return self._in_window

    def __call__(self, *args: Any, **kwargs: Any) -> bool:
        """Returns True when the call went through."""
        if self._in_window:
            return False
        self._fn(*args, **kwargs)
        self._in_window = True
        self._timers.set_timeout(self._limit, self._release)
        return True

    def _release(self) -> None:
        self._in_window = False
