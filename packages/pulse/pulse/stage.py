"""Stage - virtual-time tick loop, frame pacing and teardown."""

import os
import random
from typing import Any, Callable

from pulse.bus import EventBus
from pulse.clock import Clock
from pulse.observer import IntersectionEntry, ViewportObserver
from pulse.surface import Surface, Viewport
from pulse.timers import TimerRegistry, TimerScope
from pulse.types import ElementId


class Stage:
    def __init__(
        self,
        tps: int = 1000,
        seed: int | None = None,
        frame_ms: float = 1000.0 / 60.0,
        viewport: Viewport | None = None,
    ) -> None:
        if frame_ms <= 0:
            raise ValueError("frame_ms must be positive")
        self._clock = Clock(tps)
        self._surface = Surface(viewport)
        self._timers = TimerRegistry(
            lambda: self._clock.now_ms, min_interval_ms=self._clock.ms_per_tick
        )
        self._events = EventBus()
        self._observers: list[ViewportObserver] = []
        self._teardown_hooks: list[Callable[[], None]] = []
        self._frame_ms = frame_ms
        self._next_frame_ms = 0.0
        self._frame_number = 0

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def timers(self) -> TimerRegistry:
        return self._timers

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def random(self) -> random.Random:
        return self._rng

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def now_ms(self) -> float:
        return self._clock.now_ms

    @property
    def frame_number(self) -> int:
        return self._frame_number

    def scope(self, name: str) -> TimerScope:
        return self._timers.scope(name)

    def observer(
        self,
        callback: Callable[[list[IntersectionEntry]], None],
        threshold: float = 0.0,
        bottom_margin: float = 0.0,
    ) -> ViewportObserver:
        """Create a viewport observer evaluated on every frame."""
        obs = ViewportObserver(self._surface, callback, threshold, bottom_margin)
        self._observers.append(obs)
        return obs

    def remove_observer(self, obs: ViewportObserver) -> None:
        obs.disconnect()
        try:
            self._observers.remove(obs)
        except ValueError:
            pass

    def on_teardown(self, hook: Callable[[], None]) -> None:
        self._teardown_hooks.append(hook)

    # -- Input --

    def pointer_move(self, x: float, y: float) -> None:
        self._events.publish("pointermove", x=x, y=y)

    def pointer_enter(self, element_id: ElementId) -> None:
        self._events.publish("pointerenter", target=element_id)

    def pointer_leave(self, element_id: ElementId) -> None:
        self._events.publish("pointerleave", target=element_id)

    def click(self, element_id: ElementId, x: float = 0.0, y: float = 0.0) -> None:
        self._events.publish("click", target=element_id, x=x, y=y)

    def submit(self, element_id: ElementId) -> None:
        self._events.publish("submit", target=element_id)

    def scroll_to(self, y: float) -> None:
        self._surface.viewport.scroll_y = max(0.0, y)
        self._events.publish("scroll", scroll_y=self._surface.viewport.scroll_y)

    # -- Loop --

    def _tick(self) -> None:
        self._clock.advance()
        now = self._clock.now_ms

        self._events.flush()
        self._timers.fire_due(now)

        if now >= self._next_frame_ms:
            self._frame_number += 1
            self._timers.fire_frames(now)
            for obs in list(self._observers):
                obs.evaluate()
            while self._next_frame_ms <= now:
                self._next_frame_ms += self._frame_ms

    def step(self) -> None:
        self._tick()

    def advance(self, ms: float) -> None:
        """Run as many ticks as cover ``ms`` of virtual time."""
        for _ in range(self._clock.ticks_for(ms)):
            self._tick()

    def teardown(self) -> None:
        """Cancel every timer, observer and queued event so the stage can be reused."""
        for hook in self._teardown_hooks:
            hook()
        self._teardown_hooks.clear()
        for obs in self._observers:
            obs.disconnect()
        self._observers.clear()
        self._timers.clear()
        self._events.clear()

    def snapshot(self) -> dict[str, Any]:
        return {
            "tick_number": self._clock.tick_number,
            "now_ms": self._clock.now_ms,
            "frame_number": self._frame_number,
            "tps": self._clock.tps,
            "seed": self._seed,
            "pending_timers": self._timers.pending(),
            "surface": self._surface.snapshot(),
        }
