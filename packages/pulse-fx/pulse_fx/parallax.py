"""Scroll parallax for floating decorations and glyph columns."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pulse import AnyOf, Throttle

if TYPE_CHECKING:
    from pulse import Stage

PARALLAX_CLASSES = ("floating-element", "matrix-column")


class Parallax:
    def __init__(
        self,
        stage: Stage,
        throttle_ms: float = 10.0,
        rate: float = -0.5,
        speed_step: float = 0.2,
    ) -> None:
        self._stage = stage
        self._surface = stage.surface
        self._timers = stage.scope("parallax")
        self.rate = rate
        self.speed_step = speed_step
        self._throttled = Throttle(self._timers, throttle_ms, self.apply)
        self._started = False

    def start(self) -> None:
        if not self._started:
            self._stage.events.subscribe("scroll", self._on_scroll)
            self._started = True

    def _on_scroll(self, event_name: str, data: dict[str, Any]) -> None:
        self._throttled()

    def apply(self) -> None:
        offset = self._surface.viewport.scroll_y * self.rate
        for index, eid in enumerate(self._surface.query(AnyOf(*PARALLAX_CLASSES))):
            speed = (index + 1) * self.speed_step
            self._surface.set_style(eid, transform=f"translateY({offset * speed:g}px)")

    def teardown(self) -> None:
        self._timers.cancel_all()
        self._stage.events.unsubscribe("scroll", self._on_scroll)
        self._started = False
