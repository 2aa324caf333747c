"""Count-up numbers and progress bar fills, once per element."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from pulse import ACTIVE, DONE, PENDING

if TYPE_CHECKING:
    from pulse import ElementId, IntersectionEntry, Stage, ViewportObserver

_NON_DIGITS = re.compile(r"\D")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(text: str) -> int | None:
    """Leading integer of ``text``, or None when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def format_percent(value: float) -> str:
    if value == int(value):
        return f"{int(value)}%"
    return f"{value:.2f}".rstrip("0").rstrip(".") + "%"


@dataclass
class CountUp:
    element: int
    target: int
    suffix: str = ""
    steps: int = 100
    step: int = 0
    handle: int | None = None

    @property
    def current(self) -> float:
        if self.step >= self.steps:
            return float(self.target)
        return self.target * self.step / self.steps

    @property
    def finished(self) -> bool:
        return self.step >= self.steps


@dataclass
class Fill:
    element: int
    level: int
    steps: int = 50
    step: int = 0
    handle: int | None = None

    @property
    def width(self) -> float:
        if self.step >= self.steps:
            return float(self.level)
        return self.level * self.step / self.steps

    @property
    def finished(self) -> bool:
        return self.step >= self.steps


class CounterAnimator:
    """Counts ``stat-number`` elements up from zero to their displayed value.

    Fixed step count: every counter takes ``steps`` ticks whatever its
    target, so large numbers climb faster.
    """

    def __init__(self, stage: Stage, steps: int = 100, interval_ms: float = 20.0) -> None:
        if steps <= 0:
            raise ValueError(f"steps must be positive, got {steps}")
        self._stage = stage
        self._surface = stage.surface
        self._timers = stage.scope("counter")
        self._steps = steps
        self._interval_ms = interval_ms
        self._observer = stage.observer(self._on_entries)
        self._runs: dict[int, CountUp] = {}

    @property
    def observer(self) -> ViewportObserver:
        return self._observer

    def register(self, cls: str = "stat-number") -> list[ElementId]:
        found = self._surface.query(cls)
        for eid in found:
            self._observer.observe(eid)
        return found

    def run_for(self, element_id: ElementId) -> CountUp | None:
        return self._runs.get(element_id)

    def _on_entries(self, entries: list[IntersectionEntry]) -> None:
        for entry in entries:
            if entry.is_intersecting:
                self._observer.unobserve(entry.target)
                self.start(entry.target)

    def start(self, element_id: ElementId) -> None:
        if not self._surface.exists(element_id) or element_id in self._runs:
            return
        if self._surface.get(element_id).state != PENDING:
            return
        text = self._surface.get(element_id).text
        digits = _NON_DIGITS.sub("", text)
        if not digits:
            self._surface.set_element_state(element_id, DONE)
            return
        run = CountUp(
            element=element_id,
            target=int(digits),
            suffix="+" if "+" in text else "",
            steps=self._steps,
        )
        self._runs[element_id] = run
        self._surface.set_element_state(element_id, ACTIVE)
        run.handle = self._timers.set_interval(self._interval_ms, partial(self._tick, run))

    def _tick(self, run: CountUp) -> None:
        if not self._surface.exists(run.element):
            self._timers.cancel(run.handle)
            return
        run.step += 1
        self._surface.set_text(run.element, f"{math.floor(run.current)}{run.suffix}")
        if run.finished:
            self._timers.cancel(run.handle)
            self._surface.set_element_state(run.element, DONE)

    def teardown(self) -> None:
        self._timers.cancel_all()
        self._stage.remove_observer(self._observer)


class ProgressAnimator:
    """Fills each ``skill-item``'s ``skill-progress`` bar up to ``data-level``."""

    def __init__(
        self,
        stage: Stage,
        steps: int = 50,
        interval_ms: float = 30.0,
        delay_ms: float = 300.0,
    ) -> None:
        if steps <= 0:
            raise ValueError(f"steps must be positive, got {steps}")
        self._stage = stage
        self._surface = stage.surface
        self._timers = stage.scope("progress")
        self._steps = steps
        self._interval_ms = interval_ms
        self._delay_ms = delay_ms
        self._observer = stage.observer(self._on_entries)
        self._fills: dict[int, Fill] = {}

    @property
    def observer(self) -> ViewportObserver:
        return self._observer

    def register(self, cls: str = "skill-item") -> list[ElementId]:
        found = self._surface.query(cls)
        for eid in found:
            self._observer.observe(eid)
        return found

    def fill_for(self, bar_id: ElementId) -> Fill | None:
        return self._fills.get(bar_id)

    def _on_entries(self, entries: list[IntersectionEntry]) -> None:
        for entry in entries:
            if not entry.is_intersecting:
                continue
            bars = self._surface.descendants(entry.target, "skill-progress")
            if bars:
                self._observer.unobserve(entry.target)
                self._timers.set_timeout(
                    self._delay_ms, partial(self.start, entry.target, bars[0])
                )

    def start(self, item_id: ElementId, bar_id: ElementId) -> None:
        if not self._surface.exists(item_id) or not self._surface.exists(bar_id):
            return
        if bar_id in self._fills:
            return
        if self._surface.get(bar_id).state != PENDING:
            return
        level = parse_int(self._surface.get(item_id).data.get("level", ""))
        if level is None:
            return
        fill = Fill(element=bar_id, level=level, steps=self._steps)
        self._fills[bar_id] = fill
        self._surface.set_element_state(bar_id, ACTIVE)
        fill.handle = self._timers.set_interval(self._interval_ms, partial(self._tick, fill))

    def _tick(self, fill: Fill) -> None:
        if not self._surface.exists(fill.element):
            self._timers.cancel(fill.handle)
            return
        fill.step += 1
        self._surface.set_style(fill.element, width=format_percent(fill.width))
        if fill.finished:
            self._timers.cancel(fill.handle)
            self._surface.set_element_state(fill.element, DONE)

    def teardown(self) -> None:
        self._timers.cancel_all()
        self._stage.remove_observer(self._observer)
