"""Viewport intersection observer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from pulse.surface import Surface
    from pulse.types import ElementId


@dataclass(frozen=True)
class IntersectionEntry:
    target: int
    is_intersecting: bool
    ratio: float


class ViewportObserver:
    """Reports elements entering and leaving the viewport.

    An entry is reported on the first evaluation after ``observe`` and
    then every time the element's intersecting state flips. A negative
    ``bottom_margin`` shrinks the viewport from below so elements report
    before they are fully in view.
    """

    def __init__(
        self,
        surface: Surface,
        callback: Callable[[list[IntersectionEntry]], None],
        threshold: float = 0.0,
        bottom_margin: float = 0.0,
    ) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be in [0, 1], got {threshold}")
        self._surface = surface
        self._callback = callback
        self._threshold = threshold
        self._bottom_margin = bottom_margin
        # None means observed but not yet evaluated.
        self._targets: dict[int, bool | None] = {}

    @property
    def threshold(self) -> float:
        return self._threshold

    @property
    def bottom_margin(self) -> float:
        return self._bottom_margin

    def observe(self, element_id: ElementId) -> None:
        if element_id not in self._targets:
            self._targets[element_id] = None

    def unobserve(self, element_id: ElementId) -> None:
        self._targets.pop(element_id, None)

    def disconnect(self) -> None:
        self._targets.clear()

    def observing(self, element_id: ElementId) -> bool:
        return element_id in self._targets

    def __len__(self) -> int:
        return len(self._targets)

    def ratio(self, element_id: ElementId) -> float:
        vp = self._surface.viewport
        el = self._surface.get(element_id)
        root_top = vp.scroll_y
        root_bottom = vp.scroll_y + vp.height + self._bottom_margin
        if el.height <= 0:
            return 1.0 if root_top <= el.top <= root_bottom else 0.0
        overlap = min(el.top + el.height, root_bottom) - max(el.top, root_top)
        if overlap <= 0:
            return 0.0
        return min(overlap / el.height, 1.0)

    def evaluate(self) -> list[IntersectionEntry]:
        entries: list[IntersectionEntry] = []
        for eid, previous in list(self._targets.items()):
            if not self._surface.exists(eid):
                del self._targets[eid]
                continue
            ratio = self.ratio(eid)
            intersecting = ratio > 0.0 and ratio >= self._threshold
            if previous is None or previous != intersecting:
                self._targets[eid] = intersecting
                entries.append(IntersectionEntry(eid, intersecting, ratio))
        if entries:
            self._callback(entries)
        return entries
