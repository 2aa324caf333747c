"""Reveal-on-scroll engine."""
from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Iterable

from pulse import ACTIVE, DONE, PENDING, AnyOf

if TYPE_CHECKING:
    from pulse import ElementId, IntersectionEntry, Stage, ViewportObserver

REVEAL_CLASSES = (
    "service-card",
    "skill-category",
    "contact-item",
    "about-details",
    "hero-stats",
    "section-header",
)
STAGGER_CLASSES = ("service-card", "skill-item", "detail-item")


class RevealEngine:
    """Marks elements ``animated`` as they scroll into view.

    Descendants matching ``STAGGER_CLASSES`` follow one by one,
    ``stagger_ms`` apart. Elements stay observed, but an element that was
    already revealed schedules nothing on later entries.
    """

    def __init__(
        self,
        stage: Stage,
        threshold: float = 0.1,
        bottom_margin: float = -100.0,
        stagger_ms: float = 100.0,
    ) -> None:
        self._stage = stage
        self._surface = stage.surface
        self._timers = stage.scope("reveal")
        self._stagger_ms = stagger_ms
        self._observer = stage.observer(self._on_entries, threshold, bottom_margin)
        self._remaining: dict[int, int] = {}

    @property
    def observer(self) -> ViewportObserver:
        return self._observer

    def register(self, classes: Iterable[str] = REVEAL_CLASSES) -> list[ElementId]:
        found = self._surface.query(AnyOf(*classes))
        for eid in found:
            self._surface.add_class(eid, "animate-on-scroll")
            self._observer.observe(eid)
        return found

    def _on_entries(self, entries: list[IntersectionEntry]) -> None:
        for entry in entries:
            if entry.is_intersecting:
                self.animate(entry.target)

    def animate(self, element_id: ElementId) -> None:
        if not self._surface.exists(element_id):
            return
        if self._surface.get(element_id).state != PENDING:
            return
        self._surface.add_class(element_id, "animated")
        self._surface.set_element_state(element_id, ACTIVE)

        children = self._surface.descendants(element_id, AnyOf(*STAGGER_CLASSES))
        if not children:
            self._surface.set_element_state(element_id, DONE)
            return
        self._remaining[element_id] = len(children)
        for index, child in enumerate(children):
            self._timers.set_timeout(
                index * self._stagger_ms, partial(self._reveal_child, element_id, child)
            )

    def _reveal_child(self, parent: ElementId, child: ElementId) -> None:
        if self._surface.exists(child):
            self._surface.add_class(child, "animated")
        self._remaining[parent] -= 1
        if self._remaining[parent] == 0:
            del self._remaining[parent]
            if self._surface.exists(parent):
                self._surface.set_element_state(parent, DONE)

    def reveal(self, element_id: ElementId, delay_ms: float = 0.0) -> None:
        """Fade an element in from 30px below after ``delay_ms``."""

        def start() -> None:
            if not self._surface.exists(element_id):
                return
            self._surface.set_style(
                element_id,
                opacity="0",
                transform="translateY(30px)",
                transition="all 0.6s ease-out",
            )
            self._timers.request_frame(settle)

        def settle(now_ms: float) -> None:
            if self._surface.exists(element_id):
                self._surface.set_style(element_id, opacity="1", transform="translateY(0)")

        self._timers.set_timeout(delay_ms, start)

    def stagger_reveal(self, element_ids: Iterable[ElementId], step_ms: float = 100.0) -> None:
        for index, eid in enumerate(element_ids):
            self.reveal(eid, index * step_ms)

    def teardown(self) -> None:
        self._timers.cancel_all()
        self._stage.remove_observer(self._observer)
        self._remaining.clear()
