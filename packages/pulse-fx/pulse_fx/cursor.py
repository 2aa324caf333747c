"""Custom cursor with a smoothed follower."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pulse import AnyOf, Tag, Throttle

if TYPE_CHECKING:
    from pulse import ElementId, Stage

HOVER_TAGS = ("a", "button")
HOVER_CLASSES = ("service-card", "skill-item")


@dataclass
class CursorState:
    target_x: float = 0.0
    target_y: float = 0.0
    follower_x: float = 0.0
    follower_y: float = 0.0
    is_moving: bool = False

    def distance(self) -> float:
        return max(abs(self.target_x - self.follower_x), abs(self.target_y - self.follower_y))


class CursorTrail:
    """Lead cursor pinned to the pointer, follower eased toward it per frame.

    The frame loop reschedules itself every frame for the life of the
    engine; ``is_moving`` only gates the follower's position writes.
    """

    def __init__(
        self,
        stage: Stage,
        throttle_ms: float = 16.0,
        smoothing: float = 0.1,
        epsilon: float = 1.0,
    ) -> None:
        if not 0.0 < smoothing <= 1.0:
            raise ValueError(f"smoothing must be in (0, 1], got {smoothing}")
        self._stage = stage
        self._surface = stage.surface
        self._timers = stage.scope("cursor")
        self.smoothing = smoothing
        self.epsilon = epsilon
        self.state = CursorState()
        self._throttled = Throttle(self._timers, throttle_ms, self.move_to)
        self._lead: int | None = None
        self._follower: int | None = None
        self._hover_bound: list[int] = []
        self.frames = 0

    @property
    def lead(self) -> ElementId | None:
        return self._lead

    @property
    def follower(self) -> ElementId | None:
        return self._follower

    def start(self) -> None:
        if self._lead is not None:
            return
        self._lead = self._surface.create("div", "custom-cursor")
        self._follower = self._surface.create("div", "cursor-follower")
        self._stage.events.subscribe("pointermove", self._on_move)
        for eid in self._hover_targets():
            self.bind_hover(eid)
        self._timers.request_frame(self._frame)

    def _hover_targets(self) -> list[ElementId]:
        found: list[ElementId] = []
        for tag in HOVER_TAGS:
            found.extend(self._surface.query(Tag(tag)))
        found.extend(self._surface.query(AnyOf(*HOVER_CLASSES)))
        return list(dict.fromkeys(found))

    def bind_hover(self, element_id: ElementId) -> None:
        self._stage.events.listen(element_id, "pointerenter", self._on_enter)
        self._stage.events.listen(element_id, "pointerleave", self._on_leave)
        self._hover_bound.append(element_id)

    def _on_move(self, event_name: str, data: dict[str, Any]) -> None:
        self._throttled(data["x"], data["y"])

    def move_to(self, x: float, y: float) -> None:
        self.state.target_x = x
        self.state.target_y = y
        self.state.is_moving = True
        if self._lead is not None and self._surface.exists(self._lead):
            self._surface.set_style(self._lead, left=f"{x:g}px", top=f"{y:g}px")

    def _frame(self, now_ms: float) -> None:
        self.frames += 1
        if self.state.is_moving:
            self.step()
        self._timers.request_frame(self._frame)

    def step(self) -> None:
        """Move the follower one frame toward the target."""
        s = self.state
        s.follower_x += (s.target_x - s.follower_x) * self.smoothing
        s.follower_y += (s.target_y - s.follower_y) * self.smoothing
        if self._follower is not None and self._surface.exists(self._follower):
            self._surface.set_style(
                self._follower, left=f"{s.follower_x:g}px", top=f"{s.follower_y:g}px"
            )
        if (
            abs(s.target_x - s.follower_x) < self.epsilon
            and abs(s.target_y - s.follower_y) < self.epsilon
        ):
            s.is_moving = False

    def _on_enter(self, event_name: str, data: dict[str, Any]) -> None:
        self._set_hover(True)

    def _on_leave(self, event_name: str, data: dict[str, Any]) -> None:
        self._set_hover(False)

    def _set_hover(self, on: bool) -> None:
        for eid in (self._lead, self._follower):
            if eid is None or not self._surface.exists(eid):
                continue
            if on:
                self._surface.add_class(eid, "cursor-hover")
            else:
                self._surface.remove_class(eid, "cursor-hover")

    def teardown(self) -> None:
        self._timers.cancel_all()
        self._stage.events.unsubscribe("pointermove", self._on_move)
        for eid in self._hover_bound:
            self._stage.events.unlisten(eid, "pointerenter", self._on_enter)
            self._stage.events.unlisten(eid, "pointerleave", self._on_leave)
        self._hover_bound.clear()
        for eid in (self._lead, self._follower):
            if eid is not None:
                self._surface.remove(eid)
        self._lead = None
        self._follower = None
