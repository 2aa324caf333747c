"""Glitch triggers: timed, random, scroll-driven and pointer-driven distortions."""
from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any, Callable

from pulse import AnyOf, Throttle

if TYPE_CHECKING:
    from pulse import ElementId, Stage

QUIESCENT = "quiescent"
GLITCHING = "glitching"

GLITCH_POOL_CLASSES = ("service-card", "skill-category", "contact-item")
DISTORTIONS = ("shake", "flicker", "distort")
HOVER_CHARS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
CORRUPT_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789!@#$%^&*()"

# Session channels. Text corruption and class toggles never share a channel.
TEXT = "text"
VISUAL = "visual"
CORRUPT = "corrupt"


@dataclass
class GlitchSession:
    element: int
    channel: str
    effect: str
    started_ms: float
    state: str = GLITCHING
    handle: int | None = None


class GlitchEngine:
    """Short self-reverting distortions on text and cards.

    At most one session per element and channel: a trigger that lands on
    an element already glitching on that channel is dropped and counted
    in ``suppressed``.
    """

    def __init__(
        self,
        stage: Stage,
        text_interval_ms: float = 3_000.0,
        text_probability: float = 0.1,
        text_duration_ms: float = 300.0,
        random_interval_ms: float = 5_000.0,
        random_probability: float = 0.05,
        visual_duration_ms: float = 500.0,
        scroll_throttle_ms: float = 100.0,
        scroll_threshold: float = 50.0,
        hover_probability: float = 0.3,
        hover_duration_ms: float = 100.0,
        click_duration_ms: float = 400.0,
        ripple_duration_ms: float = 600.0,
    ) -> None:
        self._stage = stage
        self._surface = stage.surface
        self._timers = stage.scope("glitch")
        self.text_interval_ms = text_interval_ms
        self.text_probability = text_probability
        self.text_duration_ms = text_duration_ms
        self.random_interval_ms = random_interval_ms
        self.random_probability = random_probability
        self.visual_duration_ms = visual_duration_ms
        self.scroll_threshold = scroll_threshold
        self.hover_probability = hover_probability
        self.hover_duration_ms = hover_duration_ms
        self.click_duration_ms = click_duration_ms
        self.ripple_duration_ms = ripple_duration_ms
        self._scroll_check = Throttle(self._timers, scroll_throttle_ms, self.check_scroll)
        self._sessions: dict[tuple[int, str], GlitchSession] = {}
        self._listeners: list[tuple[int, str, Callable[[str, dict[str, Any]], None]]] = []
        self._last_scroll_y = 0.0
        self._started = False
        self.triggered = 0
        self.suppressed = 0

    # -- Wiring --

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        for eid in self._surface.query("glitch-text"):
            self._timers.set_interval(
                self.text_interval_ms, partial(self._maybe_glitch_text, eid)
            )
        self._timers.set_interval(self.random_interval_ms, self._maybe_random_glitch)

        for eid in self._surface.query("service-card"):
            self._listen(eid, "pointerenter", self._on_card_enter)
        for eid in self._surface.query("glitch-btn"):
            self._listen(eid, "click", self._on_button_click)
        for eid in self._surface.query("nav-link"):
            self._listen(eid, "pointerenter", self._on_link_enter)

        self._last_scroll_y = self._surface.viewport.scroll_y
        self._stage.events.subscribe("scroll", self._on_scroll)

    def _listen(self, eid: int, event_name: str, handler) -> None:
        self._stage.events.listen(eid, event_name, handler)
        self._listeners.append((eid, event_name, handler))

    def _on_card_enter(self, event_name: str, data: dict[str, Any]) -> None:
        self.ripple(data["target"])

    def _on_button_click(self, event_name: str, data: dict[str, Any]) -> None:
        self.click_glitch(data["target"], data.get("x", 0.0), data.get("y", 0.0))

    def _on_link_enter(self, event_name: str, data: dict[str, Any]) -> None:
        self.text_glitch(data["target"])

    def _on_scroll(self, event_name: str, data: dict[str, Any]) -> None:
        self._scroll_check()

    # -- Sessions --

    def session(self, element_id: ElementId, channel: str = TEXT) -> GlitchSession | None:
        return self._sessions.get((element_id, channel))

    def is_glitching(self, element_id: ElementId, channel: str = TEXT) -> bool:
        return (element_id, channel) in self._sessions

    def _begin(
        self,
        element_id: ElementId,
        channel: str,
        effect: str,
        duration_ms: float,
        on_end: Callable[[], None],
    ) -> GlitchSession | None:
        key = (element_id, channel)
        if key in self._sessions:
            self.suppressed += 1
            return None
        session = GlitchSession(element_id, channel, effect, self._stage.now_ms)
        self._sessions[key] = session
        self.triggered += 1

        def end() -> None:
            session.state = QUIESCENT
            self._sessions.pop(key, None)
            on_end()

        session.handle = self._timers.set_timeout(duration_ms, end)
        return session

    # -- Effects --

    def _maybe_glitch_text(self, element_id: ElementId) -> None:
        if self._stage.random.random() < self.text_probability:
            self.trigger_glitch(element_id)

    def trigger_glitch(self, element_id: ElementId) -> bool:
        """Add ``glitch-active`` for the text glitch duration."""
        if not self._surface.exists(element_id):
            return False
        session = self._begin(
            element_id,
            TEXT,
            "glitch-active",
            self.text_duration_ms,
            partial(self._unset_class, element_id, "glitch-active"),
        )
        if session is None:
            return False
        self._surface.add_class(element_id, "glitch-active")
        return True

    def _maybe_random_glitch(self) -> None:
        rng = self._stage.random
        if rng.random() >= self.random_probability:
            return
        pool = self._surface.query(AnyOf(*GLITCH_POOL_CLASSES))
        if not pool:
            return
        self.apply_random_glitch(pool[rng.randrange(len(pool))])

    def apply_random_glitch(self, element_id: ElementId, kind: str | None = None) -> str | None:
        """Apply a shake, flicker or distort class. Returns the class applied."""
        if not self._surface.exists(element_id):
            return None
        if kind is None:
            kind = self._stage.random.choice(DISTORTIONS)
        elif kind not in DISTORTIONS:
            raise ValueError(f"Unknown distortion {kind!r}")
        cls = f"glitch-{kind}"
        session = self._begin(
            element_id,
            VISUAL,
            cls,
            self.visual_duration_ms,
            partial(self._unset_class, element_id, cls),
        )
        if session is None:
            return None
        self._surface.add_class(element_id, cls)
        return cls

    def check_scroll(self) -> bool:
        """Glitch a random ``glitch-text`` element after a fast scroll."""
        current = self._surface.viewport.scroll_y
        speed = abs(current - self._last_scroll_y)
        self._last_scroll_y = current
        if speed <= self.scroll_threshold:
            return False
        candidates = self._surface.query("glitch-text")
        if not candidates:
            return False
        return self.trigger_glitch(candidates[self._stage.random.randrange(len(candidates))])

    def text_glitch(self, element_id: ElementId) -> bool:
        """Swap characters for symbols, then restore the original text."""
        if not self._surface.exists(element_id):
            return False
        rng = self._stage.random
        original = self._surface.get(element_id).text
        session = self._begin(
            element_id,
            CORRUPT,
            "text-glitch",
            self.hover_duration_ms,
            partial(self._restore_text, element_id, original),
        )
        if session is None:
            return False
        self._surface.set_text(
            element_id,
            "".join(
                rng.choice(HOVER_CHARS) if rng.random() < self.hover_probability else ch
                for ch in original
            ),
        )
        return True

    def corrupt_text(
        self, element_id: ElementId, duration_ms: float = 1_000.0, probability: float = 0.1
    ) -> bool:
        """Re-corrupt the text every 50ms for ``duration_ms``, then restore it."""
        if not self._surface.exists(element_id):
            return False
        rng = self._stage.random
        original = self._surface.get(element_id).text

        def scramble() -> None:
            if not self._surface.exists(element_id):
                return
            self._surface.set_text(
                element_id,
                "".join(
                    rng.choice(CORRUPT_CHARS) if rng.random() < probability else ch
                    for ch in original
                ),
            )

        def restore() -> None:
            self._timers.cancel(interval)
            self._restore_text(element_id, original)

        interval: int | None = None
        session = self._begin(element_id, CORRUPT, "corrupt", duration_ms, restore)
        if session is None:
            return False
        interval = self._timers.set_interval(50.0, scramble)
        return True

    def click_glitch(self, element_id: ElementId, x: float, y: float) -> ElementId | None:
        """Burst at the click point, relative to the clicked element."""
        if not self._surface.exists(element_id):
            return None
        box = self._surface.get(element_id)
        burst = self._surface.create(
            "div",
            "click-glitch",
            parent=element_id,
            style={"left": f"{x - box.left:g}px", "top": f"{y - box.top:g}px"},
        )
        self._timers.set_timeout(self.click_duration_ms, partial(self._surface.remove, burst))
        return burst

    def ripple(self, element_id: ElementId) -> ElementId | None:
        """Circular ripple sized to the element's larger side, centred on it."""
        if not self._surface.exists(element_id):
            return None
        box = self._surface.get(element_id)
        size = max(box.width, box.height)
        ripple = self._surface.create(
            "div",
            "glitch-ripple",
            parent=element_id,
            style={
                "width": f"{size:g}px",
                "height": f"{size:g}px",
                "left": f"{box.width / 2 - size / 2:g}px",
                "top": f"{box.height / 2 - size / 2:g}px",
            },
        )
        self._timers.set_timeout(self.ripple_duration_ms, partial(self._surface.remove, ripple))
        return ripple

    def screen_glitch(self, lines: int = 3, duration_ms: float = 200.0) -> ElementId:
        rng = self._stage.random
        overlay = self._surface.create("div", "screen-glitch")
        for _ in range(lines):
            self._surface.create(
                "div", "glitch-line", parent=overlay, style={"top": f"{rng.random() * 100:g}%"}
            )
        self._timers.set_timeout(duration_ms, partial(self._surface.remove, overlay))
        return overlay

    def _unset_class(self, element_id: ElementId, cls: str) -> None:
        if self._surface.exists(element_id):
            self._surface.remove_class(element_id, cls)

    def _restore_text(self, element_id: ElementId, text: str) -> None:
        if self._surface.exists(element_id):
            self._surface.set_text(element_id, text)

    def teardown(self) -> None:
        self._timers.cancel_all()
        self._stage.events.unsubscribe("scroll", self._on_scroll)
        for eid, event_name, handler in self._listeners:
            self._stage.events.unlisten(eid, event_name, handler)
        self._listeners.clear()
        self._sessions.clear()
        self._started = False
