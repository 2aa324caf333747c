"""Text effects: typewriter, morph, wave and terminal typing."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pulse import ElementId, Stage

MORPH_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
TERMINAL_GLITCH_CHARS = "█▓▒░"
NBSP = "\u00a0"


class TextEffects:
    def __init__(self, stage: Stage, frame_ms: float = 16.0) -> None:
        self._stage = stage
        self._surface = stage.surface
        self._timers = stage.scope("text")
        self.frame_ms = frame_ms

    def typewriter(
        self,
        element_id: ElementId,
        text: str,
        start_delay_ms: float = 1_000.0,
        step_ms: float = 100.0,
    ) -> None:
        """Clear the element, then type ``text`` one character per step."""
        if not self._surface.exists(element_id):
            return
        self._surface.set_text(element_id, "")
        self._surface.set_data(element_id, "text", text)
        position = 0

        def type_next() -> None:
            nonlocal position
            if position >= len(text) or not self._surface.exists(element_id):
                return
            element = self._surface.get(element_id)
            self._surface.set_text(element_id, element.text + text[position])
            position += 1
            if position < len(text):
                self._timers.set_timeout(step_ms, type_next)

        self._timers.set_timeout(start_delay_ms, type_next)

    def morph_text(
        self, element_id: ElementId, new_text: str, duration_ms: float = 1_000.0
    ) -> None:
        """Sweep left to right from the current text to ``new_text``.

        Characters ahead of the sweep keep the old text, characters inside
        it show random letters, characters behind it show the new text.
        """
        if not self._surface.exists(element_id):
            return
        if duration_ms <= 0:
            self._surface.set_text(element_id, new_text)
            return
        rng = self._stage.random
        original = self._surface.get(element_id).text
        max_len = max(len(original), len(new_text))
        started = self._stage.now_ms
        handle: int | None = None

        def frame() -> None:
            if not self._surface.exists(element_id):
                self._timers.cancel(handle)
                return
            ratio = min((self._stage.now_ms - started) / duration_ms, 1.0)
            if ratio >= 1.0 or max_len == 0:
                self._timers.cancel(handle)
                self._surface.set_text(element_id, new_text)
                return
            chars = []
            for i in range(max_len):
                progress = max(0.0, min(1.0, (ratio - i / max_len) * max_len))
                if progress == 1.0:
                    chars.append(new_text[i] if i < len(new_text) else "")
                elif progress > 0.0:
                    chars.append(rng.choice(MORPH_CHARS))
                else:
                    chars.append(original[i] if i < len(original) else "")
            self._surface.set_text(element_id, "".join(chars))

        handle = self._timers.set_interval(self.frame_ms, frame)

    def wave_text(self, element_id: ElementId) -> list[ElementId]:
        """Split the text into ``wave-char`` children, 0.1s apart."""
        if not self._surface.exists(element_id):
            return []
        text = self._surface.get(element_id).text
        self._surface.clear_children(element_id)
        self._surface.set_text(element_id, "")
        return [
            self._surface.create(
                "span",
                "wave-char",
                parent=element_id,
                text=NBSP if ch == " " else ch,
                style={"animation-delay": f"{index * 0.1:g}s"},
            )
            for index, ch in enumerate(text)
        ]

    def terminal_type(
        self,
        element_id: ElementId,
        text: str,
        speed_ms: float = 50.0,
        glitch_probability: float = 0.1,
    ) -> None:
        """Type ``text`` with block characters that flash in and vanish."""
        if not self._surface.exists(element_id):
            return
        rng = self._stage.random
        self._surface.set_text(element_id, "")
        position = 0
        handle: int | None = None

        def drop_glitch(index: int, ch: str) -> None:
            if not self._surface.exists(element_id):
                return
            current = self._surface.get(element_id).text
            if index < len(current) and current[index] == ch:
                self._surface.set_text(element_id, current[:index] + current[index + 1:])

        def type_next() -> None:
            nonlocal position
            if not self._surface.exists(element_id) or position >= len(text):
                self._timers.cancel(handle)
                return
            current = self._surface.get(element_id).text + text[position]
            position += 1
            if rng.random() < glitch_probability:
                ch = rng.choice(TERMINAL_GLITCH_CHARS)
                index = len(current)
                current += ch
                self._timers.set_timeout(speed_ms, lambda: drop_glitch(index, ch))
            self._surface.set_text(element_id, current)

        handle = self._timers.set_interval(speed_ms, type_next)

    def teardown(self) -> None:
        self._timers.cancel_all()
