"""Dark/light theme toggle persisted in the local store."""
from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pulse import ElementId, Stage

    from folio.storage import LocalStore

THEMES = ("dark", "light")
THEME_KEY = "theme"
# The icon shows the theme a click switches to.
ICONS = {"dark": "☀️", "light": "🌙"}


class ThemeToggle:
    def __init__(self, stage: Stage, store: LocalStore, default: str = "dark") -> None:
        self._stage = stage
        self._surface = stage.surface
        self._timers = stage.scope("theme")
        self._store = store
        saved = store.get(THEME_KEY)
        self.theme = saved if saved in THEMES else default
        self._button: int | None = None

    def start(self) -> None:
        self._button = self._surface.find("theme-toggle")
        self.apply()
        if self._button is not None:
            self._stage.events.listen(self._button, "click", self._on_click)

    def apply(self) -> None:
        body = self._surface.body
        for theme in THEMES:
            self._surface.remove_class(body, f"{theme}-theme")
        self._surface.add_class(body, f"{self.theme}-theme")
        icon = self._icon()
        if icon is not None:
            self._surface.set_text(icon, ICONS[self.theme])

    def _icon(self) -> ElementId | None:
        if self._button is None or not self._surface.exists(self._button):
            return None
        return next(iter(self._surface.descendants(self._button, "theme-icon")), None)

    def _on_click(self, event_name: str, data: dict[str, Any]) -> None:
        self.toggle()

    def toggle(self) -> str:
        self.theme = "light" if self.theme == "dark" else "dark"
        self.apply()
        self._store.set(THEME_KEY, self.theme)
        if self._button is not None and self._surface.exists(self._button):
            self._surface.set_style(self._button, animation="glitch-btn 0.3s ease-in-out")
            self._timers.set_timeout(300.0, partial(self._clear_animation, self._button))
        return self.theme

    def _clear_animation(self, eid: ElementId) -> None:
        if self._surface.exists(eid):
            self._surface.set_style(eid, animation="")

    def teardown(self) -> None:
        self._timers.cancel_all()
        if self._button is not None:
            self._stage.events.unlisten(self._button, "click", self._on_click)
