"""Portfolio page bootstrap: data, content, navigation, theme, effects and contact."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from pulse import Stage, Tag, Viewport
from pulse_fx import CapabilityProbe, Effects, EffectsConfig, MotionProfile

from folio.config import SiteConfig
from folio.contact import ContactFlow
from folio.content import (
    apply_animation_delays,
    build_page,
    init_floating_elements,
    populate_info,
    populate_service_options,
    populate_services,
    populate_skills,
)
from folio.data import PortfolioData, load_portfolio
from folio.storage import InteractionLog, LocalStore
from folio.theme import ThemeToggle

if TYPE_CHECKING:
    from pulse import ElementId

logger = logging.getLogger(__name__)

SCROLLED_OFFSET = 100.0
ACTIVE_SECTION_LEAD = 200.0


class Navigation:
    """Mobile menu toggle, ``scrolled`` navbar state and the active link."""

    def __init__(self, stage: Stage) -> None:
        self._stage = stage
        self._surface = stage.surface
        self._listeners: list[tuple[int, str, Callable[[str, dict[str, Any]], None]]] = []

    def start(self) -> None:
        toggle = self._surface.find("nav-toggle")
        if toggle is not None:
            self._listen(toggle, "click", self._on_toggle)
        for link in self._surface.query("nav-link"):
            self._listen(link, "click", self._on_link)
        self._stage.events.subscribe("scroll", self._on_scroll)
        self.update()

    def _listen(self, eid: int, event_name: str, handler) -> None:
        self._stage.events.listen(eid, event_name, handler)
        self._listeners.append((eid, event_name, handler))

    def _on_toggle(self, event_name: str, data: dict[str, Any]) -> None:
        for html_id in ("nav-menu", "nav-toggle"):
            eid = self._surface.find(html_id)
            if eid is None:
                continue
            if self._surface.has_class(eid, "active"):
                self._surface.remove_class(eid, "active")
            else:
                self._surface.add_class(eid, "active")

    def _on_link(self, event_name: str, data: dict[str, Any]) -> None:
        for html_id in ("nav-menu", "nav-toggle"):
            eid = self._surface.find(html_id)
            if eid is not None:
                self._surface.remove_class(eid, "active")
        href = self._surface.get(data["target"]).data.get("href", "")
        section = self._surface.find(href.lstrip("#")) if href.startswith("#") else None
        if section is not None:
            self._stage.scroll_to(self._surface.get(section).top)

    def _on_scroll(self, event_name: str, data: dict[str, Any]) -> None:
        self.update()

    def current_section(self) -> str:
        scroll_y = self._surface.viewport.scroll_y
        current = ""
        for eid in self._surface.query(Tag("section")):
            element = self._surface.get(eid)
            if element.html_id and scroll_y >= element.top - ACTIVE_SECTION_LEAD:
                current = element.html_id
        return current

    def update(self) -> None:
        navbar = self._surface.find("navbar")
        if navbar is not None:
            if self._surface.viewport.scroll_y > SCROLLED_OFFSET:
                self._surface.add_class(navbar, "scrolled")
            else:
                self._surface.remove_class(navbar, "scrolled")
        current = self.current_section()
        for link in self._surface.query("nav-link"):
            if self._surface.get(link).data.get("href") == f"#{current}":
                self._surface.add_class(link, "active")
            else:
                self._surface.remove_class(link, "active")

    def teardown(self) -> None:
        self._stage.events.unsubscribe("scroll", self._on_scroll)
        for eid, event_name, handler in self._listeners:
            self._stage.events.unlisten(eid, event_name, handler)
        self._listeners.clear()


class PortfolioPage:
    """The whole page on one stage.

    ``start`` loads data (falling back to the minimal profile), builds and
    fills the page, then starts navigation, theme and effects. The contact
    flow attaches ``contact_delay_ms`` later and the loading screen hides
    after ``loading_ms``.
    """

    def __init__(
        self,
        stage: Stage | None = None,
        config: SiteConfig | None = None,
        data: PortfolioData | None = None,
        fetch: Callable[[str], Any] | None = None,
        store: LocalStore | None = None,
        opener: Callable[[str], Any] | None = None,
        profile: MotionProfile | None = None,
        probe: CapabilityProbe | None = None,
        effects_config: EffectsConfig | None = None,
        loading_ms: float = 2_000.0,
        contact_delay_ms: float = 1_000.0,
    ) -> None:
        if config is None:
            config = SiteConfig()
        if stage is None:
            stage = Stage(viewport=Viewport())
        if store is None:
            store = LocalStore(config.store_path or None)
        self.stage = stage
        self.config = config
        self.store = store
        self.data = data
        self._fetch = fetch
        self._profile = profile
        self._probe = probe
        self._effects_config = effects_config
        self._timers = stage.scope("page")
        self.loading_ms = loading_ms
        self.contact_delay_ms = contact_delay_ms
        self.log = InteractionLog(store)
        self.theme = ThemeToggle(stage, store)
        self.navigation = Navigation(stage)
        self.contact = ContactFlow(stage, config.phone, self.log, opener=opener)
        self.effects: Effects | None = None
        self.sections: dict[str, ElementId] = {}
        self._started = False

    def load(self) -> PortfolioData:
        if self.data is None:
            self.data = load_portfolio(self.config.api_base, self._fetch)
        return self.data

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        surface = self.stage.surface
        self.sections = build_page(surface)
        surface.create("div", "noise-overlay")
        self.show_loading()

        data = self.load()
        if data.fallback:
            logger.warning("Rendering fallback profile")
        self.theme.start()
        self.navigation.start()
        populate_info(surface, data.info)
        services = data.service_list()
        populate_services(surface, services)
        populate_skills(surface, data.skill_categories())
        populate_service_options(surface, services)
        init_floating_elements(surface)
        apply_animation_delays(surface)

        self.effects = Effects(
            self.stage, profile=self._profile, probe=self._probe, config=self._effects_config
        )
        self.effects.start()
        self._type_name(data.info or {})

        self._timers.set_timeout(self.contact_delay_ms, self.contact.start)
        self._timers.set_timeout(self.loading_ms, self.hide_loading)
        self.stage.on_teardown(self.teardown)

    def _type_name(self, info: dict[str, Any]) -> None:
        name = info.get("name")
        title = self.stage.surface.query_one("hero-title")
        if not name or title is None or self.effects is None:
            return
        target = next(iter(self.stage.surface.descendants(title, "glitch-text")), None)
        if target is not None:
            self.effects.text.typewriter(target, name)

    def show_loading(self) -> None:
        eid = self.stage.surface.find("loading-screen")
        if eid is not None:
            self.stage.surface.remove_class(eid, "hidden")

    def hide_loading(self) -> None:
        eid = self.stage.surface.find("loading-screen")
        if eid is not None:
            self.stage.surface.add_class(eid, "hidden")

    def summary(self) -> dict[str, Any]:
        """Counts of what the page has on screen, for the CLI and tests."""
        surface = self.stage.surface
        effects = self.effects
        return {
            "now_ms": self.stage.now_ms,
            "frames": self.stage.frame_number,
            "theme": self.theme.theme,
            "fallback": bool(self.data and self.data.fallback),
            "service_cards": len(surface.query("service-card")),
            "skill_items": len(surface.query("skill-item")),
            "animated": len(surface.query("animated")),
            "particles": len(surface.query("particle")),
            "glyph_columns": len(surface.query("matrix-column")),
            "cursor": effects is not None and effects.cursor is not None,
            "glitches": effects.glitch.triggered if effects is not None else 0,
            "suppressed": effects.glitch.suppressed if effects is not None else 0,
            "interactions": len(self.log),
        }

    def teardown(self) -> None:
        self._timers.cancel_all()
        self.contact.teardown()
        self.navigation.teardown()
        self.theme.teardown()
        self._started = False
