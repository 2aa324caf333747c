"""End-to-end tests for the portfolio page on a virtual-time stage."""
import urllib.error
from pathlib import Path

from pulse import DONE, Stage, Viewport
from pulse_fx import FixedProbe

from folio.config import SiteConfig
from folio.contact import encode_uri_component, service_message
from folio.content import build_page
from folio.data import FALLBACK_INFO, PortfolioData, load_local
from folio.page import Navigation, PortfolioPage
from folio.storage import LocalStore

DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def make_page(viewport=None, data=None, **kwargs):
    opened = []
    page = PortfolioPage(
        stage=Stage(seed=42, viewport=viewport or Viewport()),
        data=data if data is not None else load_local(DATA_DIR),
        store=LocalStore(),
        opener=opened.append,
        probe=FixedProbe(),
        **kwargs,
    )
    return page, opened


class TestNavigation:
    def setup_method(self):
        self.stage = Stage(seed=42)
        build_page(self.stage.surface)
        self.nav = Navigation(self.stage)
        self.nav.start()
        self.s = self.stage.surface

    def active_links(self):
        return [
            self.s.get(link).data["href"]
            for link in self.s.query("nav-link")
            if self.s.has_class(link, "active")
        ]

    def test_initial_state(self):
        assert not self.s.has_class(self.s.find("navbar"), "scrolled")
        assert self.active_links() == ["#home"]

    def test_scrolled_navbar(self):
        self.stage.scroll_to(150)
        self.stage.step()
        assert self.s.has_class(self.s.find("navbar"), "scrolled")
        self.stage.scroll_to(50)
        self.stage.step()
        assert not self.s.has_class(self.s.find("navbar"), "scrolled")

    def test_active_link_follows_scroll(self):
        self.stage.scroll_to(699)
        self.stage.step()
        assert self.active_links() == ["#home"]
        self.stage.scroll_to(700)
        self.stage.step()
        assert self.active_links() == ["#about"]
        assert self.nav.current_section() == "about"

    def test_menu_toggle(self):
        toggle = self.s.find("nav-toggle")
        menu = self.s.find("nav-menu")
        self.stage.click(toggle)
        self.stage.step()
        assert self.s.has_class(menu, "active") and self.s.has_class(toggle, "active")
        self.stage.click(toggle)
        self.stage.step()
        assert not self.s.has_class(menu, "active")

    def test_link_click_scrolls_and_closes_menu(self):
        self.stage.click(self.s.find("nav-toggle"))
        self.stage.step()
        skills_link = next(
            link for link in self.s.query("nav-link")
            if self.s.get(link).data["href"] == "#skills"
        )
        self.stage.click(skills_link)
        self.stage.step()
        assert self.s.viewport.scroll_y == 2800.0
        assert not self.s.has_class(self.s.find("nav-menu"), "active")
        self.stage.step()
        assert self.active_links() == ["#skills"]


class TestPortfolioPage:
    def test_start_populates_page(self):
        page, _ = make_page()
        page.start()
        summary = page.summary()
        assert summary["service_cards"] == 6
        assert summary["skill_items"] > 0
        assert summary["theme"] == "dark"
        assert not summary["fallback"]
        s = page.stage.surface
        assert s.query_one("noise-overlay") is not None
        assert not s.has_class(s.find("loading-screen"), "hidden")

    def test_loading_screen_hides(self):
        page, _ = make_page()
        page.start()
        page.stage.advance(1999)
        s = page.stage.surface
        assert not s.has_class(s.find("loading-screen"), "hidden")
        page.stage.advance(1)
        assert s.has_class(s.find("loading-screen"), "hidden")

    def test_name_is_typed_into_hero(self):
        page, _ = make_page()
        page.start()
        s = page.stage.surface
        target = s.descendants(s.query_one("hero-title"), "glitch-text")[0]
        name = page.data.info["name"]
        assert s.get(target).text == ""
        page.stage.advance(1000 + 100 * len(name))
        assert s.get(target).text == name

    def test_fetch_failure_renders_fallback(self):
        def fetch(url):
            raise urllib.error.URLError("refused")

        page = PortfolioPage(
            stage=Stage(seed=42), fetch=fetch, store=LocalStore(),
            opener=lambda url: None, probe=FixedProbe(),
        )
        page.start()
        s = page.stage.surface
        assert page.summary()["fallback"]
        assert page.summary()["service_cards"] == 0
        assert s.get(s.find("hero-subtitle")).text == FALLBACK_INFO["title"]

    def test_bad_api_base_renders_fallback(self):
        page = PortfolioPage(
            stage=Stage(seed=42), config=SiteConfig(api_base="http://localhost:abc"),
            store=LocalStore(), opener=lambda url: None, probe=FixedProbe(),
        )
        page.start()
        assert page.summary()["fallback"]

    def test_contact_attaches_after_delay(self):
        page, opened = make_page()
        page.start()
        s = page.stage.surface
        assert s.query("floating-whatsapp-btn") == []
        page.stage.advance(999)
        assert s.query("floating-whatsapp-btn") == []
        page.stage.advance(1)
        assert len(s.query("floating-whatsapp-btn")) == 1

    def test_service_button_hands_off_to_whatsapp(self):
        page, opened = make_page()
        page.start()
        s = page.stage.surface
        page.stage.advance(1000)
        button = next(
            b for b in s.query("service-btn")
            if s.get(b).data["service"] == "Discord Bot Development"
        )
        page.stage.click(button, x=12, y=8)
        page.stage.step()
        assert len(opened) == 1
        assert encode_uri_component(service_message("Discord Bot Development")) in opened[0]
        assert opened[0].startswith("https://wa.me/966547540321?text=")
        assert page.log.entries()[-1]["type"] == "service"
        assert len(s.descendants(button, "click-glitch")) == 1

    def test_reduced_motion_never_appends_ambient_elements(self):
        appended = []
        page, _ = make_page(Viewport(prefers_reduced_motion=True))
        page.stage.surface.on_append(lambda surface, eid, element: appended.append(element))
        page.start()
        for y in (0, 900, 1700, 2800, 4000, 0):
            page.stage.scroll_to(y)
            page.stage.advance(2000)
        classes = set().union(*(element.classes for element in appended))
        assert "particle" not in classes
        assert "matrix-column" not in classes
        assert page.summary()["particles"] == 0

    def test_empty_message_is_rejected(self):
        page, opened = make_page()
        page.start()
        stage = page.stage
        s = stage.surface
        stage.advance(1000)
        s.set_text(s.find("name"), "Ann")
        s.set_text(s.find("contact-form-email"), "ann@example.com")
        form = s.find("contact-form")
        stage.submit(form)
        stage.step()
        feedback = s.descendants(form, "form-feedback")
        assert len(feedback) == 1
        assert s.has_class(feedback[0], "form-feedback-error")
        stage.advance(3000)
        assert opened == []
        assert len(page.log) == 0

    def test_skill_bars_fill_when_visible(self):
        page, _ = make_page()
        page.start()
        page.stage.scroll_to(2900)
        page.stage.advance(2000)
        s = page.stage.surface
        item = s.query("skill-item")[0]
        bar = s.descendants(item, "skill-progress")[0]
        assert s.get(bar).state == DONE
        assert s.get(bar).style["width"] == f"{s.get(item).data['level']}%"

    def test_theme_persists_through_store(self):
        page, _ = make_page()
        page.start()
        s = page.stage.surface
        page.stage.click(s.find("theme-toggle"))
        page.stage.step()
        assert page.store.get("theme") == "light"
        assert page.summary()["theme"] == "light"

    def test_teardown_stops_everything(self):
        page, opened = make_page()
        page.start()
        page.stage.advance(1000)
        page.stage.teardown()
        s = page.stage.surface
        assert s.query("floating-whatsapp-btn") == []
        assert page.stage.snapshot()["pending_timers"] == 0
        page.stage.advance(5000)
        assert not s.has_class(s.find("loading-screen"), "hidden")

    def test_start_is_idempotent(self):
        page, _ = make_page()
        page.start()
        page.start()
        assert len(page.stage.surface.query("service-card")) == 6

    def test_given_data_skips_fetch(self):
        def fetch(url):
            raise AssertionError("should not fetch")

        data = PortfolioData(info={"name": "Ann", "title": "Dev"})
        page, _ = make_page(data=data, fetch=fetch)
        page.start()
        assert page.summary()["service_cards"] == 0
