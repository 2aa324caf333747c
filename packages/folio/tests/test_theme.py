"""Tests for the theme toggle."""
from pulse import Stage

from folio.content import build_page
from folio.storage import LocalStore
from folio.theme import THEME_KEY, ThemeToggle


def make_toggle(store=None):
    stage = Stage(seed=42)
    build_page(stage.surface)
    toggle = ThemeToggle(stage, store if store is not None else LocalStore())
    toggle.start()
    return stage, toggle


def icon_text(stage):
    s = stage.surface
    return s.get(s.descendants(s.find("theme-toggle"), "theme-icon")[0]).text


def test_defaults_to_dark():
    stage, toggle = make_toggle()
    assert toggle.theme == "dark"
    assert stage.surface.has_class(stage.surface.body, "dark-theme")
    assert icon_text(stage) == "☀️"


def test_click_toggles_and_persists():
    store = LocalStore()
    stage, toggle = make_toggle(store)
    s = stage.surface
    button = s.find("theme-toggle")
    stage.click(button)
    stage.step()
    assert toggle.theme == "light"
    assert s.has_class(s.body, "light-theme")
    assert not s.has_class(s.body, "dark-theme")
    assert icon_text(stage) == "🌙"
    assert store.get(THEME_KEY) == "light"
    assert s.get(button).style["animation"] == "glitch-btn 0.3s ease-in-out"
    stage.advance(300)
    assert "animation" not in s.get(button).style


def test_toggle_twice_returns_to_dark():
    stage, toggle = make_toggle()
    assert toggle.toggle() == "light"
    assert toggle.toggle() == "dark"


def test_saved_theme_restored(tmp_path):
    path = tmp_path / "store.json"
    make_toggle(LocalStore(path))[1].toggle()
    stage, toggle = make_toggle(LocalStore(path))
    assert toggle.theme == "light"
    assert stage.surface.has_class(stage.surface.body, "light-theme")


def test_unknown_saved_theme_ignored():
    store = LocalStore()
    store.set(THEME_KEY, "neon")
    assert make_toggle(store)[1].theme == "dark"


def test_teardown_stops_listening():
    stage, toggle = make_toggle()
    toggle.teardown()
    stage.click(stage.surface.find("theme-toggle"))
    stage.step()
    assert toggle.theme == "dark"
