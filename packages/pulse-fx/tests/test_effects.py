"""Tests for the Effects bootstrap and its gating."""
from pulse import DONE, Stage, Viewport

from pulse_fx import Effects, EffectsConfig, FixedProbe, PerformanceTier


def page(viewport=None, tier=PerformanceTier.NORMAL):
    stage = Stage(seed=42, viewport=viewport or Viewport())
    s = stage.surface
    s.create("span", "glitch-text", text="Alex", top=100, height=60)
    s.create("div", "hero-stats", top=600, height=100)
    s.create("span", "stat-number", text="150", top=620, height=40)
    s.create("div", "service-card", top=1200, height=300)
    s.create("div", "floating-element")
    effects = Effects(stage, probe=FixedProbe(tier))
    return stage, effects


def test_desktop_starts_everything():
    stage, effects = page()
    effects.start()
    stage.advance(100)
    s = stage.surface
    assert effects.parallax is not None
    assert effects.cursor is not None
    assert len(s.query("particle")) == 10
    assert len(s.query("matrix-column")) == 50
    assert s.query_one("custom-cursor") is not None
    assert s.has_class(s.query_one("hero-stats"), "animated")


def test_mobile_skips_parallax_cursor_and_glyphs():
    stage, effects = page(Viewport(width=375))
    effects.start()
    s = stage.surface
    assert effects.profile.is_mobile
    assert effects.parallax is None
    assert effects.cursor is None
    assert len(s.query("particle")) == 5
    assert s.query("matrix-column") == []


def test_touch_skips_cursor_only():
    stage, effects = page(Viewport(touch=True))
    effects.start()
    assert effects.cursor is None
    assert effects.parallax is not None


def test_low_performance_profile():
    stage, effects = page(tier=PerformanceTier.LOW)
    effects.start()
    s = stage.surface
    assert effects.parallax is None and effects.cursor is None
    assert s.query("particle") == [] and s.query("matrix-column") == []
    stage.advance(2100)
    assert s.get(s.query_one("stat-number")).text == "150"


def test_reduced_motion_never_appends_ambient_elements():
    stage, effects = page(Viewport(prefers_reduced_motion=True))
    appended = []
    stage.surface.on_append(lambda surface, eid, el: appended.append(el.classes))
    effects.start()
    stage.advance(60000)
    assert not any({"particle", "matrix-column"} & classes for classes in appended)


def test_config_flows_to_engines():
    stage = Stage(seed=42)
    config = EffectsConfig(counter_steps=10, desktop_particles=2)
    effects = Effects(stage, probe=FixedProbe(), config=config)
    effects.start()
    assert len(stage.surface.query("particle")) == 2


def test_start_is_idempotent():
    stage, effects = page()
    effects.start()
    effects.start()
    assert len(stage.surface.query("particle-system")) == 1


def test_stage_teardown_stops_effects():
    stage, effects = page()
    effects.start()
    stage.advance(100)
    stage.teardown()
    s = stage.surface
    assert s.query("particle-system") == []
    assert s.query("matrix-bg") == []
    assert s.query("custom-cursor") == []
    assert stage.timers.pending() == 0
    stage.advance(20000)
    assert s.query("particle") == []


def test_engines_listing():
    stage, effects = page(Viewport(width=375))
    names = {type(engine).__name__ for engine in effects.engines()}
    assert "Parallax" not in names and "CursorTrail" not in names
    assert {"RevealEngine", "CounterAnimator", "GlitchEngine", "TextEffects"} <= names


def test_effects_restart_on_same_stage_after_teardown():
    stage, effects = page()
    s = stage.surface
    item = s.create("div", "skill-item", data={"level": 80}, top=300, height=40)
    bar = s.create("div", "skill-progress", parent=item, style={"width": "0%"})
    effects.start()
    stage.advance(3000)
    stat = s.query_one("stat-number")
    assert s.get(stat).state == DONE
    assert s.get(bar).state == DONE
    stage.teardown()

    restarted = Effects(stage, probe=FixedProbe())
    restarted.start()
    stage.advance(3000)
    assert s.get(stat).text == "150"
    assert s.get(bar).style["width"] == "80%"
    assert len(s.query("particle")) == 10
    assert len(s.query("matrix-column")) == 50
