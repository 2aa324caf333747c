"""Tests for ViewportObserver."""
import pytest

from pulse.observer import ViewportObserver
from pulse.surface import Surface, Viewport


def make(threshold=0.0, bottom_margin=0.0):
    surface = Surface(Viewport(width=1280, height=800))
    batches = []
    obs = ViewportObserver(surface, batches.append, threshold, bottom_margin)
    return surface, obs, batches


def test_first_evaluation_reports_every_target():
    surface, obs, batches = make()
    visible = surface.create("div", top=100, height=100)
    hidden = surface.create("div", top=2000, height=100)
    obs.observe(visible)
    obs.observe(hidden)
    entries = obs.evaluate()
    assert [(e.target, e.is_intersecting) for e in entries] == [(visible, True), (hidden, False)]
    assert batches == [entries]


def test_reports_only_on_flip():
    surface, obs, batches = make()
    eid = surface.create("div", top=2000, height=100)
    obs.observe(eid)
    obs.evaluate()
    assert obs.evaluate() == []
    surface.viewport.scroll_y = 1500
    entries = obs.evaluate()
    assert len(entries) == 1
    assert entries[0].is_intersecting
    assert entries[0].ratio == 1.0
    assert len(batches) == 2


def test_observe_twice_is_single_target():
    surface, obs, _ = make()
    eid = surface.create("div", top=0, height=10)
    obs.observe(eid)
    obs.observe(eid)
    assert len(obs) == 1


def test_threshold():
    surface, obs, _ = make(threshold=0.6)
    eid = surface.create("div", top=750, height=100)
    obs.observe(eid)
    assert obs.ratio(eid) == pytest.approx(0.5)
    assert not obs.evaluate()[0].is_intersecting


def test_negative_bottom_margin_shrinks_root():
    surface, obs, _ = make(bottom_margin=-100)
    eid = surface.create("div", top=750, height=100)
    obs.observe(eid)
    assert obs.ratio(eid) == 0.0
    surface.viewport.scroll_y = 100
    assert obs.ratio(eid) == pytest.approx(0.5)


def test_zero_height_element_uses_its_top():
    surface, obs, _ = make()
    inside = surface.create("span", top=300)
    outside = surface.create("span", top=900)
    obs.observe(inside)
    obs.observe(outside)
    result = {e.target: e.is_intersecting for e in obs.evaluate()}
    assert result == {inside: True, outside: False}


def test_unobserve_and_disconnect():
    surface, obs, _ = make()
    a = surface.create("div", top=0, height=10)
    b = surface.create("div", top=0, height=10)
    obs.observe(a)
    obs.observe(b)
    obs.unobserve(a)
    assert not obs.observing(a)
    assert obs.observing(b)
    obs.disconnect()
    assert len(obs) == 0
    assert obs.evaluate() == []


def test_removed_elements_are_dropped():
    surface, obs, batches = make()
    eid = surface.create("div", top=0, height=10)
    obs.observe(eid)
    surface.remove(eid)
    assert obs.evaluate() == []
    assert not obs.observing(eid)
    assert batches == []


def test_threshold_out_of_range():
    surface = Surface()
    with pytest.raises(ValueError):
        ViewportObserver(surface, lambda entries: None, threshold=1.5)
