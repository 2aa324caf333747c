"""Tests for the cursor trail."""
import pytest

from pulse import Stage

from pulse_fx import CursorState, CursorTrail


def started(stage=None):
    stage = stage or Stage(seed=42)
    trail = CursorTrail(stage)
    trail.start()
    return stage, trail


def test_start_creates_lead_and_follower():
    stage, trail = started()
    assert stage.surface.has_class(trail.lead, "custom-cursor")
    assert stage.surface.has_class(trail.follower, "cursor-follower")


def test_pointer_move_sets_target_and_lead():
    stage, trail = started()
    stage.pointer_move(100, 50)
    stage.step()
    assert (trail.state.target_x, trail.state.target_y) == (100, 50)
    assert stage.surface.get(trail.lead).style == {"left": "100px", "top": "50px"}
    assert trail.state.follower_x == pytest.approx(10.0)
    assert trail.state.follower_y == pytest.approx(5.0)


def test_pointer_moves_throttled():
    stage, trail = started()
    stage.pointer_move(10, 10)
    stage.pointer_move(20, 20)
    stage.step()
    assert trail.state.target_x == 10
    stage.advance(16)
    stage.pointer_move(30, 30)
    stage.step()
    assert trail.state.target_x == 30


def test_distance_contracts_each_step():
    stage = Stage(seed=42)
    trail = CursorTrail(stage)
    trail.state = CursorState(target_x=200, target_y=80, is_moving=True)
    previous = trail.state.distance()
    for _ in range(10):
        trail.step()
        current = trail.state.distance()
        assert current == pytest.approx(previous * 0.9)
        previous = current


def test_follower_converges_within_fifty_frames():
    stage, trail = started()
    stage.pointer_move(100, 60)
    stage.step()
    frames = 1
    while trail.state.is_moving:
        stage.advance(17)
        frames += 1
        assert frames <= 50
    assert trail.state.distance() < 1


def test_frame_loop_keeps_running_while_idle():
    stage, trail = started()
    stage.advance(1000)
    assert trail.frames >= 59
    assert not trail.state.is_moving


def test_hover_toggles_class():
    stage = Stage(seed=42)
    link = stage.surface.create("a")
    card = stage.surface.create("div", "service-card")
    _, trail = started(stage)
    stage.pointer_enter(link)
    stage.step()
    assert stage.surface.has_class(trail.lead, "cursor-hover")
    assert stage.surface.has_class(trail.follower, "cursor-hover")
    stage.pointer_leave(link)
    stage.step()
    assert not stage.surface.has_class(trail.lead, "cursor-hover")
    stage.pointer_enter(card)
    stage.step()
    assert stage.surface.has_class(trail.follower, "cursor-hover")


def test_smoothing_validated():
    with pytest.raises(ValueError):
        CursorTrail(Stage(seed=42), smoothing=0)


def test_teardown_stops_loop_and_removes_elements():
    stage, trail = started()
    stage.advance(100)
    lead = trail.lead
    trail.teardown()
    frames = trail.frames
    stage.advance(500)
    assert trail.frames == frames
    assert not stage.surface.exists(lead)
    assert stage.timers.pending() == 0
