"""Tests for TimerRegistry and TimerScope."""
import pytest

from pulse.timers import TimerRegistry


class FakeTime:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_registry():
    t = FakeTime()
    return t, TimerRegistry(t)


class TestTimeouts:
    def test_fires_once_when_due(self):
        t, reg = make_registry()
        fired = []
        reg.set_timeout(100, lambda: fired.append(t.now))
        t.now = 99
        assert reg.fire_due(t.now) == 0
        t.now = 100
        assert reg.fire_due(t.now) == 1
        t.now = 500
        reg.fire_due(t.now)
        assert fired == [100]
        assert reg.pending() == 0

    def test_deadline_then_creation_order(self):
        t, reg = make_registry()
        order = []
        reg.set_timeout(50, lambda: order.append("b"))
        reg.set_timeout(20, lambda: order.append("a"))
        reg.set_timeout(50, lambda: order.append("c"))
        t.now = 60
        reg.fire_due(t.now)
        assert order == ["a", "b", "c"]

    def test_negative_delay_rejected(self):
        _, reg = make_registry()
        with pytest.raises(ValueError):
            reg.set_timeout(-1, lambda: None)

    def test_cancel(self):
        t, reg = make_registry()
        fired = []
        handle = reg.set_timeout(10, lambda: fired.append(1))
        assert reg.active(handle)
        reg.cancel(handle)
        reg.cancel(handle)
        reg.cancel(None)
        assert not reg.active(handle)
        t.now = 20
        reg.fire_due(t.now)
        assert fired == []

    def test_cancel_later_timer_from_earlier_callback(self):
        t, reg = make_registry()
        fired = []
        later = reg.set_timeout(10, lambda: fired.append("later"))
        reg.set_timeout(5, lambda: reg.cancel(later))
        t.now = 10
        reg.fire_due(t.now)
        assert fired == []

    def test_timer_created_while_firing_waits_for_next_batch(self):
        t, reg = make_registry()
        fired = []

        def first():
            fired.append("first")
            reg.set_timeout(0, lambda: fired.append("nested"))

        reg.set_timeout(5, first)
        t.now = 5
        reg.fire_due(t.now)
        assert fired == ["first"]
        reg.fire_due(t.now)
        assert fired == ["first", "nested"]


class TestIntervals:
    def test_recurs_until_cancelled(self):
        t, reg = make_registry()
        fired = []
        handle = reg.set_interval(20, lambda: fired.append(t.now))
        for ms in range(1, 101):
            t.now = ms
            reg.fire_due(t.now)
        assert fired == [20, 40, 60, 80, 100]
        reg.cancel(handle)
        t.now = 200
        reg.fire_due(t.now)
        assert len(fired) == 5

    def test_cancel_from_inside_callback(self):
        t, reg = make_registry()
        fired = []
        handle = None

        def tick():
            fired.append(t.now)
            if len(fired) == 2:
                reg.cancel(handle)

        handle = reg.set_interval(10, tick)
        for ms in range(1, 60):
            t.now = ms
            reg.fire_due(t.now)
        assert fired == [10, 20]

    def test_non_positive_interval_rejected(self):
        _, reg = make_registry()
        with pytest.raises(ValueError):
            reg.set_interval(0, lambda: None)

    def test_interval_clamped_to_minimum(self):
        t = FakeTime()
        reg = TimerRegistry(t, min_interval_ms=5.0)
        fired = []
        reg.set_interval(1, lambda: fired.append(t.now))
        for ms in range(1, 11):
            t.now = ms
            reg.fire_due(t.now)
        assert fired == [5, 10]


class TestFrames:
    def test_frame_request_fires_once(self):
        _, reg = make_registry()
        seen = []
        reg.request_frame(seen.append)
        assert reg.fire_frames(16.0) == 1
        assert reg.fire_frames(32.0) == 0
        assert seen == [16.0]

    def test_frame_requested_inside_frame_runs_next_frame(self):
        _, reg = make_registry()
        seen = []

        def loop(now_ms):
            seen.append(now_ms)
            reg.request_frame(loop)

        reg.request_frame(loop)
        reg.fire_frames(1.0)
        reg.fire_frames(17.0)
        assert seen == [1.0, 17.0]
        assert reg.pending() == 1

    def test_cancel_frame(self):
        _, reg = make_registry()
        seen = []
        handle = reg.request_frame(seen.append)
        reg.cancel(handle)
        reg.fire_frames(1.0)
        assert seen == []


class TestScope:
    def test_cancel_all(self):
        t, reg = make_registry()
        scope = reg.scope("reveal")
        fired = []
        scope.set_timeout(10, lambda: fired.append("timeout"))
        scope.set_interval(10, lambda: fired.append("interval"))
        scope.request_frame(lambda now: fired.append("frame"))
        other = reg.set_timeout(10, lambda: fired.append("other"))
        assert scope.pending() == 3
        scope.cancel_all()
        assert scope.pending() == 0
        t.now = 10
        reg.fire_due(t.now)
        reg.fire_frames(t.now)
        assert fired == ["other"]
        assert not reg.active(other)

    def test_fired_timeout_leaves_scope(self):
        t, reg = make_registry()
        scope = reg.scope("x")
        scope.set_timeout(5, lambda: None)
        scope.request_frame(lambda now: None)
        t.now = 5
        reg.fire_due(t.now)
        reg.fire_frames(t.now)
        assert scope.pending() == 0

    def test_scope_cancel_single(self):
        t, reg = make_registry()
        scope = reg.scope("x")
        fired = []
        handle = scope.set_interval(5, lambda: fired.append(1))
        scope.cancel(handle)
        scope.cancel(None)
        t.now = 20
        reg.fire_due(t.now)
        assert fired == []
        assert scope.pending() == 0
        assert scope.name == "x"


def test_clear_drops_everything():
    t, reg = make_registry()
    fired = []
    reg.set_timeout(1, lambda: fired.append(1))
    reg.set_interval(1, lambda: fired.append(2))
    reg.request_frame(lambda now: fired.append(3))
    reg.clear()
    t.now = 10
    reg.fire_due(t.now)
    reg.fire_frames(t.now)
    assert fired == []
    assert reg.pending() == 0
