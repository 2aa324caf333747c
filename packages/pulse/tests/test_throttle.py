"""Tests for Throttle."""
import pytest

from pulse import Stage, Throttle


def test_leading_call_runs_and_rest_dropped():
    stage = Stage(seed=42)
    calls = []
    throttle = Throttle(stage.scope("t"), 100, calls.append)
    assert throttle(1) is True
    assert throttle(2) is False
    assert throttle.in_window
    stage.advance(99)
    assert throttle(3) is False
    stage.advance(1)
    assert not throttle.in_window
    assert throttle(4) is True
    assert calls == [1, 4]


def test_kwargs_forwarded():
    stage = Stage(seed=42)
    seen = []
    throttle = Throttle(stage.scope("t"), 10, lambda x, y: seen.append((x, y)))
    throttle(x=1, y=2)
    assert seen == [(1, 2)]


def test_cancelled_scope_keeps_window_closed():
    stage = Stage(seed=42)
    scope = stage.scope("t")
    throttle = Throttle(scope, 10, lambda: None)
    throttle()
    scope.cancel_all()
    stage.advance(50)
    assert throttle.in_window


def test_limit_must_be_positive():
    stage = Stage(seed=42)
    with pytest.raises(ValueError):
        Throttle(stage.scope("t"), 0, lambda: None)
