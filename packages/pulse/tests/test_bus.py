"""Tests for EventBus."""
from pulse.bus import EventBus


def test_publish_is_queued_until_flush():
    bus = EventBus()
    received = []
    bus.subscribe("scroll", lambda name, data: received.append((name, data)))
    bus.publish("scroll", scroll_y=120)
    assert received == []
    assert bus.flush() == 1
    assert received == [("scroll", {"scroll_y": 120})]


def test_flush_without_subscribers():
    bus = EventBus()
    bus.publish("nobody", value=1)
    assert bus.flush() == 1
    assert bus.flush() == 0


def test_unsubscribe():
    bus = EventBus()
    received = []

    def handler(name, data):
        received.append(name)

    bus.subscribe("scroll", handler)
    bus.unsubscribe("scroll", handler)
    bus.unsubscribe("scroll", handler)
    bus.unsubscribe("never", handler)
    bus.publish("scroll")
    bus.flush()
    assert received == []


def test_target_listeners_run_before_subscribers():
    bus = EventBus()
    order = []
    bus.subscribe("click", lambda name, data: order.append("global"))
    bus.listen(5, "click", lambda name, data: order.append("element"))
    bus.publish("click", target=5)
    bus.flush()
    assert order == ["element", "global"]


def test_listeners_only_see_their_target():
    bus = EventBus()
    seen = []
    bus.listen(1, "click", lambda name, data: seen.append(data["target"]))
    bus.publish("click", target=2)
    bus.publish("click", target=1)
    bus.flush()
    assert seen == [1]


def test_unlisten_and_forget():
    bus = EventBus()
    seen = []

    def handler(name, data):
        seen.append((name, data["target"]))

    bus.listen(1, "click", handler)
    bus.listen(1, "pointerenter", handler)
    bus.listen(2, "click", handler)
    bus.unlisten(2, "click", handler)
    bus.unlisten(2, "click", handler)
    bus.forget(1)
    for target in (1, 2):
        bus.publish("click", target=target)
        bus.publish("pointerenter", target=target)
    bus.flush()
    assert seen == []


def test_events_published_during_flush_wait():
    bus = EventBus()
    seen = []

    def handler(name, data):
        seen.append(name)
        if name == "first":
            bus.publish("second")

    bus.subscribe("first", handler)
    bus.subscribe("second", handler)
    bus.publish("first")
    bus.flush()
    assert seen == ["first"]
    bus.flush()
    assert seen == ["first", "second"]


def test_clear_drops_queue():
    bus = EventBus()
    seen = []
    bus.subscribe("scroll", lambda name, data: seen.append(name))
    bus.publish("scroll")
    bus.clear()
    assert bus.flush() == 0
    assert seen == []
