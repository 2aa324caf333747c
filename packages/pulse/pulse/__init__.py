"""pulse - A deterministic virtual-time runtime for page effects."""

from pulse.bus import EventBus
from pulse.clock import Clock
from pulse.filters import AnyOf, Not, Tag
from pulse.observer import IntersectionEntry, ViewportObserver
from pulse.stage import Stage
from pulse.surface import Element, Surface, Viewport
from pulse.throttle import Throttle
from pulse.timers import TimerRegistry, TimerScope
from pulse.types import (
    ACTIVE,
    DONE,
    PENDING,
    ElementId,
    MissingElementError,
    StateRegressionError,
)

__all__ = [
    "Stage",
    "Surface",
    "Element",
    "Viewport",
    "Clock",
    "ElementId",
    "EventBus",
    "TimerRegistry",
    "TimerScope",
    "Throttle",
    "ViewportObserver",
    "IntersectionEntry",
    "Not",
    "AnyOf",
    "Tag",
    "PENDING",
    "ACTIVE",
    "DONE",
    "MissingElementError",
    "StateRegressionError",
]
