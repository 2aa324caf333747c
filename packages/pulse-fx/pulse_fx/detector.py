"""Motion capability detection."""
from __future__ import annotations

import enum
import random as _random_mod
import time
from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable

from pulse import Viewport

MOBILE_MAX_WIDTH = 768


class PerformanceTier(enum.Enum):
    NORMAL = "normal"
    LOW = "low"


@runtime_checkable
class CapabilityProbe(Protocol):
    """Classifies the runtime into a performance tier."""

    def __call__(self) -> PerformanceTier:
        ...


class BenchmarkProbe:
    """Times a burst of pseudo-random draws.

    Single sample, no retries: a busy machine can read as LOW and a fast
    one as NORMAL by luck. Tests should use ``FixedProbe`` instead.
    """

    def __init__(
        self,
        draws: int = 100_000,
        budget_ms: float = 10.0,
        timer: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.draws = draws
        self.budget_ms = budget_ms
        self._timer = timer

    def __call__(self) -> PerformanceTier:
        rng = _random_mod.Random()
        start = self._timer()
        for _ in range(self.draws):
            rng.random()
        elapsed_ms = (self._timer() - start) * 1000.0
        return PerformanceTier.LOW if elapsed_ms > self.budget_ms else PerformanceTier.NORMAL


class FixedProbe:
    """Always reports the same tier."""

    def __init__(self, tier: PerformanceTier = PerformanceTier.NORMAL) -> None:
        self.tier = tier

    def __call__(self) -> PerformanceTier:
        return self.tier


@dataclass(frozen=True)
class MotionProfile:
    reduced_motion: bool
    is_mobile: bool
    is_low_performance: bool
    pointer_capable: bool = True

    @property
    def tier(self) -> PerformanceTier:
        return PerformanceTier.LOW if self.is_low_performance else PerformanceTier.NORMAL


def detect(viewport: Viewport, probe: CapabilityProbe | None = None) -> MotionProfile:
    """Read motion constraints once. Never raises."""
    if probe is None:
        probe = BenchmarkProbe()
    return MotionProfile(
        reduced_motion=viewport.prefers_reduced_motion,
        is_mobile=viewport.width <= MOBILE_MAX_WIDTH,
        is_low_performance=probe() is PerformanceTier.LOW,
        pointer_capable=not viewport.touch,
    )
