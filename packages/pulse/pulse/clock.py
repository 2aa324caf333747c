"""Clock for the fixed-timestep stage."""


class Clock:
    def __init__(self, tps: int = 1000) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._ms_per_tick = 1000.0 / tps
        self._tick_number = 0

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def ms_per_tick(self) -> float:
        return self._ms_per_tick

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def now_ms(self) -> float:
        return self._tick_number * self._ms_per_tick

    def ticks_for(self, ms: float) -> int:
        """Number of whole ticks covering ``ms`` milliseconds (at least 1)."""
        if ms <= 0:
            return 0
        return max(1, round(ms / self._ms_per_tick))

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number

    def reset(self, tick_number: int = 0) -> None:
        self._tick_number = tick_number
