"""Timeouts, intervals and frame requests on virtual time."""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Callable

from pulse.types import HandleId


@dataclass(order=True)
class Timer:
    """A scheduled callback. Recurs every ``interval_ms`` when set."""

    due_ms: float
    seq: int
    handle: HandleId = field(compare=False)
    callback: Callable[[], None] = field(compare=False)
    interval_ms: float | None = field(default=None, compare=False)
    cancelled: bool = field(default=False, compare=False)


class TimerRegistry:
    """Owns every pending timer and frame request of a stage.

    Timers fire in (deadline, creation order). A timer created while a
    batch is firing never fires in that same batch.
    """

    def __init__(self, now: Callable[[], float], min_interval_ms: float = 1.0) -> None:
        self._now = now
        self._min_interval = min_interval_ms
        self._heap: list[Timer] = []
        self._live: dict[HandleId, Timer] = {}
        self._frames: dict[HandleId, Callable[[float], None]] = {}
        self._next_handle: HandleId = 1
        self._seq: int = 0

    def _new_handle(self) -> HandleId:
        handle = self._next_handle
        self._next_handle += 1
        return handle

    def _push(self, timer: Timer) -> None:
        self._seq += 1
        timer.seq = self._seq
        heapq.heappush(self._heap, timer)

    def set_timeout(self, ms: float, callback: Callable[[], None]) -> HandleId:
        if ms < 0:
            raise ValueError(f"delay must be >= 0, got {ms}")
        handle = self._new_handle()
        timer = Timer(due_ms=self._now() + ms, seq=0, handle=handle, callback=callback)
        self._live[handle] = timer
        self._push(timer)
        return handle

    def set_interval(self, ms: float, callback: Callable[[], None]) -> HandleId:
        if ms <= 0:
            raise ValueError(f"interval must be positive, got {ms}")
        interval = max(ms, self._min_interval)
        handle = self._new_handle()
        timer = Timer(
            due_ms=self._now() + interval,
            seq=0,
            handle=handle,
            callback=callback,
            interval_ms=interval,
        )
        self._live[handle] = timer
        self._push(timer)
        return handle

    def request_frame(self, callback: Callable[[float], None]) -> HandleId:
        handle = self._new_handle()
        self._frames[handle] = callback
        return handle

    def cancel(self, handle: HandleId | None) -> None:
        """Cancel a timer or frame request. Unknown handles are ignored."""
        if handle is None:
            return
        timer = self._live.pop(handle, None)
        if timer is not None:
            timer.cancelled = True
        self._frames.pop(handle, None)

    def active(self, handle: HandleId) -> bool:
        return handle in self._live or handle in self._frames

    def pending(self) -> int:
        return len(self._live) + len(self._frames)

    def fire_due(self, now_ms: float) -> int:
        """Fire every timer due at or before ``now_ms``. Returns the count fired."""
        batch: list[Timer] = []
        while self._heap and self._heap[0].due_ms <= now_ms:
            timer = heapq.heappop(self._heap)
            if not timer.cancelled:
                batch.append(timer)

        fired = 0
        for timer in batch:
            if timer.cancelled:
                continue
            if timer.interval_ms is None:
                self._live.pop(timer.handle, None)
            timer.callback()
            fired += 1
            if timer.interval_ms is not None and not timer.cancelled:
                timer.due_ms += timer.interval_ms
                self._push(timer)
        return fired

    def fire_frames(self, now_ms: float) -> int:
        """Run the frame requests queued before this call, once each."""
        queued = self._frames
        self._frames = {}
        for callback in queued.values():
            callback(now_ms)
        return len(queued)

    def scope(self, name: str) -> TimerScope:
        return TimerScope(name, self)

    def clear(self) -> None:
        for timer in self._live.values():
            timer.cancelled = True
        self._live.clear()
        self._heap.clear()
        self._frames.clear()


class TimerScope:
    """The handles one engine owns, cancellable as a group."""

    def __init__(self, name: str, registry: TimerRegistry) -> None:
        self.name = name
        self._registry = registry
        self._handles: set[HandleId] = set()

    def set_timeout(self, ms: float, callback: Callable[[], None]) -> HandleId:
        handle: HandleId = 0

        def fire() -> None:
            self._handles.discard(handle)
            callback()

        handle = self._registry.set_timeout(ms, fire)
        self._handles.add(handle)
        return handle

    def set_interval(self, ms: float, callback: Callable[[], None]) -> HandleId:
        handle = self._registry.set_interval(ms, callback)
        self._handles.add(handle)
        return handle

    def request_frame(self, callback: Callable[[float], None]) -> HandleId:
        handle: HandleId = 0

        def fire(now_ms: float) -> None:
            self._handles.discard(handle)
            callback(now_ms)

        handle = self._registry.request_frame(fire)
        self._handles.add(handle)
        return handle

    def cancel(self, handle: HandleId | None) -> None:
        if handle is None:
            return
        self._handles.discard(handle)
        self._registry.cancel(handle)

    def cancel_all(self) -> None:
        for handle in list(self._handles):
            self._registry.cancel(handle)
        self._handles.clear()

    def pending(self) -> int:
        return len(self._handles)
