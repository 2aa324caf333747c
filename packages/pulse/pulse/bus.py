"""Input event bus with per-tick delivery."""
from __future__ import annotations

from typing import Any, Callable

Handler = Callable[[str, dict[str, Any]], None]


class EventBus:
    """Queues pointer, scroll and click events; ``flush`` delivers them.

    Events carrying a ``target`` element are also delivered to listeners
    registered on that element with ``listen``.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Handler]] = {}
        self._listeners: dict[tuple[int, str], list[Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, event_name: str, handler: Handler) -> None:
        self._subscribers.setdefault(event_name, []).append(handler)

    def unsubscribe(self, event_name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(event_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def listen(self, element_id: int, event_name: str, handler: Handler) -> None:
        self._listeners.setdefault((element_id, event_name), []).append(handler)

    def unlisten(self, element_id: int, event_name: str, handler: Handler) -> None:
        handlers = self._listeners.get((element_id, event_name))
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass
        if not handlers:
            del self._listeners[(element_id, event_name)]

    def forget(self, element_id: int) -> None:
        """Drop every listener registered on an element."""
        for key in [k for k in self._listeners if k[0] == element_id]:
            del self._listeners[key]

    def publish(self, event_name: str, **data: Any) -> None:
        self._queue.append((event_name, data))

    def flush(self) -> int:
        snapshot = self._queue
        self._queue = []
        for event_name, data in snapshot:
            target = data.get("target")
            if target is not None:
                for handler in list(self._listeners.get((target, event_name), [])):
                    handler(event_name, data)
            for handler in list(self._subscribers.get(event_name, [])):
                handler(event_name, data)
        return len(snapshot)

    def clear(self) -> None:
        self._queue.clear()
