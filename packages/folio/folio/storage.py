"""Local key-value store and the WhatsApp interaction log."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)

INTERACTIONS_KEY = "whatsapp_interactions"
DEFAULT_USER_AGENT = "glitchfolio"


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class LocalStore:
    """String key-value store, persisted as one JSON object when given a path.

    Values are stored as strings, the way a browser's local storage keeps
    them. An unreadable or malformed file starts the store empty.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path else None
        self._items: dict[str, str] = {}
        if self._path is not None and self._path.exists():
            try:
                loaded = json.loads(self._path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                logger.warning("Ignoring unreadable store %s: %s", self._path, exc)
            else:
                if isinstance(loaded, dict):
                    self._items = {str(k): str(v) for k, v in loaded.items()}

    @property
    def path(self) -> Path | None:
        return self._path

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._items.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._items[key] = str(value)
        self._save()

    def remove(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._save()

    def keys(self) -> list[str]:
        return list(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def _save(self) -> None:
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self._items, indent=2), encoding="utf-8")


class InteractionLog:
    """Append-only log of WhatsApp hand-offs kept in the local store."""

    def __init__(
        self,
        store: LocalStore,
        user_agent: str = DEFAULT_USER_AGENT,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        self._store = store
        self._user_agent = user_agent
        self._clock = clock

    def record(self, kind: str, service: str) -> dict[str, Any]:
        interaction = {
            "type": kind,
            "service": service,
            "timestamp": self._clock(),
            "userAgent": self._user_agent,
        }
        entries = self.entries()
        entries.append(interaction)
        self._store.set(INTERACTIONS_KEY, json.dumps(entries))
        logger.info("WhatsApp interaction tracked: %s", interaction)
        return interaction

    def entries(self) -> list[dict[str, Any]]:
        raw = self._store.get(INTERACTIONS_KEY) or "[]"
        try:
            entries = json.loads(raw)
        except ValueError:
            logger.warning("Discarding malformed %s entry", INTERACTIONS_KEY)
            return []
        return entries if isinstance(entries, list) else []

    def __len__(self) -> int:
        return len(self.entries())
