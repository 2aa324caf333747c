"""Portfolio data: JSON files on the host, HTTP fetch with fallback on the page."""
from __future__ import annotations

import http.client
import json
import logging
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)

DATA_FILES = ("info", "services", "skills")

FALLBACK_INFO: dict[str, Any] = {
    "name": "Alex DevGlitch",
    "title": "Full-Stack Developer & Bot Specialist",
    "tagline": "Crafting digital experiences with a glitch aesthetic",
}

Fetcher = Callable[[str], Any]


def read_json_file(data_dir: str | Path, filename: str) -> Any | None:
    """Parse ``data_dir/filename``. Returns None when it is missing or malformed."""
    path = Path(data_dir) / filename
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.error("Error reading %s: %s", filename, exc)
        return None


def fetch_json_url(url: str, timeout: float = 10.0) -> Any:
    """GET ``url`` and decode the JSON body. HTTP errors raise."""
    req = urllib.request.Request(url, headers={"Accept": "application/json"})
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return json.loads(resp.read().decode("utf-8"))


@dataclass
class PortfolioData:
    info: dict[str, Any] | None = None
    services: dict[str, Any] | None = None
    skills: dict[str, Any] | None = None
    fallback: bool = False

    def service_list(self) -> list[dict[str, Any]]:
        if not self.services:
            return []
        return list(self.services.get("services") or [])

    def skill_categories(self) -> list[dict[str, Any]]:
        if not self.skills:
            return []
        return list(self.skills.get("categories") or [])


def load_portfolio(base_url: str, fetch: Fetcher | None = None) -> PortfolioData:
    """Fetch info, services and skills from the data provider.

    Any failure logs and falls back to the minimal profile with no
    services or skills. There is no caching or retry.
    """
    if fetch is None:
        fetch = fetch_json_url
    base = base_url.rstrip("/")
    try:
        info, services, skills = (fetch(f"{base}/api/{name}") for name in DATA_FILES)
    except (OSError, ValueError, http.client.HTTPException) as exc:
        logger.error("Error loading data: %s", exc)
        return PortfolioData(info=dict(FALLBACK_INFO), fallback=True)
    return PortfolioData(info=info, services=services, skills=skills)


def load_local(data_dir: str | Path) -> PortfolioData:
    """Read the three data files directly, for offline simulation."""
    info, services, skills = (read_json_file(data_dir, f"{name}.json") for name in DATA_FILES)
    if info is None:
        return PortfolioData(info=dict(FALLBACK_INFO), fallback=True)
    return PortfolioData(info=info, services=services, skills=skills)
