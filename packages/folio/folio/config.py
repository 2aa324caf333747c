"""Site configuration dataclass."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping


@dataclass(frozen=True)
class SiteConfig:
    """Immutable configuration for the portfolio host and page.

    Attributes:
        host: Interface the Flask server binds to.
        port: TCP port the Flask server listens on.
        data_dir: Directory holding ``info.json``, ``services.json`` and
            ``skills.json``.
        static_dir: Directory holding ``index.html`` and page assets.
        phone: WhatsApp number; non-digits are stripped when building URLs.
        store_path: JSON file backing the local store. Empty keeps the
            store in memory.
        api_base: Base URL the data client fetches from.
    """

    host: str = "0.0.0.0"
    port: int = 3000
    data_dir: str = "data"
    static_dir: str = "public"
    phone: str = "+966547540321"
    store_path: str = ""
    api_base: str = "http://localhost:3000"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SiteConfig:
        """Build a config from ``PORT``, ``HOST`` and ``GLITCHFOLIO_*`` variables."""
        if environ is None:
            environ = os.environ
        config = cls()
        overrides: dict[str, object] = {}
        if "PORT" in environ:
            overrides["port"] = int(environ["PORT"])
        if "HOST" in environ:
            overrides["host"] = environ["HOST"]
        for name in ("data_dir", "static_dir", "phone", "store_path", "api_base"):
            key = f"GLITCHFOLIO_{name.upper()}"
            if key in environ:
                overrides[name] = environ[key]
        if "port" in overrides and "GLITCHFOLIO_API_BASE" not in environ:
            overrides["api_base"] = f"http://localhost:{overrides['port']}"
        return replace(config, **overrides)
