"""Flask data provider: static page, JSON data endpoints and a health check."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from flask import Flask, Response, jsonify, send_from_directory

from folio.config import SiteConfig
from folio.data import DATA_FILES, read_json_file

logger = logging.getLogger(__name__)


def create_app(config: SiteConfig | None = None) -> Flask:
    if config is None:
        config = SiteConfig.from_env()
    static_dir = Path(config.static_dir).resolve()
    data_dir = Path(config.data_dir).resolve()

    app = Flask(__name__, static_folder=str(static_dir), static_url_path="")
    app.config["SITE"] = config

    @app.after_request
    def allow_cors(response: Response) -> Response:
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    def data_view(name: str):
        def view():
            payload = read_json_file(data_dir, f"{name}.json")
            if payload is None:
                return jsonify({"error": f"Failed to load {name} data"}), 500
            return jsonify(payload)

        view.__name__ = f"api_{name}"
        return view

    for name in DATA_FILES:
        app.add_url_rule(f"/api/{name}", view_func=data_view(name), methods=["GET"])

    @app.route("/")
    def index():
        return send_from_directory(static_dir, "index.html")

    @app.route("/health")
    def health():
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        return jsonify({"status": "OK", "timestamp": timestamp.replace("+00:00", "Z")})

    return app


def serve(config: SiteConfig) -> None:
    app = create_app(config)
    logger.info("Glitch Portfolio server running on port %d", config.port)
    logger.info("Local: http://localhost:%d", config.port)
    logger.info("Network: http://%s:%d", config.host, config.port)
    app.run(host=config.host, port=config.port)
