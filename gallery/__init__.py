from __future__ import annotations

import atexit
import logging
import os
from pathlib import Path
from typing import Any, Mapping

from dotenv import load_dotenv
from flask import Flask

from .core.file_cleanup import FileReclaimer
from .db import init_db
from .web.routes import web


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off", "")


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    # Load `.env` for entrypoints that bypass the Flask CLI (gunicorn, tests, `python -m gallery`).
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)

    app = Flask(__name__)

    app.config.update(
        DATABASE_PATH=os.environ.get("DATABASE_PATH", os.path.join(app.instance_path, "gallery.sqlite3")),
        UPLOAD_DIR=os.environ.get("UPLOAD_DIR", os.path.join(app.instance_path, "uploads")),
        SOURCE_DIR=os.environ.get("SOURCE_DIR", str(Path(__file__).resolve().parent.parent / "source")),
        MAX_CONTENT_LENGTH=int(os.environ.get("MAX_CONTENT_LENGTH", str(1024 * 1024 * 512))),  # 512MB
        CORS_ORIGIN=os.environ.get("CORS_ORIGIN", "*"),
        SEED_ON_EMPTY=_env_flag("SEED_ON_EMPTY", True),
        LOG_LEVEL=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )
    if config:
        app.config.update(config)

    app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"], logging.INFO))

    os.makedirs(app.instance_path, exist_ok=True)
    os.makedirs(app.config["UPLOAD_DIR"], exist_ok=True)

    # Raises StoreUnavailable; the app must not come up without its store.
    init_db(app)

    reclaimer = FileReclaimer(app.config["UPLOAD_DIR"], app.logger)
    app.extensions["gallery_reclaimer"] = reclaimer
    atexit.register(reclaimer.shutdown)

    app.register_blueprint(web)

    return app
