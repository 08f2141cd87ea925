from __future__ import annotations

import importlib
import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS

from .config import get_settings_module
from .config.settings import Settings, load_settings
from .container import Container, build_container
from .core.exceptions import ConfigurationError
from .attendance.controller import register as register_attendance
from .leaves.controller import register as register_leaves
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def load_app_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    env = dict(getattr(module, "ENV_DEFAULTS", {}))
    env.update(os.environ if environ is None else environ)
    return load_settings(env, debug=bool(getattr(module, "DEBUG", False)))


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    if container is None:
        container = build_container(settings=load_app_settings())
    settings = container.settings

    app = Flask(__name__)
    app.config["DEBUG"] = settings.debug
    app.json.sort_keys = False
    app.extensions["container"] = container
    CORS(app)

    logger.info(
        "[attendance-leave] settings=%s spreadsheet=%s",
        get_settings_module(),
        settings.sheets.spreadsheet_id,
    )

    register_users(app, container)
    register_attendance(app, container)
    register_leaves(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app


def run() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO)
    try:
        settings = load_app_settings()
    except ConfigurationError as e:
        logger.error("Refusing to start: %s", e)
        raise SystemExit(1) from e
    if settings.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    app = create_app(build_container(settings=settings))
    app.run(host="0.0.0.0", port=settings.port, debug=settings.debug)


if __name__ == "__main__":
    run()
