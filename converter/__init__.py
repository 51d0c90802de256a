"""Application factory for the currency converter service."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Flask
from flask_smorest import Api

from config import get_config
from .cli import register_cli
from .database import init_app as init_db
from .errors import register_error_handlers
from .logging import init_request_logging, setup_logging


def create_app(
    config_name: str | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Flask:
    """Application factory adhering to the Flask app factory pattern."""

    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    if overrides:
        app.config.update(overrides)

    setup_logging(app)
    init_request_logging(app)
    _configure_api(app)
    api = _register_extensions(app)
    _register_blueprints(api)
    register_error_handlers(app)

    register_cli(app)
    return app


def _configure_api(app: Flask) -> None:
    app.config.setdefault("API_TITLE", "Currency Converter API")
    app.config.setdefault("API_VERSION", "v1")
    app.config.setdefault("OPENAPI_VERSION", "3.0.3")
    app.config.setdefault("OPENAPI_URL_PREFIX", "/docs")
    app.config.setdefault("OPENAPI_SWAGGER_UI_PATH", "/")
    app.config.setdefault(
        "OPENAPI_SWAGGER_UI_URL",
        "https://cdn.jsdelivr.net/npm/swagger-ui-dist/",
    )


def _register_extensions(app: Flask) -> Api:
    """Create the database-backed store and the converter core."""

    from .services import init_converter
    from .storage import SQLKeyValueStore

    database = init_db(app)
    init_converter(app, SQLKeyValueStore(database.session))

    api = Api(app)
    app.extensions["smorest_api"] = api
    return api


def _register_blueprints(api: Api) -> None:
    from .conversions import blp as conversions_blp
    from .health import blp as health_blp
    from .history import blp as history_blp
    from .preferences import blp as preferences_blp

    api.register_blueprint(health_blp, url_prefix="/health")
    api.register_blueprint(conversions_blp)
    api.register_blueprint(history_blp, url_prefix="/history")
    api.register_blueprint(preferences_blp, url_prefix="/preferences")
