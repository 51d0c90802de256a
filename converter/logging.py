"""Logging setup for the converter: plain or JSON lines, request correlation, fetch extras."""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from flask import Flask, g, has_request_context, request
from werkzeug.exceptions import HTTPException

REQUEST_ID_HEADER = "X-Request-ID"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Attributes every LogRecord carries; anything else on a record came from ``extra``.
_STANDARD_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class JSONLogFormatter(logging.Formatter):
    """Render each record as one compact JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        document: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        document.update(structured_fields(record))

        if record.exc_info:
            document["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            document["stack"] = record.stack_info

        return json.dumps(document, separators=(",", ":"), default=str)


def structured_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``extra`` fields attached to ``record``."""

    return {
        key: _jsonable(value)
        for key, value in vars(record).items()
        if key not in _STANDARD_RECORD_FIELDS and not key.startswith("_")
    }


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(item) for item in value]
    return str(value)


def setup_logging(app: Flask) -> None:
    """Install a single stream handler on the root logger, once per app."""

    if app.extensions.get("converter_logging"):
        return

    level = logging.getLevelName(str(app.config.get("LOG_LEVEL") or "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)
    if _flag(app.config.get("LOG_JSON_ENABLED")):
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(app.config.get("LOG_FORMAT") or DEFAULT_LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    # Flask's own logger defers to the root handler.
    app.logger.handlers.clear()
    app.logger.setLevel(level)
    app.logger.propagate = True

    app.extensions["converter_logging"] = True


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


def init_request_logging(app: Flask) -> None:
    """Tag each request with an X-Request-ID and log its outcome."""

    if app.extensions.get("converter_request_logging"):
        return

    @app.before_request
    def _begin():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.request_started = time.perf_counter()
        g.request_logged = False

    @app.after_request
    def _completed(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        app.logger.info(
            "Request handled",
            extra=_request_extra("request.completed", response.status_code),
        )
        g.request_logged = True
        return response

    @app.teardown_request
    def _failed(exc: BaseException | None):
        if exc is None or g.get("request_logged"):
            return
        status = exc.code if isinstance(exc, HTTPException) and exc.code else 500
        app.logger.error(
            "Request failed",
            extra=_request_extra("request.failed", status, error=str(exc)),
        )
        g.request_logged = True

    app.extensions["converter_request_logging"] = True


def _request_extra(event: str, status: int, *, error: str | None = None) -> dict[str, Any]:
    started = g.get("request_started")
    extra: dict[str, Any] = {
        "event": event,
        "method": request.method,
        "route": request.url_rule.rule if request.url_rule else request.path,
        "status": status,
        "request_id": g.get("request_id"),
    }
    if started is not None:
        extra["duration_ms"] = _elapsed_ms(started)
    if error:
        extra["error"] = error
    return {key: value for key, value in extra.items() if value is not None}


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 3)


def fetch_log_extra(
    *,
    provider: str,
    base: str,
    status: str,
    duration_ms: float | None,
    error: str | None = None,
) -> dict[str, Any]:
    """Structured extras for a ``rates.fetch`` log line."""

    extra: dict[str, Any] = {
        "event": "rates.fetch",
        "provider": provider,
        "base": base,
        "status": status,
    }
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 3)
    if has_request_context() and g.get("request_id"):
        extra["request_id"] = g.request_id
    if error:
        extra["error"] = error
    return extra
