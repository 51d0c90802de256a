from __future__ import annotations

import json
import logging
from decimal import Decimal

import pytest
from flask import Flask

from converter.logging import (
    REQUEST_ID_HEADER,
    JSONLogFormatter,
    fetch_log_extra,
    init_request_logging,
    setup_logging,
    structured_fields,
)


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture()
def root_logger():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    for handler in saved_handlers:
        root.removeHandler(handler)
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


def _record(msg="Converted %s", args=("100 USD",), **extra):
    record = logging.LogRecord("converter.test", logging.INFO, __file__, 10, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    record = _record(event="conversion.completed", rate=Decimal("0.92"))

    document = json.loads(JSONLogFormatter().format(record))

    assert document["message"] == "Converted 100 USD"
    assert document["level"] == "INFO"
    assert document["logger"] == "converter.test"
    assert document["event"] == "conversion.completed"
    assert document["rate"] == "0.92"
    assert "timestamp" in document


def test_structured_fields_skips_standard_attributes():
    record = _record(base="USD", _private="hidden")

    assert structured_fields(record) == {"base": "USD"}


def test_setup_logging_json(root_logger):
    app = Flask(__name__)
    app.config.update(LOG_JSON_ENABLED="true", LOG_LEVEL="debug")

    setup_logging(app)

    assert root_logger.level == logging.DEBUG
    assert app.logger.level == logging.DEBUG
    assert isinstance(root_logger.handlers[0].formatter, JSONLogFormatter)


def test_setup_logging_plain_format_and_unknown_level(root_logger):
    app = Flask(__name__)
    app.config.update(LOG_JSON_ENABLED=False, LOG_LEVEL="chatty", LOG_FORMAT="%(levelname)s:%(message)s")

    setup_logging(app)
    setup_logging(app)

    assert root_logger.level == logging.INFO
    assert len(root_logger.handlers) == 1
    formatter = root_logger.handlers[0].formatter
    assert not isinstance(formatter, JSONLogFormatter)
    assert formatter._fmt == "%(levelname)s:%(message)s"


def test_request_logging_propagates_request_id(root_logger):
    app = Flask(__name__)
    app.config["TESTING"] = True

    @app.route("/ping")
    def ping():
        return "pong"

    setup_logging(app)
    init_request_logging(app)
    captured = _ListHandler()
    root_logger.addHandler(captured)

    response = app.test_client().get("/ping", headers={REQUEST_ID_HEADER: "req-42"})

    assert response.headers[REQUEST_ID_HEADER] == "req-42"
    record = next(r for r in captured.records if r.getMessage() == "Request handled")
    assert record.event == "request.completed"
    assert record.status == 200
    assert record.route == "/ping"
    assert record.request_id == "req-42"
    assert record.duration_ms >= 0


def test_request_logging_generates_request_id(root_logger):
    app = Flask(__name__)

    @app.route("/ping")
    def ping():
        return "pong"

    init_request_logging(app)

    response = app.test_client().get("/ping")

    assert len(response.headers[REQUEST_ID_HEADER]) == 32


def test_fetch_log_extra_outside_request():
    extra = fetch_log_extra(provider="mock", base="USD", status="success", duration_ms=1.23456)

    assert extra == {
        "event": "rates.fetch",
        "provider": "mock",
        "base": "USD",
        "status": "success",
        "duration_ms": 1.235,
    }


def test_fetch_log_extra_carries_request_id_and_error():
    app = Flask(__name__)
    init_request_logging(app)

    with app.test_request_context("/convert", headers={REQUEST_ID_HEADER: "abc"}):
        app.preprocess_request()
        extra = fetch_log_extra(
            provider="exchangerate_api", base="EUR", status="error", duration_ms=None, error="boom"
        )

    assert extra["request_id"] == "abc"
    assert extra["error"] == "boom"
    assert "duration_ms" not in extra
