"""Error types raised by the converter core and their Flask handlers."""

from __future__ import annotations

from typing import Any

from flask import Flask, jsonify

NETWORK_ERROR_MESSAGE = "Unable to fetch exchange rates. Please check your internet connection."


class APIError(Exception):
    """Base class for errors surfaced to the caller."""

    status_code: int = 400

    def __init__(
        self, message: str, *, status_code: int | None = None, payload: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload or {}


class ValidationError(APIError):
    """User input failed a precondition; the conversion does not proceed."""

    status_code = 422


class NetworkError(APIError):
    """The rate fetch failed (bad status, malformed body or transport failure)."""

    status_code = 502

    def __init__(self, message: str = NETWORK_ERROR_MESSAGE, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class CorruptionError(ValueError):
    """Persisted history could not be parsed. Never leaves HistoryLedger.load."""


DEFAULT_STATUS_MESSAGES: dict[int, str] = {
    400: "Request could not be processed.",
    404: "Resource not found.",
    422: "Submitted data is invalid.",
    502: NETWORK_ERROR_MESSAGE,
}


def register_error_handlers(app: Flask) -> None:
    """Attach error handlers to the Flask application."""

    @app.errorhandler(APIError)
    def handle_api_error(error: APIError):
        message = error.message or DEFAULT_STATUS_MESSAGES.get(error.status_code, "Request failed.")
        payload = error.payload or {}

        response: dict[str, Any] = {"message": message}
        if payload:
            response.update(payload)

        field_errors = _derive_field_errors(payload, default_message=message)
        if field_errors and "field_errors" not in response:
            response["field_errors"] = field_errors

        return jsonify(response), error.status_code


def _derive_field_errors(
    payload: dict[str, Any],
    *,
    default_message: str | None = None,
) -> dict[str, list[str]]:
    """Translate a ``field`` hint in the payload into a field_errors mapping."""

    if not payload:
        return {}

    if isinstance(payload.get("field_errors"), dict):
        return {
            str(field): [str(item) for item in messages]
            for field, messages in payload["field_errors"].items()
            if messages
        }

    field = payload.get("field")
    if field and default_message:
        return {str(field): [default_message]}

    return {}
