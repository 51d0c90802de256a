"""Route handlers for health checks."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from converter.schemas import HealthStatusSchema
from converter.services import get_converter

from . import blp


@blp.route("")
class HealthStatus(MethodView):
    @blp.response(200, HealthStatusSchema())
    def get(self):
        converter = get_converter(current_app)
        return {
            "status": "ok",
            "app": current_app.config.get("APP_NAME", "currency-converter"),
            "provider": current_app.config.get("FX_RATE_PROVIDER"),
            "history_items": len(converter.ledger),
        }
