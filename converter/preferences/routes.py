"""Route handlers for the persisted currency pair."""

from __future__ import annotations

from dataclasses import asdict

from flask import current_app
from flask.views import MethodView

from converter.schemas import PreferencesSchema, PreferencesUpdateSchema
from converter.services import get_converter

from . import blp


@blp.route("")
class PreferenceItem(MethodView):
    @blp.response(200, PreferencesSchema())
    def get(self):
        return asdict(get_converter(current_app).get_preferences())

    @blp.arguments(PreferencesUpdateSchema)
    @blp.response(200, PreferencesSchema())
    def put(self, payload):
        preferences = get_converter(current_app).set_preferences(
            payload["from_currency"], payload["to_currency"]
        )
        return asdict(preferences)


@blp.route("/swap")
class PreferenceSwap(MethodView):
    @blp.arguments(PreferencesUpdateSchema)
    @blp.response(200, PreferencesSchema())
    def post(self, payload):
        preferences = get_converter(current_app).swap_currencies(
            payload["from_currency"], payload["to_currency"]
        )
        return asdict(preferences)
