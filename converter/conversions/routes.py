"""Route handlers for conversions and the supported currency list."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from converter.constants import SUPPORTED_CURRENCIES
from converter.schemas import (
    ConversionResultSchema,
    ConvertRequestSchema,
    CurrencyCollectionSchema,
    ErrorMessageSchema,
)
from converter.services import ConversionRequest, currency_symbol, format_result, get_converter

from . import blp


@blp.route("/convert")
class Conversion(MethodView):
    @blp.arguments(ConvertRequestSchema)
    @blp.response(200, ConversionResultSchema())
    @blp.alt_response(422, schema=ErrorMessageSchema())
    @blp.alt_response(502, schema=ErrorMessageSchema())
    def post(self, payload):
        converter = get_converter(current_app)
        request = ConversionRequest(
            amount=payload.get("amount"),
            from_currency=payload.get("from_currency"),
            to_currency=payload.get("to_currency"),
        )
        result = current_app.ensure_sync(converter.convert)(request)
        body = result.to_dict()
        body["display"] = format_result(result)
        return body


@blp.route("/currencies")
class CurrencyCollection(MethodView):
    @blp.response(200, CurrencyCollectionSchema())
    def get(self):
        return {
            "items": [
                {"code": code, "symbol": currency_symbol(code)} for code in SUPPORTED_CURRENCIES
            ]
        }
