"""Route handlers for the conversion history ledger."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from converter.schemas import HistoryCollectionSchema
from converter.services import format_history_entry, get_converter

from . import blp


def _serialize_entry(entry) -> dict:
    return {
        "amount": entry.amount,
        "from_currency": entry.from_currency,
        "converted_amount": entry.converted_amount,
        "to_currency": entry.to_currency,
        "rate": entry.rate,
        "timestamp": entry.timestamp,
        "label": format_history_entry(entry),
    }


@blp.route("")
class History(MethodView):
    @blp.response(200, HistoryCollectionSchema())
    def get(self):
        entries = get_converter(current_app).get_history()
        return {"items": [_serialize_entry(entry) for entry in entries], "count": len(entries)}

    @blp.response(204)
    def delete(self):
        get_converter(current_app).clear_history()
