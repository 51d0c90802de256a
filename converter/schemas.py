"""Schemas for API requests and responses."""

from __future__ import annotations

from marshmallow import Schema, fields
from marshmallow.validate import Length


class HealthStatusSchema(Schema):
    status = fields.String(required=True)
    app = fields.String()
    provider = fields.String()
    history_items = fields.Integer()


class CurrencySchema(Schema):
    code = fields.String(required=True)
    symbol = fields.String(required=True)


class CurrencyCollectionSchema(Schema):
    items = fields.List(fields.Nested(CurrencySchema), required=True)


class ConvertRequestSchema(Schema):
    # Left raw so the engine reports empty and non-numeric input itself.
    amount = fields.Raw(load_default=None, allow_none=True)
    from_currency = fields.String(load_default=None, allow_none=True)
    to_currency = fields.String(load_default=None, allow_none=True)


class ConversionDisplaySchema(Schema):
    original = fields.String(required=True)
    converted = fields.String(required=True)
    rate = fields.String(required=True)


class ConversionResultSchema(Schema):
    amount = fields.Decimal(as_string=True, required=True)
    from_currency = fields.String(required=True)
    converted_amount = fields.Decimal(as_string=True, required=True)
    to_currency = fields.String(required=True)
    rate = fields.Decimal(as_string=True, required=True)
    display_rate = fields.Decimal(as_string=True, required=True)
    computed_at = fields.DateTime(required=True)
    display = fields.Nested(ConversionDisplaySchema)


class HistoryEntrySchema(Schema):
    amount = fields.Decimal(as_string=True, required=True)
    from_currency = fields.String(required=True)
    converted_amount = fields.Decimal(as_string=True, required=True)
    to_currency = fields.String(required=True)
    rate = fields.Decimal(as_string=True, required=True)
    timestamp = fields.String(required=True)
    label = fields.String()


class HistoryCollectionSchema(Schema):
    items = fields.List(fields.Nested(HistoryEntrySchema), required=True)
    count = fields.Integer(required=True)


class PreferencesSchema(Schema):
    from_currency = fields.String(allow_none=True)
    to_currency = fields.String(allow_none=True)


class PreferencesUpdateSchema(Schema):
    from_currency = fields.String(required=True, validate=Length(min=1, max=12))
    to_currency = fields.String(required=True, validate=Length(min=1, max=12))


class ErrorMessageSchema(Schema):
    message = fields.String(required=True)
