"""Helper factories for building common payloads and domain objects in tests."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from converter.services import ConversionResult

FIXED_NOW = datetime(2025, 10, 17, 9, 30, tzinfo=UTC)


def make_convert_payload(
    amount: Any = "100",
    from_currency: str = "USD",
    to_currency: str = "EUR",
) -> dict[str, Any]:
    """Return a conversion request payload."""

    return {"amount": amount, "from_currency": from_currency, "to_currency": to_currency}


def make_result(
    amount: Decimal | str = Decimal("100"),
    from_currency: str = "USD",
    to_currency: str = "EUR",
    rate: Decimal | str = Decimal("0.92"),
    computed_at: datetime | None = None,
) -> ConversionResult:
    """Return a ConversionResult with the converted amount derived from ``rate``."""

    amount_dec = Decimal(str(amount))
    rate_dec = Decimal(str(rate))
    return ConversionResult(
        amount=amount_dec,
        from_currency=from_currency,
        converted_amount=(amount_dec * rate_dec).quantize(Decimal("0.01")),
        to_currency=to_currency,
        rate=rate_dec,
        computed_at=computed_at or FIXED_NOW,
    )
