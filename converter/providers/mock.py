"""Mock provider implementation for testing and local development."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict

from converter.constants import SUPPORTED_CURRENCIES
from converter.errors import NetworkError

from .base import BaseRateProvider
from .schemas import normalize_code

# Units of each currency per 1 USD.
USD_RATES: Dict[str, Decimal] = {
    "USD": Decimal("1"),
    "EUR": Decimal("0.92"),
    "GBP": Decimal("0.79"),
    "INR": Decimal("83.12"),
    "JPY": Decimal("149.50"),
    "AUD": Decimal("1.52"),
    "CAD": Decimal("1.36"),
    "CHF": Decimal("0.88"),
    "CNY": Decimal("7.24"),
    "MXN": Decimal("17.05"),
}


class MockRateProvider(BaseRateProvider):
    """Deterministic provider deriving cross rates from a fixed USD table."""

    name = "mock"

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def fetch(self, base: str) -> Dict[str, Decimal]:
        base_currency = normalize_code(base)
        self.calls.append(base_currency)
        base_rate = USD_RATES.get(base_currency)
        if base_rate is None:
            raise NetworkError()
        return {
            code: USD_RATES[code] / base_rate
            for code in SUPPORTED_CURRENCIES
        }
