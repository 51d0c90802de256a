"""Fixed limits and lookup tables shared by the converter core."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

MIN_AMOUNT = Decimal("0.01")
MAX_AMOUNT = Decimal("1000000000")

CACHE_DURATION_MS = 3_600_000
CACHE_DURATION = timedelta(milliseconds=CACHE_DURATION_MS)

MAX_HISTORY_ITEMS = 5

# Persistent key-value store keys.
HISTORY_STORAGE_KEY = "conversionHistory"
LAST_FROM_CURRENCY_KEY = "lastFromCurrency"
LAST_TO_CURRENCY_KEY = "lastToCurrency"

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
    "AUD": "$",
    "CAD": "$",
    "CHF": "Fr",
    "CNY": "¥",
    "MXN": "$",
}

SUPPORTED_CURRENCIES: tuple[str, ...] = tuple(CURRENCY_SYMBOLS)
