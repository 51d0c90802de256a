"""Display strings for conversion results and history lines."""

from __future__ import annotations

from decimal import Decimal

from converter.constants import CURRENCY_SYMBOLS

from .conversion import ConversionResult, round_currency, round_rate
from .history import HistoryEntry


def currency_symbol(code: str) -> str:
    return CURRENCY_SYMBOLS.get(code.upper(), code.upper())


def format_amount(value: Decimal, *, grouping: bool = False) -> str:
    """Two-decimal rendering, optionally with thousands separators."""

    rounded = round_currency(value)
    return f"{rounded:,.2f}" if grouping else f"{rounded:.2f}"


def format_rate(value: Decimal) -> str:
    return f"{round_rate(value):.4f}"


def format_result(result: ConversionResult) -> dict[str, str]:
    return {
        "original": f"{format_amount(result.amount)} {result.from_currency}",
        "converted": f"{format_amount(result.converted_amount, grouping=True)} {result.to_currency}",
        "rate": f"1 {result.from_currency} = {format_rate(result.rate)} {result.to_currency}",
    }


def format_history_entry(entry: HistoryEntry) -> str:
    return (
        f"{format_amount(entry.amount)} {entry.from_currency} → "
        f"{format_amount(entry.converted_amount)} {entry.to_currency}"
    )
