"""Dataclasses describing normalized rate tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Dict, Mapping

from converter.utils.datetime import ensure_utc


def normalize_code(code: str) -> str:
    """Trim and upper-case a currency code; reject non-ASCII input."""

    normalized = str(code).strip().upper()
    if not normalized.isascii():
        raise ValueError(f"Currency code must be ASCII: {code!r}")
    return normalized


def normalize_rates(rates: Mapping[str, Decimal | float | int | str]) -> Dict[str, Decimal]:
    """Coerce a rate table into ``{CODE: Decimal}``, requiring positive finite rates."""

    normalized: Dict[str, Decimal] = {}
    for code, value in rates.items():
        if isinstance(value, bool):
            raise ValueError(f"Rate for {code!r} must be numeric, got {value!r}")
        try:
            rate = Decimal(str(value))
        except (InvalidOperation, ValueError) as exc:
            raise ValueError(f"Rate for {code!r} must be numeric, got {value!r}") from exc
        if not rate.is_finite() or rate <= 0:
            raise ValueError(f"Rate for {code!r} must be a positive finite number, got {value!r}")
        normalized[normalize_code(code)] = rate
    return normalized


@dataclass(frozen=True)
class RateSet:
    """Rate table for one base currency, stamped with the time it was fetched."""

    base_currency: str
    fetched_at: datetime
    rates: Dict[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_currency", normalize_code(self.base_currency))
        object.__setattr__(self, "rates", normalize_rates(self.rates))
        object.__setattr__(self, "fetched_at", ensure_utc(self.fetched_at))
        if not self.rates:
            raise ValueError("RateSet requires a non-empty rates mapping")

    def is_fresh(self, now: datetime, max_age: timedelta) -> bool:
        return ensure_utc(now) - self.fetched_at < max_age

    def rate_for(self, code: str) -> Decimal | None:
        return self.rates.get(normalize_code(code))
