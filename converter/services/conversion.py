"""Request validation, rate resolution and conversion arithmetic."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext, localcontext
from typing import Any, Dict, Optional

from converter.constants import MAX_AMOUNT, MIN_AMOUNT
from converter.errors import NetworkError, ValidationError
from converter.logging import fetch_log_extra
from converter.providers.base import BaseRateProvider
from converter.providers.schemas import normalize_rates
from converter.utils.datetime import ensure_utc, utc_now

from .rate_cache import RateCache

logger = logging.getLogger(__name__)

ROUNDING_PRECISION = 28
CENTS = Decimal("0.01")
RATE_DISPLAY_QUANTUM = Decimal("0.0001")

EMPTY_AMOUNT_MESSAGE = "Please enter an amount to convert"
INVALID_AMOUNT_MESSAGE = "Please enter a valid number"
BELOW_MIN_MESSAGE = f"Amount must be at least {MIN_AMOUNT}"
ABOVE_MAX_MESSAGE = f"Amount cannot exceed {MAX_AMOUNT:,}"
SAME_CURRENCY_MESSAGE = "Please select different currencies to convert"


def get_decimal_context():
    """Return the Decimal context used for all conversion arithmetic."""

    context = getcontext().copy()
    context.prec = ROUNDING_PRECISION
    context.rounding = ROUND_HALF_UP
    return context


def round_currency(value: Decimal) -> Decimal:
    """Round half-up to two decimal places. Applying it twice changes nothing."""

    with localcontext(get_decimal_context()):
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def round_rate(value: Decimal) -> Decimal:
    """Round a rate half-up to its four-decimal display precision."""

    with localcontext(get_decimal_context()):
        return value.quantize(RATE_DISPLAY_QUANTUM, rounding=ROUND_HALF_UP)


def parse_amount(raw: Any) -> Decimal:
    """Turn raw user input into a Decimal amount within the accepted range."""

    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError(EMPTY_AMOUNT_MESSAGE, payload={"field": "amount"})
    if isinstance(raw, bool):
        raise ValidationError(INVALID_AMOUNT_MESSAGE, payload={"field": "amount"})

    text = raw.strip() if isinstance(raw, str) else str(raw)
    try:
        amount = Decimal(text)
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(INVALID_AMOUNT_MESSAGE, payload={"field": "amount"}) from exc
    if not amount.is_finite():
        raise ValidationError(INVALID_AMOUNT_MESSAGE, payload={"field": "amount"})

    if amount < MIN_AMOUNT:
        raise ValidationError(BELOW_MIN_MESSAGE, payload={"field": "amount"})
    if amount > MAX_AMOUNT:
        raise ValidationError(ABOVE_MAX_MESSAGE, payload={"field": "amount"})
    return amount


def is_amount_acceptable(raw: Any) -> bool:
    """Live input check: empty input is neutral, negative or non-numeric input is not."""

    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return True
    try:
        amount = Decimal(raw.strip() if isinstance(raw, str) else str(raw))
    except (InvalidOperation, ValueError):
        return False
    return amount.is_finite() and amount >= 0


def normalize_currency(code: Any, *, field: str) -> str:
    """Normalize a currency selection to a three-letter upper-case ISO code."""

    if code is None or not str(code).strip():
        raise ValidationError("Please select a currency", payload={"field": field})
    normalized = str(code).strip().upper()
    if len(normalized) != 3 or not normalized.isascii() or not normalized.isalpha():
        raise ValidationError(
            f"Unsupported currency code '{normalized}'",
            payload={"field": field, "code": normalized},
        )
    return normalized


@dataclass(frozen=True)
class ConversionRequest:
    """Raw conversion input as entered by the user."""

    amount: Any
    from_currency: str
    to_currency: str


@dataclass(frozen=True)
class ConversionResult:
    """Immutable outcome of one conversion."""

    amount: Decimal
    from_currency: str
    converted_amount: Decimal
    to_currency: str
    rate: Decimal
    computed_at: datetime

    @property
    def display_rate(self) -> Decimal:
        return round_rate(self.rate)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": self.amount,
            "from_currency": self.from_currency,
            "converted_amount": self.converted_amount,
            "to_currency": self.to_currency,
            "rate": self.rate,
            "display_rate": self.display_rate,
            "computed_at": self.computed_at,
        }


class ConversionEngine:
    """Validates a request, resolves rates through the cache and computes the result.

    Concurrent calls for a cold base currency each fetch independently; the
    last cache write wins.
    """

    def __init__(self, cache: RateCache, provider: BaseRateProvider) -> None:
        self._cache = cache
        self._provider = provider

    @property
    def cache(self) -> RateCache:
        return self._cache

    def validate(self, request: ConversionRequest) -> tuple[Decimal, str, str]:
        amount = parse_amount(request.amount)
        from_currency = normalize_currency(request.from_currency, field="from_currency")
        to_currency = normalize_currency(request.to_currency, field="to_currency")
        if from_currency == to_currency:
            raise ValidationError(SAME_CURRENCY_MESSAGE, payload={"field": "to_currency"})
        return amount, from_currency, to_currency

    async def resolve_rates(self, base: str, now: datetime) -> Dict[str, Decimal]:
        cached = self._cache.get(base, now)
        if cached is not None:
            logger.debug(
                "Rate cache hit for %s",
                base,
                extra=fetch_log_extra(
                    provider=getattr(self._provider, "name", "unknown"),
                    base=base,
                    status="cached",
                    duration_ms=None,
                ),
            )
            return cached.rates

        logger.debug("Rate cache miss for %s; fetching", base)
        fetched = await self._provider.fetch(base)
        try:
            rates = normalize_rates(fetched)
            if not rates:
                raise ValueError(f"Provider returned an empty rate table for {base}")
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning(
                "Discarding malformed rate table for %s",
                base,
                extra=fetch_log_extra(
                    provider=getattr(self._provider, "name", "unknown"),
                    base=base,
                    status="error",
                    duration_ms=None,
                    error=str(exc),
                ),
            )
            raise NetworkError() from exc
        # Only a fully successful fetch reaches the cache.
        return self._cache.put(base, rates, now).rates

    async def convert(
        self, request: ConversionRequest, now: Optional[datetime] = None
    ) -> ConversionResult:
        amount, from_currency, to_currency = self.validate(request)
        moment = ensure_utc(now) if now is not None else utc_now()

        rates = await self.resolve_rates(from_currency, moment)
        rate = rates.get(to_currency)
        if rate is None:
            raise ValidationError(
                f"Exchange rate for {to_currency} is not available",
                payload={"field": "to_currency", "code": to_currency},
            )

        with localcontext(get_decimal_context()):
            converted = round_currency(amount * rate)

        return ConversionResult(
            amount=amount,
            from_currency=from_currency,
            converted_amount=converted,
            to_currency=to_currency,
            rate=rate,
            computed_at=moment,
        )
