"""Caller-facing facade wiring the cache, engine, ledger and preferences together."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, List, Optional

from converter.providers import build_provider
from converter.providers.base import BaseRateProvider
from converter.storage import KeyValueStore
from converter.utils.datetime import ensure_utc, utc_now

from .conversion import ConversionEngine, ConversionRequest, ConversionResult, normalize_currency
from .history import HistoryEntry, HistoryLedger
from .preferences import PreferenceStore, Preferences
from .rate_cache import RateCache

logger = logging.getLogger(__name__)

EXTENSION_KEY = "currency_converter"


class CurrencyConverter:
    """Single entry point for the presentation layer.

    Constructed once at startup; every mutation is flushed to storage as it happens.
    """

    def __init__(
        self,
        engine: ConversionEngine,
        ledger: HistoryLedger,
        preferences: PreferenceStore,
        provider: Optional[BaseRateProvider] = None,
    ) -> None:
        self.engine = engine
        self.ledger = ledger
        self.preferences = preferences
        self._provider = provider

    @classmethod
    def create(
        cls,
        provider: BaseRateProvider,
        store: KeyValueStore,
        *,
        cache: Optional[RateCache] = None,
    ) -> CurrencyConverter:
        engine = ConversionEngine(cache or RateCache(), provider)
        ledger = HistoryLedger(store)
        ledger.load()
        return cls(engine, ledger, PreferenceStore(store), provider)

    async def convert(
        self, request: ConversionRequest, now: Optional[datetime] = None
    ) -> ConversionResult:
        moment = ensure_utc(now) if now is not None else utc_now()
        result = await self.engine.convert(request, moment)
        self.ledger.record(result, moment)
        logger.info(
            "Converted %s %s to %s %s",
            result.amount,
            result.from_currency,
            result.converted_amount,
            result.to_currency,
            extra={"event": "conversion.completed"},
        )
        return result

    def get_history(self) -> List[HistoryEntry]:
        return self.ledger.entries

    def clear_history(self) -> None:
        self.ledger.clear()

    def get_preferences(self) -> Preferences:
        return self.preferences.load()

    def set_preferences(self, from_currency: str, to_currency: str) -> Preferences:
        return self.preferences.save(
            normalize_currency(from_currency, field="from_currency"),
            normalize_currency(to_currency, field="to_currency"),
        )

    def swap_currencies(self, from_currency: str, to_currency: str) -> Preferences:
        return self.preferences.swap(
            normalize_currency(from_currency, field="from_currency"),
            normalize_currency(to_currency, field="to_currency"),
        )

    def close(self) -> None:
        if self._provider is not None:
            self._provider.close()


def init_converter(app: Any, store: KeyValueStore) -> CurrencyConverter:
    """Build the converter from app config and attach it to the Flask app."""

    config: Mapping[str, Any] = app.config
    converter = CurrencyConverter.create(build_provider(config), store)
    app.extensions[EXTENSION_KEY] = converter
    return converter


def get_converter(app: Any) -> CurrencyConverter:
    converter = app.extensions.get(EXTENSION_KEY)
    if converter is None:
        raise RuntimeError("Currency converter has not been initialized.")
    return converter
