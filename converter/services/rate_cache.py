"""In-memory cache of rate tables keyed by base currency."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, Optional

from converter.constants import CACHE_DURATION
from converter.providers.schemas import RateSet, normalize_code
from converter.utils.datetime import ensure_utc


class RateCache:
    """Holds one RateSet per base currency for the lifetime of the process.

    Stale entries are never returned but stay in place until the next ``put``
    for the same base overwrites them.
    """

    def __init__(self, max_age: timedelta = CACHE_DURATION) -> None:
        self._max_age = max_age
        self._entries: Dict[str, RateSet] = {}
        self._lock = threading.Lock()

    def get(self, base: str, now: datetime) -> Optional[RateSet]:
        with self._lock:
            entry = self._entries.get(normalize_code(base))
        if entry is None or not entry.is_fresh(now, self._max_age):
            return None
        return entry

    def put(self, base: str, rates: Mapping[str, Decimal], now: datetime) -> RateSet:
        base_currency = normalize_code(base)
        fetched_at = ensure_utc(now)
        with self._lock:
            previous = self._entries.get(base_currency)
            # fetched_at never moves backwards for a base, even when an older
            # in-flight fetch finishes last.
            if previous is not None and previous.fetched_at > fetched_at:
                fetched_at = previous.fetched_at
            entry = RateSet(base_currency=base_currency, fetched_at=fetched_at, rates=dict(rates))
            self._entries[base_currency] = entry
        return entry

    def __contains__(self, base: object) -> bool:
        if not isinstance(base, str):
            return False
        with self._lock:
            return normalize_code(base) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
