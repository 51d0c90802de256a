"""Persistence of the last selected currency pair."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from converter.constants import LAST_FROM_CURRENCY_KEY, LAST_TO_CURRENCY_KEY
from converter.storage import KeyValueStore


@dataclass(frozen=True)
class Preferences:
    from_currency: Optional[str] = None
    to_currency: Optional[str] = None


class PreferenceStore:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def save(self, from_currency: str, to_currency: str) -> Preferences:
        self._store.set(LAST_FROM_CURRENCY_KEY, from_currency)
        self._store.set(LAST_TO_CURRENCY_KEY, to_currency)
        return Preferences(from_currency=from_currency, to_currency=to_currency)

    def load(self) -> Preferences:
        return Preferences(
            from_currency=self._store.get(LAST_FROM_CURRENCY_KEY) or None,
            to_currency=self._store.get(LAST_TO_CURRENCY_KEY) or None,
        )

    def swap(self, from_currency: str, to_currency: str) -> Preferences:
        """Persist the pair reversed and return it."""

        return self.save(to_currency, from_currency)
