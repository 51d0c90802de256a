"""Bounded, persisted ledger of past conversions (newest first)."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from converter.constants import HISTORY_STORAGE_KEY, MAX_HISTORY_ITEMS
from converter.errors import CorruptionError
from converter.storage import KeyValueStore
from converter.utils.datetime import parse_iso, to_iso

from .conversion import ConversionResult, round_currency

logger = logging.getLogger(__name__)

_REQUIRED_KEYS = ("amount", "fromCurrency", "convertedValue", "toCurrency", "rate", "timestamp")


@dataclass(frozen=True)
class HistoryEntry:
    """A recorded conversion plus the ISO-8601 time it was recorded."""

    amount: Decimal
    from_currency: str
    converted_amount: Decimal
    to_currency: str
    rate: Decimal
    timestamp: str

    @classmethod
    def from_result(cls, result: ConversionResult, now: datetime) -> HistoryEntry:
        return cls(
            amount=result.amount,
            from_currency=result.from_currency,
            converted_amount=result.converted_amount,
            to_currency=result.to_currency,
            rate=result.rate,
            timestamp=to_iso(now),
        )

    @classmethod
    def from_record(cls, record: Any) -> HistoryEntry:
        if not isinstance(record, dict):
            raise CorruptionError(f"History entry must be an object, got {type(record).__name__}")
        missing = [key for key in _REQUIRED_KEYS if key not in record]
        if missing:
            raise CorruptionError(f"History entry missing keys: {', '.join(missing)}")
        try:
            parse_iso(str(record["timestamp"]))
            return cls(
                amount=_to_decimal(record["amount"]),
                from_currency=str(record["fromCurrency"]),
                # Already rounded when recorded; rounding again is a no-op.
                converted_amount=round_currency(_to_decimal(record["convertedValue"])),
                to_currency=str(record["toCurrency"]),
                rate=_to_decimal(record["rate"]),
                timestamp=str(record["timestamp"]),
            )
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise CorruptionError(f"History entry is malformed: {exc}") from exc

    def to_record(self) -> Dict[str, str]:
        return {
            "amount": str(self.amount),
            "fromCurrency": self.from_currency,
            "convertedValue": f"{self.converted_amount:.2f}",
            "toCurrency": self.to_currency,
            "rate": str(self.rate),
            "timestamp": self.timestamp,
        }


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Expected a number, got {value!r}")
    amount = Decimal(str(value))
    if not amount.is_finite():
        raise ValueError(f"Expected a finite number, got {value!r}")
    return amount


def serialize_history(entries: List[HistoryEntry]) -> str:
    return json.dumps([entry.to_record() for entry in entries])


def deserialize_history(raw: str) -> List[HistoryEntry]:
    """Parse persisted history; raise CorruptionError on anything unreadable."""

    try:
        records = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise CorruptionError(f"History is not valid JSON: {exc}") from exc
    if not isinstance(records, list):
        raise CorruptionError("History must be a JSON array")
    return [HistoryEntry.from_record(record) for record in records]


class HistoryLedger:
    """Owns the history sequence and mirrors it to storage after every mutation."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        max_items: int = MAX_HISTORY_ITEMS,
        storage_key: str = HISTORY_STORAGE_KEY,
    ) -> None:
        self._store = store
        self._max_items = max_items
        self._storage_key = storage_key
        self._entries: List[HistoryEntry] = []
        self._lock = threading.Lock()

    @property
    def entries(self) -> List[HistoryEntry]:
        with self._lock:
            return list(self._entries)

    def load(self) -> List[HistoryEntry]:
        """Restore from storage. Unreadable history resets to empty and is logged."""

        raw = self._store.get(self._storage_key)
        entries: List[HistoryEntry] = []
        if raw:
            try:
                entries = deserialize_history(raw)[: self._max_items]
            except CorruptionError as exc:
                logger.warning(
                    "Discarding unreadable conversion history",
                    extra={"event": "history.corrupt", "error": str(exc)},
                )
                entries = []
        with self._lock:
            self._entries = entries
            return list(self._entries)

    def record(self, result: ConversionResult, now: Optional[datetime] = None) -> List[HistoryEntry]:
        entry = HistoryEntry.from_result(result, now if now is not None else result.computed_at)
        with self._lock:
            updated = [entry, *self._entries][: self._max_items]
            # Memory only changes once storage has accepted the write.
            self._store.set(self._storage_key, serialize_history(updated))
            self._entries = updated
            return list(updated)

    def clear(self) -> None:
        """Empty the ledger. Confirmation is the caller's responsibility."""

        with self._lock:
            self._store.remove(self._storage_key)
            self._entries = []
        logger.info("Conversion history cleared", extra={"event": "history.cleared"})

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
