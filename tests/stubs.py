"""Stub providers for exercising the converter without network access."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping
from decimal import Decimal

from converter.errors import NetworkError
from converter.providers import BaseRateProvider

DEFAULT_RATES: dict[str, Decimal] = {
    "USD": Decimal("1"),
    "EUR": Decimal("0.92"),
    "GBP": Decimal("0.79"),
    "JPY": Decimal("149.5"),
}


class StubProvider(BaseRateProvider):
    """Provider returning a fixed table, or queued outcomes when supplied."""

    name = "stub"

    def __init__(
        self,
        rates: Mapping[str, Decimal] | None = None,
        outcomes: Iterable[Mapping[str, Decimal] | Exception] | None = None,
    ) -> None:
        self.rates = dict(rates if rates is not None else DEFAULT_RATES)
        self._outcomes: deque[Mapping[str, Decimal] | Exception] = deque(outcomes or [])
        self.calls: list[str] = []

    async def fetch(self, base: str) -> dict[str, Decimal]:
        self.calls.append(base)
        if self._outcomes:
            outcome = self._outcomes.popleft()
            if isinstance(outcome, Exception):
                raise outcome
            return dict(outcome)
        return dict(self.rates)


class FailingProvider(BaseRateProvider):
    """Provider that always fails the way a bad upstream response does."""

    name = "failing"

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def fetch(self, base: str) -> dict[str, Decimal]:
        self.calls.append(base)
        raise NetworkError()
