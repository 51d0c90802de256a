"""Abstract interface for exchange-rate providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict


class BaseRateProvider(ABC):
    """Defines the interface every rate provider implements."""

    name: str

    @abstractmethod
    async def fetch(self, base: str) -> Dict[str, Decimal]:
        """Return the rate table for ``base``.

        Makes a single attempt. Raises ``NetworkError`` on a non-success status,
        a malformed body or a transport failure.
        """

    def close(self) -> None:
        """Release any transport resources held by the provider."""
