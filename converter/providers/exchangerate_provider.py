"""Provider backed by the ``GET {base_url}/{base}`` exchange-rate API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from decimal import Decimal
from time import perf_counter
from typing import Any, Dict

from converter.errors import NetworkError
from converter.logging import fetch_log_extra

from .base import BaseRateProvider
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError
from .schemas import normalize_code, normalize_rates

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.exchangerate-api.com/v4/latest"


class ExchangeRateApiProvider(BaseRateProvider):
    """Fetches the full rate table for a base currency in one request."""

    name = "exchangerate_api"

    def __init__(self, client: HTTPClient) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> ExchangeRateApiProvider:
        base_url_value = config.get("RATES_API_BASE_URL")
        if not isinstance(base_url_value, str) or not base_url_value.strip():
            base_url = DEFAULT_BASE_URL
        else:
            base_url = base_url_value
        timeout = float(config.get("REQUEST_TIMEOUT_SECONDS", 5))
        return cls(HTTPClient(HTTPClientConfig(base_url=base_url, timeout=timeout)))

    async def fetch(self, base: str) -> Dict[str, Decimal]:
        base_currency = normalize_code(base)
        start = perf_counter()
        try:
            payload = await asyncio.to_thread(self._client.get, f"/{base_currency}")
            rates = self._extract_rates(payload)
        except (HTTPClientError, ValueError) as exc:
            logger.warning(
                "Rate fetch for %s failed",
                base_currency,
                extra=fetch_log_extra(
                    provider=self.name,
                    base=base_currency,
                    status="error",
                    duration_ms=(perf_counter() - start) * 1000,
                    error=str(exc),
                ),
            )
            raise NetworkError() from exc

        logger.info(
            "Fetched %d rates for %s",
            len(rates),
            base_currency,
            extra=fetch_log_extra(
                provider=self.name,
                base=base_currency,
                status="success",
                duration_ms=(perf_counter() - start) * 1000,
            ),
        )
        return rates

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _extract_rates(payload: Mapping[str, Any]) -> Dict[str, Decimal]:
        raw_rates = payload.get("rates")
        if not isinstance(raw_rates, Mapping) or not raw_rates:
            raise ValueError("Response payload is missing a non-empty 'rates' mapping")
        return normalize_rates(raw_rates)
