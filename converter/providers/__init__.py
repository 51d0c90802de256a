"""Rate provider interface, implementations and factory."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import BaseRateProvider
from .exchangerate_provider import ExchangeRateApiProvider
from .http_client import HTTPClient, HTTPClientConfig, HTTPClientError
from .mock import MockRateProvider
from .schemas import RateSet


def build_provider(config: Mapping[str, Any]) -> BaseRateProvider:
    """Instantiate the single provider named by ``FX_RATE_PROVIDER``."""

    name = str(config.get("FX_RATE_PROVIDER") or ExchangeRateApiProvider.name).lower()
    if name == MockRateProvider.name:
        return MockRateProvider()
    if name == ExchangeRateApiProvider.name:
        return ExchangeRateApiProvider.from_config(config)
    raise ValueError(f"Unknown provider '{name}'")


__all__ = [
    "BaseRateProvider",
    "ExchangeRateApiProvider",
    "HTTPClient",
    "HTTPClientConfig",
    "HTTPClientError",
    "MockRateProvider",
    "RateSet",
    "build_provider",
]
