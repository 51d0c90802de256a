from __future__ import annotations

import asyncio
from decimal import Decimal

import pytest
import requests
import responses

from converter.errors import NETWORK_ERROR_MESSAGE, NetworkError
from converter.providers import ExchangeRateApiProvider, HTTPClient, HTTPClientConfig, build_provider
from converter.providers.mock import MockRateProvider
from tests.fixtures import load_json

BASE_URL = "https://api.exchangerate-api.com/v4/latest"


@pytest.fixture()
def provider():
    return ExchangeRateApiProvider(HTTPClient(HTTPClientConfig(base_url=BASE_URL, timeout=2)))


@responses.activate
def test_fetch_returns_normalized_rates(provider):
    responses.add(responses.GET, f"{BASE_URL}/USD", json=load_json("latest_usd.json"), status=200)

    rates = asyncio.run(provider.fetch("usd"))

    assert rates == {
        "USD": Decimal("1"),
        "EUR": Decimal("0.92"),
        "GBP": Decimal("0.79"),
        "JPY": Decimal("149.5"),
        "INR": Decimal("83.12"),
    }
    assert len(responses.calls) == 1


@responses.activate
def test_fetch_wraps_server_errors(provider):
    responses.add(responses.GET, f"{BASE_URL}/USD", status=500)

    with pytest.raises(NetworkError) as exc_info:
        asyncio.run(provider.fetch("USD"))

    assert exc_info.value.message == NETWORK_ERROR_MESSAGE
    assert len(responses.calls) == 1


@responses.activate
@pytest.mark.parametrize(
    "body",
    [
        {"base": "USD"},
        {"rates": {}},
        {"rates": ["EUR", 0.92]},
        {"rates": {"EUR": "cheap"}},
        {"rates": {"EUR": -1}},
    ],
)
def test_fetch_rejects_malformed_bodies(provider, body):
    responses.add(responses.GET, f"{BASE_URL}/USD", json=body, status=200)

    with pytest.raises(NetworkError):
        asyncio.run(provider.fetch("USD"))


@responses.activate
def test_fetch_rejects_invalid_json(provider):
    responses.add(responses.GET, f"{BASE_URL}/USD", body="<html>oops</html>", status=200)

    with pytest.raises(NetworkError):
        asyncio.run(provider.fetch("USD"))


@responses.activate
def test_fetch_wraps_transport_failure(provider):
    responses.add(
        responses.GET, f"{BASE_URL}/USD", body=requests.exceptions.ConnectionError("offline")
    )

    with pytest.raises(NetworkError) as exc_info:
        asyncio.run(provider.fetch("USD"))

    assert "offline" not in exc_info.value.message


def test_from_config_falls_back_to_default_base_url():
    provider = ExchangeRateApiProvider.from_config({"RATES_API_BASE_URL": "  "})
    assert provider._client._config.base_url == BASE_URL  # type: ignore[attr-defined]


def test_build_provider_selects_by_name():
    assert isinstance(build_provider({"FX_RATE_PROVIDER": "mock"}), MockRateProvider)
    assert isinstance(
        build_provider({"FX_RATE_PROVIDER": "exchangerate_api", "RATES_API_BASE_URL": BASE_URL}),
        ExchangeRateApiProvider,
    )
    with pytest.raises(ValueError):
        build_provider({"FX_RATE_PROVIDER": "ecb"})


def test_mock_provider_derives_cross_rates():
    provider = MockRateProvider()

    rates = asyncio.run(provider.fetch("eur"))

    assert rates["EUR"] == Decimal("1")
    assert rates["USD"] == Decimal("1") / Decimal("0.92")
    assert provider.calls == ["EUR"]

    with pytest.raises(NetworkError):
        asyncio.run(provider.fetch("XAU"))
