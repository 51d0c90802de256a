"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from converter import create_app  # noqa: E402
from converter.database import get_database  # noqa: E402
from converter.services import ConversionEngine, CurrencyConverter, RateCache  # noqa: E402
from converter.services.converter import get_converter  # noqa: E402
from converter.storage import MemoryStore  # noqa: E402
from tests.stubs import StubProvider  # noqa: E402


@pytest.fixture()
def app(tmp_path: Path) -> Iterator:
    """Flask application bound to a fresh SQLite file and the mock provider."""

    flask_app = create_app(
        "development",
        overrides={
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'test.db'}",
            "FX_RATE_PROVIDER": "mock",
        },
    )

    yield flask_app

    get_converter(flask_app).close()
    get_database(flask_app).dispose()


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""

    with app.test_client() as client:
        yield client


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def provider() -> StubProvider:
    return StubProvider()


@pytest.fixture()
def engine(provider: StubProvider) -> ConversionEngine:
    return ConversionEngine(RateCache(), provider)


@pytest.fixture()
def converter(provider: StubProvider, store: MemoryStore) -> CurrencyConverter:
    return CurrencyConverter.create(provider, store)
