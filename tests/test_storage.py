from __future__ import annotations

from pathlib import Path

import pytest

from converter.database import Database
from converter.storage import MemoryStore, SQLKeyValueStore


@pytest.fixture()
def database(tmp_path: Path):
    database = Database(f"sqlite:///{tmp_path / 'store.db'}")
    database.create_all()
    yield database
    database.dispose()


def test_memory_store_get_set_remove():
    store = MemoryStore()
    assert store.get("missing") is None

    store.set("key", "value")
    assert store.get("key") == "value"

    store.remove("key")
    store.remove("key")
    assert store.get("key") is None


def test_sql_store_round_trip(database):
    store = SQLKeyValueStore(database.session)

    assert store.get("lastFromCurrency") is None
    store.set("lastFromCurrency", "USD")
    store.set("lastFromCurrency", "GBP")

    assert store.get("lastFromCurrency") == "GBP"


def test_sql_store_survives_new_session(database):
    SQLKeyValueStore(database.session).set("conversionHistory", "[]")
    database.remove_session()

    assert SQLKeyValueStore(database.session).get("conversionHistory") == "[]"


def test_sql_store_remove(database):
    store = SQLKeyValueStore(database.session)
    store.set("conversionHistory", "[]")

    store.remove("conversionHistory")
    store.remove("conversionHistory")

    assert store.get("conversionHistory") is None
