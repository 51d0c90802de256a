"""Persistent key-value string store used for history and preferences."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import scoped_session

from converter.models import StoredValue


class KeyValueStore(Protocol):
    """Opaque string store. Absent keys are valid and read as ``None``."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """Dict-backed store for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class SQLKeyValueStore:
    """Store persisted in the ``kv_store`` table."""

    def __init__(self, session: scoped_session) -> None:
        self._session = session

    def get(self, key: str) -> str | None:
        row = self._session.get(StoredValue, key)
        return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        session = self._session
        try:
            row = session.get(StoredValue, key)
            if row is None:
                session.add(StoredValue(key=key, value=value))
            else:
                row.value = value
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise

    def remove(self, key: str) -> None:
        session = self._session
        try:
            session.query(StoredValue).filter_by(key=key).delete()
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            raise
