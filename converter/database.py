"""SQLAlchemy engine and session lifecycle for the key-value store."""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, scoped_session, sessionmaker


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class Database:
    """Owns one engine and its thread-local scoped session factory."""

    def __init__(self, database_uri: str) -> None:
        self.engine: Engine = create_engine(database_uri, future=True)
        self.session = scoped_session(sessionmaker(bind=self.engine, autoflush=False))

    def create_all(self) -> None:
        from . import models  # noqa: F401  # register tables on Base.metadata

        Base.metadata.create_all(self.engine)

    def remove_session(self) -> None:
        self.session.remove()

    def dispose(self) -> None:
        self.session.remove()
        self.engine.dispose()


def init_app(app: Any) -> Database:
    """Create the database for the Flask application and ensure tables exist."""

    database = Database(app.config["SQLALCHEMY_DATABASE_URI"])
    database.create_all()

    @app.teardown_appcontext
    def shutdown_session(_: BaseException | None = None) -> None:
        database.remove_session()

    app.extensions["database"] = database
    return database


def get_database(app: Any) -> Database:
    """Return the database attached to the app; raise if not yet initialized."""

    database = app.extensions.get("database")
    if database is None:
        raise RuntimeError("Database has not been initialized. Call init_app first.")
    return database
