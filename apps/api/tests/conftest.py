from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

# Settings are read at import time, so the environment goes first
os.environ.setdefault("ENV", "test")
os.environ.setdefault("JWT_SECRET", "test_jwt_secret_32_chars_minimum")
os.environ.setdefault("DATABASE_URL", "sqlite:///./gatherly-test.db")
os.environ.setdefault("DB_AUTO_CREATE", "false")

from app.db import create_tables, get_db, make_engine, make_sessionmaker  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture
def db_engine(tmp_path):
    """Fresh SQLite file per test; a file (not :memory:) so threads share it."""
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return make_sessionmaker(db_engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_client(session_factory):
    """Factory for independent clients, one cookie jar (one logged-in user) each."""

    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    clients: list[TestClient] = []

    def _make() -> TestClient:
        c = TestClient(app)
        clients.append(c)
        return c

    yield _make

    for c in clients:
        c.close()
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
