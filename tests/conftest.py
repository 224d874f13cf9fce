"""
tests/conftest.py -- shared fixtures.

Every test gets a fresh in-memory SQLite engine. The API client swaps the
real lifespan for one that wires that engine into app.state, so routes run
unchanged against an isolated database.

JWT_SECRET must be in the environment before kgl.main is imported, because
the settings are read at import time.
"""
import os
from contextlib import asynccontextmanager

os.environ.setdefault("JWT_SECRET", "kgl-test-secret-0123456789abcdef0123456789")

import pytest
from fastapi.testclient import TestClient

from kgl.auth.security import create_access_token
from kgl.db.init import init_db
from kgl.db.session import make_engine, make_session_factory
from kgl.main import app

TOMATOES = {
    "produceName": "Tomatoes",
    "produceType": "Fresh",
    "date": "2026-02-14",
    "time": "10:30",
    "tonnage": 1500,
    "cost": 150000,
    "dealerName": "John Traders",
    "branch": "Maganjo",
    "contact": "0700123456",
    "sellingPrice": 200000,
}


def _patch_lifespan(engine):
    @asynccontextmanager
    async def test_lifespan(app):
        app.state.engine = engine
        app.state.session_factory = make_session_factory(engine)
        yield

    return test_lifespan


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = make_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def client(engine):
    app.router.lifespan_context = _patch_lifespan(engine)
    with TestClient(app) as client:
        yield client


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def manager_headers():
    return bearer(create_access_token(user_id=1, role="Manager"))


@pytest.fixture
def agent_headers():
    return bearer(create_access_token(user_id=2, role="SalesAgent"))
