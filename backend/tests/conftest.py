import asyncio
import os
import sys

import bcrypt
import pytest
from fastapi.testclient import TestClient

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from helpers import TEST_ADMIN_PASSWORD, TEST_JWT_SECRET  # noqa: E402

# app.main validates these at import time.
for _key, _value in {
    "JWT_SECRET": TEST_JWT_SECRET,
    "ALLOWED_ORIGINS": "http://localhost:3000",
    "ADMIN_USERNAME": "admin",
    "ADMIN_PASSWORD_HASH": bcrypt.hashpw(
        TEST_ADMIN_PASSWORD.encode(), bcrypt.gensalt(rounds=4)
    ).decode(),
    "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
}.items():
    os.environ.setdefault(_key, _value)

from app import db, models  # noqa: E402,F401
from app.main import app as main_app  # noqa: E402
from app.routers import auth  # noqa: E402


@pytest.fixture(scope="session")
def session_loop():
    """Event loop shared by the sync fixtures that touch the async engine."""

    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture(scope="session", autouse=True)
def database(session_loop):
    url = os.environ["DATABASE_URL"]
    if url.startswith("sqlite") and ":memory:" not in url:
        path = url.split("///", 1)[-1]
        if os.path.exists(path):
            os.remove(path)

    db.engine = None
    db.AsyncSessionLocal = None
    engine = db.get_engine()
    yield engine
    session_loop.run_until_complete(engine.dispose())
    db.engine = None
    db.AsyncSessionLocal = None


async def _recreate_tables(engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(db.Base.metadata.drop_all)
        await conn.run_sync(db.Base.metadata.create_all)


@pytest.fixture(autouse=True)
def clean_state(session_loop, database, monkeypatch):
    """Empty tables, reset login throttling and pin a strong JWT secret."""

    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    session_loop.run_until_complete(_recreate_tables(database))
    auth.limiter.reset()


@pytest.fixture
def run(session_loop):
    return session_loop.run_until_complete


@pytest.fixture
def client():
    with TestClient(main_app) as c:
        yield c


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {auth.create_token('admin')}"}
