import os
from typing import Any, AsyncIterator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool, StaticPool

Base = declarative_base()

# Built on first use; tests reset both to point at a fresh database.
engine: Optional[AsyncEngine] = None
AsyncSessionLocal: Optional[async_sessionmaker[AsyncSession]] = None


def _normalize_database_url(database_url: str) -> str:
    """Route plain ``postgresql://`` URLs through the asyncpg driver."""

    scheme, sep, rest = database_url.partition("://")
    if scheme in ("postgres", "postgresql"):
        return f"postgresql+asyncpg{sep}{rest}"
    return database_url


def _engine_options(database_url: str) -> dict[str, Any]:
    if not database_url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    # An in-memory SQLite database lives only as long as its one connection.
    if ":memory:" in database_url:
        return {"poolclass": StaticPool}
    return {"poolclass": NullPool}


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it from ``DATABASE_URL``.

    Raises ``RuntimeError`` when ``DATABASE_URL`` is unset so a misconfigured
    deployment fails on its first query instead of at import time.
    """

    global engine, AsyncSessionLocal

    if engine is not None:
        return engine

    raw_url = os.getenv("DATABASE_URL")
    if not raw_url:
        raise RuntimeError("DATABASE_URL environment variable is required")
    url = _normalize_database_url(raw_url)

    engine = create_async_engine(url, **_engine_options(url))
    AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)
    return engine


async def create_schema() -> None:
    """Create all tables (used by the seed script; migrations cover deploys)."""

    from . import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding one session per request."""

    get_engine()
    assert AsyncSessionLocal is not None
    async with AsyncSessionLocal() as session:
        yield session
