"""Async engine and session factory for the payroll ledger."""

from __future__ import annotations

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from hr_payroll.config import get_settings
from hr_payroll.models import Base

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def create_engine_from_settings(database_url: str | None = None) -> AsyncEngine:
    """Build an engine for ``database_url`` or the configured URL.

    SQLite URLs skip the connection pool options PostgreSQL needs.
    """
    settings = get_settings()
    url = make_url(database_url or settings.database_url)
    if url.get_backend_name() == "sqlite":
        return create_async_engine(url, echo=settings.debug)
    return create_async_engine(
        url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def init_db() -> async_sessionmaker[AsyncSession]:
    """Create the engine on first use and return the session factory."""
    global _engine, _session_factory
    if _session_factory is None:
        _engine = create_engine_from_settings()
        # Services flush explicitly; routes commit once per request.
        _session_factory = async_sessionmaker(_engine, expire_on_commit=False, autoflush=False)
    return _session_factory


async def create_tables() -> None:
    """Create the salaries, ot_requests and payslips tables if missing."""
    init_db()
    assert _engine is not None
    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_db() -> None:
    """Close pooled connections and forget the engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
