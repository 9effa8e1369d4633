"""
Async SQLAlchemy engine and session factory.

The app builds one engine at startup (see `udyam_intake.main`) and keeps
it on `app.state`; nothing here connects at import time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from udyam_intake.db.models import Base

if TYPE_CHECKING:
    from udyam_intake.core.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database."""
    url = settings.DATABASE_URL
    kwargs: dict = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        kwargs.update(pool_size=20, max_overflow=10)
    return create_async_engine(url, **kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing tables (CREATE TABLE IF NOT EXISTS)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
