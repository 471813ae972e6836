"""Async SQLAlchemy database handle and session dependency.

The application builds one ``Database`` in its factory, opens it in the
lifespan startup and disposes it on shutdown. Request handlers reach it
through ``request.app.state.database``.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger("riskboard.database")


class Base(DeclarativeBase):
    pass


def _engine_kwargs(url: str, echo: bool) -> dict:
    kwargs: dict = {"echo": echo}
    if "postgresql" in url:
        # PostgreSQL connection pool settings
        kwargs.update({
            "pool_size": 10,
            "max_overflow": 20,
            "pool_pre_ping": True,
            "pool_recycle": 3600,
        })
    return kwargs


class Database:
    """Owns the engine and session factory for one database URL."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.engine = create_async_engine(url, **_engine_kwargs(url, echo))
        self.sessionmaker = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def create_schema(self) -> None:
        """Create all tables that do not exist yet."""
        # Ensure model modules are imported so SQLAlchemy metadata is populated.
        from riskboard.models import risk  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.exception("database readiness check failed")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency yielding an async DB session from the app's database handle."""
    database: Database = request.app.state.database
    async with database.sessionmaker() as session:
        yield session
