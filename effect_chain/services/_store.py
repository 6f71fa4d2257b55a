"""SQL Store — async SQLAlchemy engine behind the Store handle.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - SQLAlchemy exceptions surface as StoreError with the original as __cause__
    - Pool options only apply to pooled drivers; SQLite gets the driver default

Design Decisions:
    - expire_on_commit=False: prevents lazy-load issues in async context
    - The engine is created eagerly but opens no connection until connect()
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from effect_chain.errors import StoreError

logger = logging.getLogger(__name__)


class SqlStore:
    """Store handle with pooled async sessions and a health check."""

    def __init__(
        self,
        database_url: str,
        pool_size: int | None = None,
        max_overflow: int | None = None,
    ) -> None:
        options: dict[str, Any] = {}
        if not database_url.startswith("sqlite"):
            options.update(pool_pre_ping=True, pool_recycle=3600)
            if pool_size is not None:
                options["pool_size"] = pool_size
            if max_overflow is not None:
                options["max_overflow"] = max_overflow
        self.engine = create_async_engine(database_url, **options)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"DB session error: {e}")
            raise StoreError(type(e).__name__, "session") from e
        finally:
            await session.close()

    async def connect(self) -> None:
        """Open one connection to prove the database is reachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StoreError(str(e), "connect") from e

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except StoreError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


__all__ = ("SqlStore",)
