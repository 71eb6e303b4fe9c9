"""SQLAlchemy async database setup and startup connection handling."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from carebase.config import settings
from carebase.exceptions import DatabaseConnectionError, UnexpectedStoreError
from carebase.models.orm import Base

logger = logging.getLogger(__name__)

# Attempts beyond this multiple reuse the same delay
MAX_DELAY_MULTIPLIER = 3


def _connect_args(database_url: str) -> dict:
    """Driver-level timeouts, shared by every connection in the pool."""
    if database_url.startswith("postgresql+asyncpg"):
        return {
            "timeout": settings.db_connect_timeout,
            "command_timeout": settings.db_command_timeout,
        }
    if database_url.startswith("sqlite"):
        return {"timeout": settings.db_connect_timeout}
    return {}


def build_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(
        database_url,
        echo=settings.debug,
        connect_args=_connect_args(database_url),
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.database_url)
async_session = build_session_factory(engine)


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """One session, one transaction: commit on success, roll back on error.

    Driver and ORM failures surface as UnexpectedStoreError; domain errors
    raised inside the block propagate unchanged after the rollback.
    """
    try:
        async with session_factory() as session, session.begin():
            yield session
    except SQLAlchemyError as e:
        logger.exception("Database operation failed")
        raise UnexpectedStoreError(str(e)) from e


def retry_delay_ms(initial_delay_ms: int, attempt: int) -> int:
    return initial_delay_ms * min(attempt, MAX_DELAY_MULTIPLIER)


class ConnectionManager:
    """Owns the engine's startup connection and its last known state."""

    def __init__(self, engine: AsyncEngine, create_tables: bool = True) -> None:
        self.engine = engine
        self.create_tables = create_tables
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def _ping(self) -> None:
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if self.create_tables:
                await conn.run_sync(Base.metadata.create_all)

    async def connect(self, max_retries: int, initial_delay_ms: int) -> None:
        """Connect to the database, retrying with capped linear backoff.

        Raises DatabaseConnectionError once max_retries consecutive attempts
        have failed; the caller is expected to abort startup.
        """
        url = self.engine.url.render_as_string(hide_password=True)
        attempt = 0
        while True:
            attempt += 1
            logger.info("Connecting to database (attempt %d): %s", attempt, url)
            try:
                await self._ping()
            except (SQLAlchemyError, OSError, TimeoutError) as e:
                self._connected = False
                logger.error("Database connection failed (attempt %d): %s", attempt, e)
                if attempt >= max_retries:
                    logger.error("Exceeded %d connection attempts, giving up", max_retries)
                    raise DatabaseConnectionError(
                        f"Could not connect to database after {attempt} attempts: {e}",
                        attempts=attempt,
                    ) from e
                wait = retry_delay_ms(initial_delay_ms, attempt)
                logger.info("Retrying in %d ms", wait)
                await asyncio.sleep(wait / 1000)
            else:
                self._connected = True
                logger.info("Connected to database")
                return

    async def dispose(self) -> None:
        await self.engine.dispose()
        self._connected = False
