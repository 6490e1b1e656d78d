from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from enum import Enum
from typing import AsyncIterator, Awaitable, Callable

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

from items_api.core.config import Settings
from items_api.core.errors import FatalStartupError


LOG = logging.getLogger(__name__)

EngineFactory = Callable[..., AsyncEngine]
Sleep = Callable[[float], Awaitable[None]]


class PoolState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


class ConnectionPool:
    """Ready-to-query handle over a bounded SQLAlchemy connection pool."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[AsyncConnection]:
        """Borrow one connection for a single statement.

        The statement runs in its own transaction: committed when the block exits
        cleanly, rolled back on error. The connection goes back to the pool either way.
        """
        async with self.engine.begin() as conn:
            yield conn

    async def ping(self) -> None:
        """Run the liveness probe. Raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()


class ConnectionPoolManager:
    """Build the connection pool at startup, retrying with a fixed delay.

    The database may start after this service, so a failed attempt is logged and
    retried up to ``max_attempts`` times. Exhausting the attempts raises
    :class:`FatalStartupError`; callers must not start serving in that case.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        engine_factory: EngineFactory = create_async_engine,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.settings = settings
        self.state = PoolState.UNINITIALIZED
        self.pool: ConnectionPool | None = None
        self._engine_factory = engine_factory
        self._sleep = sleep

    def _create_engine(self) -> AsyncEngine:
        return self._engine_factory(
            self.settings.sqlalchemy_database_uri,
            pool_size=self.settings.DB_POOL_SIZE,
            max_overflow=0,
            pool_pre_ping=True,
        )

    async def initialize(self, max_attempts: int | None = None, delay: float | None = None) -> ConnectionPool:
        if max_attempts is None:
            max_attempts = self.settings.DB_CONNECT_ATTEMPTS
        if delay is None:
            delay = self.settings.DB_CONNECT_DELAY
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

        self.state = PoolState.CONNECTING
        last_exc: Exception | None = None
        for attempt in range(1, max_attempts + 1):
            engine: AsyncEngine | None = None
            try:
                engine = self._create_engine()
                pool = ConnectionPool(engine)
                await pool.ping()
            except Exception as exc:
                last_exc = exc
                LOG.warning("database connection failed attempt=%d/%d err=%s", attempt, max_attempts, exc)
                if engine is not None:
                    await engine.dispose()
                if attempt < max_attempts:
                    await self._sleep(delay)
                continue

            self.pool = pool
            self.state = PoolState.READY
            LOG.info("database connection ready attempt=%d/%d pool_size=%d", attempt, max_attempts, self.settings.DB_POOL_SIZE)
            return pool

        self.state = PoolState.FAILED
        LOG.error("database unreachable after %d attempts", max_attempts)
        raise FatalStartupError(f"could not connect to database after {max_attempts} attempts") from last_exc

    async def close(self) -> None:
        if self.pool is not None:
            await self.pool.dispose()
            self.pool = None
        self.state = PoolState.UNINITIALIZED
