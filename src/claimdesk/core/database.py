# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Database connection management with asyncpg and connection pooling."""

import contextlib
from collections.abc import AsyncIterator

import asyncpg
from attrs import field, frozen
from beartype import beartype

from .config import Settings, get_settings
from .logging_utils import get_logger
from .result_types import Err, Ok

logger = get_logger(__name__)


@frozen
class PoolConfig:
    """Immutable pool configuration derived from settings."""

    min_connections: int = field()
    max_connections: int = field()
    connection_timeout: float = field(default=10.0)
    command_timeout: float = field(default=30.0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PoolConfig":
        return cls(
            min_connections=settings.database_pool_min,
            max_connections=settings.database_pool_max,
            connection_timeout=settings.database_pool_timeout,
            command_timeout=settings.database_command_timeout,
        )


class Database:
    """Connection pool manager used by the persistence gateway."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._config = PoolConfig.from_settings(self._settings)
        self._pool: asyncpg.Pool | None = None

    @beartype
    async def connect(self) -> None:
        """Create the connection pool (no-op when already connected)."""
        if self._pool is not None:
            return

        self._pool = await asyncpg.create_pool(
            self._settings.database_url,
            min_size=self._config.min_connections,
            max_size=self._config.max_connections,
            command_timeout=self._config.command_timeout,
        )
        logger.info(
            "Database pool ready (min=%d, max=%d)",
            self._config.min_connections,
            self._config.max_connections,
        )

    @beartype
    async def disconnect(self) -> None:
        """Close the connection pool."""
        if self._pool is not None:
            await self._pool.close()
            logger.info("Database pool closed")
        self._pool = None

    @contextlib.asynccontextmanager
    async def acquire(
        self, *, timeout: float | None = None
    ) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a pooled connection."""
        if self._pool is None:
            raise RuntimeError("Database not connected")

        timeout = timeout or self._config.connection_timeout
        async with self._pool.acquire(timeout=timeout) as conn:
            yield conn

    @contextlib.asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a connection and open a transaction on it."""
        async with self.acquire() as conn:
            async with conn.transaction():
                yield conn

    @beartype
    async def health_check(self):
        """Run a trivial query against the pool."""
        try:
            async with self.acquire(timeout=5.0) as conn:
                result = await conn.fetchval("SELECT 1")
                if result != 1:
                    return Err("Health check query failed")
            return Ok(True)
        except Exception as e:
            return Err(f"Health check failed: {str(e)}")

    @property
    def is_connected(self) -> bool:
        return self._pool is not None


_database: Database | None = None


@beartype
def get_database() -> Database:
    """Get global database instance."""
    global _database
    if _database is None:
        _database = Database()
    return _database
