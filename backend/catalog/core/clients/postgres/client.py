import asyncio
import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import asyncpg

from catalog.core.clients.base import BaseClient
from catalog.core.config import PostgresSettings
from catalog.domain.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

# Error messages
POSTGRES_NOT_INITIALIZED = "PostgreSQL pool is not initialized"

# Failures that mean the store could not be reached, as opposed to a bad query
CONNECTION_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    asyncpg.exceptions.PostgresConnectionError,
    asyncpg.exceptions.CannotConnectNowError,
    asyncpg.exceptions.InterfaceError,
)


class PostgresClient(BaseClient[PostgresSettings]):
    """Client for the PostgreSQL metadata store."""

    def __init__(self, config: PostgresSettings) -> None:
        super().__init__(config)
        self._pool: asyncpg.Pool | None = None
        self._initialized: bool = False

    async def initialize(self) -> None:
        """Initialize the connection pool to PostgreSQL."""
        if self._initialized:
            return

        logger.info(
            f"Initializing PostgreSQL client with connection to {self.config.host}:{self.config.port}/{self.config.database}"
        )

        try:
            connect_kwargs = {
                "host": self.config.host,
                "port": self.config.port,
                "user": self.config.user,
                "password": self.config.password,
                "database": self.config.database,
                "min_size": self.config.min_connections,
                "max_size": self.config.max_connections,
            }

            if self.config.statement_timeout is not None:
                connect_kwargs["command_timeout"] = self.config.statement_timeout

            self._pool = await asyncpg.create_pool(**connect_kwargs)

            self._initialized = True
            logger.info("PostgreSQL client initialization successful")
        except Exception:
            logger.exception(
                f"Failed to initialize PostgreSQL client with host={self.config.host}, port={self.config.port}, db={self.config.database}"
            )
            logger.debug(traceback.format_exc())
            raise

    async def cleanup(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            self._initialized = False

    async def get_metrics(self) -> dict[str, Any]:
        """Get connection pool metrics."""
        if not self._pool:
            return {"status": "not_initialized"}

        return {
            "status": "initialized",
            "min_size": self.config.min_connections,
            "max_size": self.config.max_connections,
            "size": self._pool.get_size(),
            "free_size": self._pool.get_idle_size(),
        }

    async def health_check(self) -> bool:
        """Verify database connectivity with a simple query."""
        if not self._pool:
            logger.warning(
                "PostgreSQL health check failed: connection pool not initialized"
            )
            return False

        try:
            async with self._pool.acquire() as conn:
                result = await conn.fetchval("SELECT 1")
                logger.debug(f"PostgreSQL health check result: {result}")
                return result == 1
        except Exception:
            logger.exception("PostgreSQL health check failed")
            return False

    @asynccontextmanager
    async def _connection_errors(self) -> AsyncIterator[asyncpg.Pool]:
        """Yield the pool, translating connectivity failures."""
        try:
            if not self._initialized:
                await self.initialize()
            if self._pool is None:
                raise StoreUnavailableError(POSTGRES_NOT_INITIALIZED)
            yield self._pool
        except CONNECTION_ERRORS as err:
            logger.warning(f"PostgreSQL unreachable: {err!s}")
            raise StoreUnavailableError(f"Metadata store unreachable: {err!s}") from err

    async def execute(self, query: str, *args: Any) -> str:
        """Execute a SQL query and return the command tag."""
        async with self._connection_errors() as pool:
            return await pool.execute(query, *args)

    async def fetch(self, query: str, *args: Any) -> list[asyncpg.Record]:
        """Execute a query and return all rows."""
        async with self._connection_errors() as pool:
            return await pool.fetch(query, *args)

    async def fetchval(self, query: str, *args: Any) -> Any:
        """Execute a query and return a single value."""
        async with self._connection_errors() as pool:
            return await pool.fetchval(query, *args)

    async def fetchrow(self, query: str, *args: Any) -> asyncpg.Record | None:
        """Execute a query and return a single row."""
        async with self._connection_errors() as pool:
            return await pool.fetchrow(query, *args)
