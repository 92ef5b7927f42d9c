import logging
import traceback
from typing import Any

import valkey.asyncio as valkey

from catalog.core.clients.base import BaseClient
from catalog.core.config import ValkeySettings

logger = logging.getLogger(__name__)

# Error messages
VALKEY_NOT_INITIALIZED = "Valkey client is not initialized"


class ValkeyClient(BaseClient[ValkeySettings]):
    """Client for the Valkey cache that fronts the metadata store."""

    def __init__(self, config: ValkeySettings) -> None:
        super().__init__(config)
        self._client: valkey.Valkey | None = None
        self._initialized: bool = False

    async def initialize(self) -> None:
        """Initialize the Valkey client."""
        if self._initialized:
            return

        logger.info(
            f"Initializing Valkey client with connection {self.config.host}:{self.config.port}"
        )
        try:
            self._client = valkey.Valkey(
                host=self.config.host,
                port=self.config.port,
                password=self.config.password,
                db=self.config.db,
                ssl=self.config.ssl,
                socket_timeout=self.config.socket_timeout,
                socket_connect_timeout=self.config.socket_connect_timeout,
                health_check_interval=self.config.health_check_interval,
                max_connections=self.config.max_connections,
            )
            self._initialized = True
            logger.info("Valkey client initialization successful")
        except Exception:
            logger.exception(
                f"Failed to initialize Valkey client with host={self.config.host}, port={self.config.port}, db={self.config.db}"
            )
            logger.debug(traceback.format_exc())
            raise

    async def cleanup(self) -> None:
        """Close the Valkey client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            self._initialized = False

    async def get_metrics(self) -> dict[str, Any]:
        """Get client metrics."""
        if not self._client:
            return {"status": "not_initialized"}

        try:
            info = await self._client.info()
            return {
                "status": "initialized",
                "used_memory": info.get("used_memory", 0),
                "connected_clients": info.get("connected_clients", 0),
                "uptime_in_seconds": info.get("uptime_in_seconds", 0),
            }
        except Exception:
            return {
                "status": "error",
                "connection": f"{self.config.host}:{self.config.port}",
            }

    async def health_check(self) -> bool:
        """Check connectivity with a ping."""
        if not self._client:
            logger.warning("Valkey health check failed: client not initialized")
            return False

        try:
            result = await self._client.ping()
            logger.debug(f"Valkey health check result: {result}")
        except Exception:
            logger.exception("Valkey health check failed")
            return False
        else:
            return bool(result)

    def _require_client(self) -> valkey.Valkey:
        if self._client is None:
            raise ValueError(VALKEY_NOT_INITIALIZED)
        return self._client

    async def get(self, key: str) -> str | bytes | None:
        """Get the value of a key."""
        if not self._initialized:
            await self.initialize()
        return await self._require_client().get(key)

    async def set(self, key: str, value: str | bytes, ex: int | None = None) -> bool:
        """Set the value of a key, optionally expiring after `ex` seconds."""
        if not self._initialized:
            await self.initialize()
        result = await self._require_client().set(key, value, ex=ex)
        return bool(result)
