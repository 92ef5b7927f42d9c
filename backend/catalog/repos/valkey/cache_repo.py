import json
import logging
from typing import Any

from catalog.core.clients.valkey import ValkeyClient
from catalog.repos.interfaces import CacheRepository

logger = logging.getLogger(__name__)


class ValkeyCacheRepository(CacheRepository):
    """Valkey implementation of the cache repository. Values are stored as JSON."""

    def __init__(self, valkey: ValkeyClient, prefix: str = "catalog:"):
        self.valkey = valkey
        self.prefix = prefix

    async def get(self, key: str) -> Any | None:
        """Get a value from cache."""
        full_key = f"{self.prefix}{key}"
        data = await self.valkey.get(full_key)
        if data is None:
            return None
        try:
            string_data = data.decode("utf-8") if isinstance(data, bytes) else data
            return json.loads(string_data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to deserialize cached value for {key}: {e}")
            return None

    async def set(self, key: str, value: Any, expire: int | None = None) -> bool:
        """Set a value in cache."""
        full_key = f"{self.prefix}{key}"
        try:
            data = json.dumps(value)
        except (TypeError, ValueError):
            logger.warning(f"Value for {key} is not JSON serializable, not caching")
            return False

        return await self.valkey.set(full_key, data, ex=expire)
