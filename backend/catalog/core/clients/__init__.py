from catalog.core.clients.postgres import PostgresClient
from catalog.core.clients.valkey import ValkeyClient
from catalog.core.config import PostgresSettings, ValkeySettings

__all__ = [
    "PostgresClient",
    "PostgresSettings",
    "ValkeyClient",
    "ValkeySettings",
]
