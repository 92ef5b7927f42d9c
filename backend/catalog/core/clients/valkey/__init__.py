from catalog.core.clients.valkey.client import ValkeyClient

__all__ = ["ValkeyClient"]
