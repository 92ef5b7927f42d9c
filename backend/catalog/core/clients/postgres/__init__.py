from catalog.core.clients.postgres.client import PostgresClient

__all__ = ["PostgresClient"]
