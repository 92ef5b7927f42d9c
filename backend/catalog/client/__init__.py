from catalog.client.api_client import CatalogClient

__all__ = ["CatalogClient"]
