from catalog.repos.interfaces import CacheRepository, MetadataRepository
from catalog.repos.postgres import PostgresMetadataRepository
from catalog.repos.valkey import ValkeyCacheRepository

__all__ = [
    "CacheRepository",
    "MetadataRepository",
    "PostgresMetadataRepository",
    "ValkeyCacheRepository",
]
