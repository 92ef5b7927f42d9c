from catalog.repos.postgres.metadata_repo import PostgresMetadataRepository
from catalog.repos.postgres.schema import ensure_schema

__all__ = [
    "PostgresMetadataRepository",
    "ensure_schema",
]
