from catalog.core.clients.postgres import PostgresClient
from catalog.domain.models import BuildStats, DistTag, Package, Version, VersionCount
from catalog.repos.interfaces import MetadataRepository


class PostgresMetadataRepository(MetadataRepository):
    """PostgreSQL implementation of the metadata repository."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    async def select_all_packages(self) -> list[Package]:
        query = """
        SELECT name, description, latest_version, created_at, updated_at
        FROM packages
        """
        rows = await self.postgres.fetch(query)
        return [Package(**dict(row)) for row in rows]

    async def select_all_stats(self) -> list[BuildStats]:
        query = """
        SELECT package_name, COALESCE(build_count, 0) AS build_count
        FROM stats
        """
        rows = await self.postgres.fetch(query)
        return [BuildStats(**dict(row)) for row in rows]

    async def select_version_counts_by_package(self) -> list[VersionCount]:
        query = """
        SELECT package_name, COUNT(*) AS count
        FROM versions
        GROUP BY package_name
        """
        rows = await self.postgres.fetch(query)
        return [VersionCount(**dict(row)) for row in rows]

    async def select_all_dist_tags(self) -> list[DistTag]:
        query = """
        SELECT package_name, tag, version
        FROM dist_tags
        """
        rows = await self.postgres.fetch(query)
        return [DistTag(**dict(row)) for row in rows]

    async def select_package_by_name(self, name: str) -> Package | None:
        query = """
        SELECT name, description, latest_version, created_at, updated_at
        FROM packages
        WHERE name = $1
        """
        row = await self.postgres.fetchrow(query, name)
        if row is None:
            return None
        return Package(**dict(row))

    async def select_versions_by_package(self, name: str) -> list[Version]:
        query = """
        SELECT package_name, version, metadata, tarball_path, created_at
        FROM versions
        WHERE package_name = $1
        """
        rows = await self.postgres.fetch(query, name)
        return [Version(**dict(row)) for row in rows]

    async def select_dist_tags_by_package(self, name: str) -> list[DistTag]:
        query = """
        SELECT package_name, tag, version
        FROM dist_tags
        WHERE package_name = $1
        """
        rows = await self.postgres.fetch(query, name)
        return [DistTag(**dict(row)) for row in rows]

    async def select_stats_by_package(self, name: str) -> BuildStats | None:
        query = """
        SELECT package_name, COALESCE(build_count, 0) AS build_count
        FROM stats
        WHERE package_name = $1
        """
        row = await self.postgres.fetchrow(query, name)
        if row is None:
            return None
        return BuildStats(**dict(row))

    async def count_packages(self) -> int:
        return await self.postgres.fetchval("SELECT COUNT(*) FROM packages") or 0

    async def count_versions(self) -> int:
        return await self.postgres.fetchval("SELECT COUNT(*) FROM versions") or 0

    async def count_dist_tags(self) -> int:
        return await self.postgres.fetchval("SELECT COUNT(*) FROM dist_tags") or 0

    async def sum_build_count(self) -> int:
        total = await self.postgres.fetchval(
            "SELECT COALESCE(SUM(build_count), 0) FROM stats"
        )
        return int(total or 0)
