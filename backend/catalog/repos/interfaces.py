from abc import ABC, abstractmethod
from typing import Any

from catalog.domain.models import BuildStats, DistTag, Package, Version, VersionCount


class MetadataRepository(ABC):
    """
    Read contract over the four metadata relations.

    Implementations raise StoreUnavailableError when the store cannot be
    reached. Empty relations produce empty results, never errors.
    """

    @abstractmethod
    async def select_all_packages(self) -> list[Package]:
        """Get every package row."""
        pass

    @abstractmethod
    async def select_all_stats(self) -> list[BuildStats]:
        """Get every stats row."""
        pass

    @abstractmethod
    async def select_version_counts_by_package(self) -> list[VersionCount]:
        """Count version rows grouped by package name."""
        pass

    @abstractmethod
    async def select_all_dist_tags(self) -> list[DistTag]:
        """Get every dist tag row."""
        pass

    @abstractmethod
    async def select_package_by_name(self, name: str) -> Package | None:
        """Get a package by its exact name."""
        pass

    @abstractmethod
    async def select_versions_by_package(self, name: str) -> list[Version]:
        """Get all version rows of a package."""
        pass

    @abstractmethod
    async def select_dist_tags_by_package(self, name: str) -> list[DistTag]:
        """Get all dist tag rows of a package."""
        pass

    @abstractmethod
    async def select_stats_by_package(self, name: str) -> BuildStats | None:
        """Get the stats row of a package, if any."""
        pass

    @abstractmethod
    async def count_packages(self) -> int:
        """Count package rows."""
        pass

    @abstractmethod
    async def count_versions(self) -> int:
        """Count version rows."""
        pass

    @abstractmethod
    async def count_dist_tags(self) -> int:
        """Count dist tag rows."""
        pass

    @abstractmethod
    async def sum_build_count(self) -> int:
        """Sum build counts, 0 when there are no stats rows."""
        pass


class CacheRepository(ABC):
    """Repository interface for caching operations."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Get a value from cache."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, expire: int | None = None) -> bool:
        """Set a value in cache."""
        pass
