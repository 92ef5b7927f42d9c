import asyncio
import json
import logging
from string import Template
from typing import Any

from prometheus_client import Counter

from catalog.domain.errors import MalformedMetadataError, PackageNotFoundError
from catalog.domain.models import (
    DistTag,
    Package,
    PackageDetail,
    PackageSummary,
    RegistryStats,
    RegistryStatus,
    Version,
    VersionDetail,
)
from catalog.repos.interfaces import CacheRepository, MetadataRepository

logger = logging.getLogger(__name__)

# Cache keys
SUMMARIES_CACHE_KEY = "packages:summaries"
STATS_CACHE_KEY = "registry:stats"
DETAIL_CACHE_KEY = Template("package:$name")

METADATA_PARSE_FAILURES = Counter(
    "catalog_metadata_parse_failures_total",
    "Version metadata blobs that could not be parsed and were served as {}",
)


def parse_metadata(
    package_name: str, version: str, raw: str | dict[str, Any] | None
) -> dict[str, Any]:
    """
    Parse a stored manifest blob into a string-keyed document.

    NULL and blank blobs are an empty document. Invalid JSON and JSON that is
    not an object raise MalformedMetadataError.
    """
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw
    if not raw.strip():
        return {}

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as err:
        raise MalformedMetadataError(package_name, version, str(err)) from err

    if not isinstance(document, dict):
        raise MalformedMetadataError(
            package_name,
            version,
            f"expected a JSON object, got {type(document).__name__}",
        )
    return document


def group_dist_tags(tags: list[DistTag]) -> dict[str, dict[str, str]]:
    """Fold tag rows into package -> {tag: version}. Later rows win."""
    grouped: dict[str, dict[str, str]] = {}
    for tag in tags:
        grouped.setdefault(tag.package_name, {})[tag.tag] = tag.version
    return grouped


class CatalogService:
    """
    Aggregates the metadata relations into the views served to the UI.

    The optional cache stores whole serialized views, so any cache hit is
    self-consistent even when it is stale.
    """

    def __init__(
        self,
        metadata_repo: MetadataRepository,
        cache_repo: CacheRepository | None = None,
        summaries_ttl: int = 60,
        stats_ttl: int = 60,
        detail_ttl: int = 60 * 5,
    ):
        self.metadata_repo = metadata_repo
        self.cache_repo = cache_repo
        self.summaries_ttl = summaries_ttl
        self.stats_ttl = stats_ttl
        self.detail_ttl = detail_ttl

    async def _cache_get(self, key: str) -> Any | None:
        if not self.cache_repo:
            return None
        try:
            return await self.cache_repo.get(key)
        except Exception:
            logger.warning(f"Cache read failed for {key}, falling back to store", exc_info=True)
            return None

    async def _cache_set(self, key: str, value: Any, expire: int) -> None:
        if not self.cache_repo:
            return
        try:
            await self.cache_repo.set(key, value, expire=expire)
        except Exception:
            logger.warning(f"Cache write failed for {key}", exc_info=True)

    async def get_registry_status(self) -> RegistryStatus:
        """Report that the store answers, with the number of packages."""
        packages = await self.metadata_repo.count_packages()
        return RegistryStatus(status="ONLINE", database="READY", packages=packages)

    async def get_registry_stats(self) -> RegistryStats:
        """Compute registry-wide totals."""
        cached = await self._cache_get(STATS_CACHE_KEY)
        if cached:
            return RegistryStats.model_validate(cached)

        packages, versions, dist_tags, builds = await asyncio.gather(
            self.metadata_repo.count_packages(),
            self.metadata_repo.count_versions(),
            self.metadata_repo.count_dist_tags(),
            self.metadata_repo.sum_build_count(),
        )
        stats = RegistryStats(
            totalPackages=packages or 0,
            totalVersions=versions or 0,
            totalDistTags=dist_tags or 0,
            totalBuilds=builds or 0,
        )

        await self._cache_set(STATS_CACHE_KEY, stats.model_dump(mode="json"), self.stats_ttl)
        return stats

    async def list_package_summaries(self) -> list[PackageSummary]:
        """Build exactly one summary per package row, in store order."""
        cached = await self._cache_get(SUMMARIES_CACHE_KEY)
        if cached is not None:
            return [PackageSummary.model_validate(item) for item in cached]

        packages, stats, version_counts, tags = await asyncio.gather(
            self.metadata_repo.select_all_packages(),
            self.metadata_repo.select_all_stats(),
            self.metadata_repo.select_version_counts_by_package(),
            self.metadata_repo.select_all_dist_tags(),
        )

        builds_by_package = {s.package_name: s.build_count or 0 for s in stats}
        versions_by_package = {v.package_name: v.count for v in version_counts}
        tags_by_package = group_dist_tags(tags)

        summaries = [
            PackageSummary(
                name=package.name,
                description=package.description,
                latest_version=package.latest_version,
                created_at=package.created_at,
                updated_at=package.updated_at,
                build_count=builds_by_package.get(package.name, 0),
                version_count=versions_by_package.get(package.name, 0),
                dist_tags=tags_by_package.get(package.name, {}),
            )
            for package in packages
        ]
        logger.debug(f"Aggregated {len(summaries)} package summaries")

        await self._cache_set(
            SUMMARIES_CACHE_KEY,
            [s.model_dump(mode="json") for s in summaries],
            self.summaries_ttl,
        )
        return summaries

    async def get_package_detail(self, name: str) -> PackageDetail:
        """
        Assemble the detail view of one package.

        The name is matched exactly, scope prefix included. Raises
        PackageNotFoundError when there is no such package.
        """
        cache_key = DETAIL_CACHE_KEY.substitute(name=name)
        cached = await self._cache_get(cache_key)
        if cached:
            return PackageDetail.model_validate(cached)

        package = await self.metadata_repo.select_package_by_name(name)
        if package is None:
            raise PackageNotFoundError(name)

        versions, tags, stats = await asyncio.gather(
            self.metadata_repo.select_versions_by_package(name),
            self.metadata_repo.select_dist_tags_by_package(name),
            self.metadata_repo.select_stats_by_package(name),
        )

        detail = PackageDetail(
            name=package.name,
            description=package.description,
            latest_version=package.latest_version,
            created_at=package.created_at,
            updated_at=package.updated_at,
            build_count=stats.build_count if stats else 0,
            dist_tags=group_dist_tags(tags).get(name, {}),
            versions=[self._version_detail(v) for v in versions],
        )
        self._warn_dangling_references(package, detail)

        await self._cache_set(cache_key, detail.model_dump(mode="json"), self.detail_ttl)
        return detail

    def _version_detail(self, version: Version) -> VersionDetail:
        try:
            metadata = parse_metadata(version.package_name, version.version, version.metadata)
        except MalformedMetadataError as err:
            logger.warning(f"{err}; serving empty metadata")
            METADATA_PARSE_FAILURES.inc()
            metadata = {}

        return VersionDetail(
            version=version.version,
            metadata=metadata,
            tarball_path=version.tarball_path,
            created_at=version.created_at,
        )

    def _warn_dangling_references(self, package: Package, detail: PackageDetail) -> None:
        known = {v.version for v in detail.versions}
        if package.latest_version and package.latest_version not in known:
            logger.warning(
                f"{package.name}: latest_version {package.latest_version} has no version row"
            )
        for tag, version in detail.dist_tags.items():
            if version not in known:
                logger.warning(f"{package.name}: dist tag {tag} points at missing version {version}")
