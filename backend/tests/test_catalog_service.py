"""Tests for package aggregation and detail assembly."""

import unittest
from unittest import IsolatedAsyncioTestCase

from catalog.domain.errors import (
    MalformedMetadataError,
    PackageNotFoundError,
    StoreUnavailableError,
)
from catalog.domain.models import DistTag, Package, Version
from catalog.services.catalog_service import CatalogService, parse_metadata

from tests.fakes import (
    BrokenCacheRepository,
    InMemoryCacheRepository,
    InMemoryMetadataRepository,
    UnreachableMetadataRepository,
    sample_repository,
)


class ParseMetadataTestCase(unittest.TestCase):
    def test_object_is_returned(self):
        self.assertEqual(parse_metadata("a", "1.0.0", '{"main": "x.js"}'), {"main": "x.js"})

    def test_null_and_blank_are_empty(self):
        self.assertEqual(parse_metadata("a", "1.0.0", None), {})
        self.assertEqual(parse_metadata("a", "1.0.0", "   "), {})

    def test_invalid_json_raises(self):
        with self.assertRaises(MalformedMetadataError) as ctx:
            parse_metadata("a", "1.0.0", "{nope")
        self.assertEqual(ctx.exception.version, "1.0.0")

    def test_non_object_json_raises(self):
        with self.assertRaises(MalformedMetadataError):
            parse_metadata("a", "1.0.0", "[1, 2]")


class PackageSummariesTestCase(IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.service = CatalogService(sample_repository())

    async def test_one_summary_per_package(self):
        summaries = await self.service.list_package_summaries()
        self.assertEqual(
            [s.name for s in summaries], ["@datakit/core", "left-pad", "empty-pkg"]
        )

    async def test_counts_tags_and_builds(self):
        summaries = {s.name: s for s in await self.service.list_package_summaries()}
        core = summaries["@datakit/core"]
        self.assertEqual(core.version_count, 3)
        self.assertEqual(core.build_count, 42)
        self.assertEqual(core.dist_tags, {"latest": "1.10.0", "beta": "1.10.0"})

    async def test_package_without_rows_gets_zero_defaults(self):
        summaries = {s.name: s for s in await self.service.list_package_summaries()}
        empty = summaries["empty-pkg"]
        self.assertEqual(empty.version_count, 0)
        self.assertEqual(empty.build_count, 0)
        self.assertEqual(empty.dist_tags, {})

    async def test_package_without_stats_has_zero_builds(self):
        summaries = {s.name: s for s in await self.service.list_package_summaries()}
        self.assertEqual(summaries["left-pad"].build_count, 0)

    async def test_empty_store_gives_empty_list(self):
        service = CatalogService(InMemoryMetadataRepository())
        self.assertEqual(await service.list_package_summaries(), [])

    async def test_store_failure_propagates(self):
        service = CatalogService(UnreachableMetadataRepository())
        with self.assertRaises(StoreUnavailableError):
            await service.list_package_summaries()


class RegistryStatsTestCase(IsolatedAsyncioTestCase):
    async def test_totals(self):
        stats = await CatalogService(sample_repository()).get_registry_stats()
        self.assertEqual(stats.totalPackages, 3)
        self.assertEqual(stats.totalVersions, 4)
        self.assertEqual(stats.totalDistTags, 3)
        self.assertEqual(stats.totalBuilds, 42)

    async def test_empty_store_totals_are_zero(self):
        stats = await CatalogService(InMemoryMetadataRepository()).get_registry_stats()
        self.assertEqual(stats.totalBuilds, 0)
        self.assertEqual(stats.totalPackages, 0)

    async def test_status_reports_package_count(self):
        status = await CatalogService(sample_repository()).get_registry_status()
        self.assertEqual(status.status, "ONLINE")
        self.assertEqual(status.database, "READY")
        self.assertEqual(status.packages, 3)


class PackageDetailTestCase(IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.service = CatalogService(sample_repository())

    async def test_scoped_name_detail(self):
        detail = await self.service.get_package_detail("@datakit/core")
        self.assertEqual(detail.name, "@datakit/core")
        self.assertEqual(detail.build_count, 42)
        self.assertEqual(detail.dist_tags, {"latest": "1.10.0", "beta": "1.10.0"})
        self.assertEqual(len(detail.versions), 3)

    async def test_corrupt_metadata_degrades_to_empty(self):
        detail = await self.service.get_package_detail("@datakit/core")
        by_version = {v.version: v for v in detail.versions}
        self.assertEqual(by_version["1.9.0"].metadata, {})
        self.assertEqual(by_version["1.2.0"].metadata, {"main": "index.js"})
        self.assertEqual(
            by_version["1.10.0"].metadata["dependencies"], {"zod": "^3.23.0"}
        )

    async def test_missing_stats_and_versions(self):
        detail = await self.service.get_package_detail("empty-pkg")
        self.assertEqual(detail.build_count, 0)
        self.assertEqual(detail.versions, [])
        self.assertEqual(detail.dist_tags, {})

    async def test_unknown_name_raises(self):
        with self.assertRaises(PackageNotFoundError):
            await self.service.get_package_detail("does-not-exist")

    async def test_lookup_is_exact(self):
        with self.assertRaises(PackageNotFoundError):
            await self.service.get_package_detail("LEFT-PAD")
        with self.assertRaises(PackageNotFoundError):
            await self.service.get_package_detail("core")

    async def test_duplicate_tags_last_write_wins(self):
        repo = InMemoryMetadataRepository(
            packages=[Package(name="dup")],
            versions=[Version(package_name="dup", version="1.0.0")],
            dist_tags=[
                DistTag(package_name="dup", tag="latest", version="0.9.0"),
                DistTag(package_name="dup", tag="latest", version="1.0.0"),
            ],
        )
        detail = await CatalogService(repo).get_package_detail("dup")
        self.assertEqual(detail.dist_tags, {"latest": "1.0.0"})

    async def test_dangling_tag_is_kept(self):
        repo = InMemoryMetadataRepository(
            packages=[Package(name="pkg", latest_version="9.9.9")],
            dist_tags=[DistTag(package_name="pkg", tag="next", version="2.0.0")],
        )
        with self.assertLogs("catalog.services.catalog_service", level="WARNING"):
            detail = await CatalogService(repo).get_package_detail("pkg")
        self.assertEqual(detail.dist_tags, {"next": "2.0.0"})
        self.assertEqual(detail.latest_version, "9.9.9")


class CachingTestCase(IsolatedAsyncioTestCase):
    async def test_summaries_served_from_cache(self):
        repo = sample_repository()
        service = CatalogService(repo, InMemoryCacheRepository())

        first = await service.list_package_summaries()
        second = await service.list_package_summaries()

        self.assertEqual(first, second)
        self.assertEqual(repo.calls.count("select_all_packages"), 1)

    async def test_detail_served_from_cache(self):
        repo = sample_repository()
        service = CatalogService(repo, InMemoryCacheRepository())

        first = await service.get_package_detail("@datakit/core")
        second = await service.get_package_detail("@datakit/core")

        self.assertEqual(first, second)
        self.assertEqual(repo.calls.count("select_package_by_name"), 1)

    async def test_cache_failure_falls_back_to_store(self):
        service = CatalogService(sample_repository(), BrokenCacheRepository())
        summaries = await service.list_package_summaries()
        self.assertEqual(len(summaries), 3)


if __name__ == "__main__":
    unittest.main()
