"""Tests for the pure derivations behind the package list and detail views."""

import unittest
from datetime import datetime, timedelta, timezone
from unittest import TestCase

from catalog.domain.models import PackageDetail, PackageSummary, VersionDetail
from catalog.presentation import (
    PackageManager,
    SortMode,
    browse_packages,
    compare_versions,
    dependency_groups,
    dependency_preview,
    display_description,
    display_version,
    filter_packages,
    format_date,
    install_command,
    install_snippet,
    keywords,
    latest_metadata,
    latest_tarball_url,
    metadata_links,
    resolve_latest_version,
    sort_packages,
    sort_versions_desc,
    split_package_name,
    tags_for_version,
    tarball_url,
    time_ago,
    versions_newest_first,
)

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def summary(name, description=None, updated_at=None, build_count=0):
    return PackageSummary(
        name=name,
        description=description,
        updated_at=updated_at,
        build_count=build_count,
    )


class SplitPackageNameTestCase(TestCase):
    def test_unscoped(self):
        self.assertEqual(split_package_name("left-pad"), ("", "left-pad"))

    def test_scoped(self):
        self.assertEqual(split_package_name("@datakit/core"), ("@datakit/", "core"))

    def test_only_first_slash_splits(self):
        self.assertEqual(split_package_name("@a/b/c"), ("@a/", "b/c"))


class FilterPackagesTestCase(TestCase):
    def setUp(self):
        self.packages = [
            summary("react-dom", "React renderer for the DOM"),
            summary("left-pad"),
            summary("@datakit/charts", "Charts built on d3"),
        ]

    def test_case_insensitive_name_match(self):
        result = filter_packages("REACT", [summary("react-dom")])
        self.assertEqual([p.name for p in result], ["react-dom"])

    def test_matches_description(self):
        result = filter_packages("d3", self.packages)
        self.assertEqual([p.name for p in result], ["@datakit/charts"])

    def test_null_description_is_not_an_error(self):
        result = filter_packages("pad", self.packages)
        self.assertEqual([p.name for p in result], ["left-pad"])

    def test_blank_query_keeps_everything_in_order(self):
        self.assertEqual(filter_packages("", self.packages), self.packages)
        self.assertEqual(filter_packages("   ", self.packages), self.packages)

    def test_no_match(self):
        self.assertEqual(filter_packages("zzz", self.packages), [])


class SortPackagesTestCase(TestCase):
    def test_sort_by_name(self):
        packages = [summary("beta"), summary("Alpha"), summary("@scope/x"), summary("alpha")]
        result = sort_packages(packages, SortMode.NAME)
        self.assertEqual([p.name for p in result], ["@scope/x", "alpha", "Alpha", "beta"])

    def test_sort_by_name_puts_punctuation_before_digits_and_letters(self):
        packages = [summary("a-b"), summary("a_b"), summary("1x"), summary("@s/x")]
        result = sort_packages(packages, SortMode.NAME)
        self.assertEqual([p.name for p in result], ["@s/x", "1x", "a_b", "a-b"])

    def test_sort_by_name_case_only_breaks_ties(self):
        packages = [summary("Ab"), summary("aa"), summary("ab")]
        result = sort_packages(packages, SortMode.NAME)
        self.assertEqual([p.name for p in result], ["aa", "ab", "Ab"])

    def test_sort_by_name_is_stable(self):
        first = summary("same", "first")
        second = summary("same", "second")
        result = sort_packages([first, second], "name")
        self.assertEqual([p.description for p in result], ["first", "second"])

    def test_sort_by_updated_puts_missing_last(self):
        packages = [
            summary("never"),
            summary("old", updated_at="2023-01-01T00:00:00Z"),
            summary("new", updated_at="2024-06-01T00:00:00Z"),
        ]
        result = sort_packages(packages, SortMode.UPDATED)
        self.assertEqual([p.name for p in result], ["new", "old", "never"])

    def test_sort_by_builds_descending_and_stable(self):
        packages = [
            summary("a", build_count=1),
            summary("b", build_count=5),
            summary("c", build_count=1),
        ]
        result = sort_packages(packages, SortMode.BUILDS)
        self.assertEqual([p.name for p in result], ["b", "a", "c"])

    def test_unknown_mode_raises(self):
        with self.assertRaises(ValueError):
            sort_packages([], "popularity")

    def test_browse_filters_then_sorts(self):
        packages = [
            summary("react-b", build_count=1),
            summary("vue"),
            summary("react-a", build_count=9),
        ]
        result = browse_packages(packages, query="react", mode="builds")
        self.assertEqual([p.name for p in result], ["react-a", "react-b"])


class VersionOrderTestCase(TestCase):
    def test_numeric_aware_descending(self):
        self.assertEqual(
            sort_versions_desc(["1.2.0", "1.10.0", "1.9.0"]),
            ["1.10.0", "1.9.0", "1.2.0"],
        )

    def test_compare(self):
        self.assertLess(compare_versions("1.9.0", "1.10.0"), 0)
        self.assertGreater(compare_versions("2.0", "1.99.99"), 0)
        self.assertEqual(compare_versions("1.0.0", "1.0.0"), 0)

    def test_non_numeric_segments_compare_as_text(self):
        self.assertLess(compare_versions("1.0.0-alpha", "1.0.0-beta"), 0)
        # Not semver precedence: the longer string sorts after its prefix
        self.assertGreater(compare_versions("1.0.0-beta", "1.0.0"), 0)

    def test_case_tie_puts_lowercase_first(self):
        self.assertLess(compare_versions("1.0.0-beta", "1.0.0-Beta"), 0)

    def test_prerelease_punctuation_order(self):
        versions = [
            "1.0.0",
            "1.0.0_rc",
            "1.0.0-beta",
            "1.0.0+b",
            "1.0.0-rc.2",
            "1.0.0-Beta",
            "1.0.0-rc.10",
        ]
        self.assertEqual(
            sort_versions_desc(versions),
            [
                "1.0.0+b",
                "1.0.0-rc.10",
                "1.0.0-rc.2",
                "1.0.0-Beta",
                "1.0.0-beta",
                "1.0.0_rc",
                "1.0.0",
            ],
        )

    def test_sort_with_key(self):
        versions = [VersionDetail(version="0.2.0"), VersionDetail(version="0.10.0")]
        result = sort_versions_desc(versions, key=lambda v: v.version)
        self.assertEqual([v.version for v in result], ["0.10.0", "0.2.0"])


class TimeAgoTestCase(TestCase):
    def ago(self, seconds):
        return time_ago(NOW - timedelta(seconds=seconds), now=NOW)

    def test_just_now(self):
        self.assertEqual(self.ago(45), "Just now")

    def test_minutes_and_hours(self):
        self.assertEqual(self.ago(60), "1m ago")
        self.assertEqual(self.ago(3600 * 2), "2h ago")

    def test_days_weeks_months(self):
        self.assertEqual(self.ago(86400 * 3), "3d ago")
        self.assertEqual(self.ago(86400 * 14), "2w ago")
        self.assertEqual(self.ago(86400 * 65), "2mo ago")

    def test_years_use_fixed_365_days(self):
        self.assertEqual(self.ago(86400 * 400), "1y ago")

    def test_iso_string_input(self):
        self.assertEqual(time_ago("2024-12-31T12:00:00Z", now=NOW), "1d ago")

    def test_missing_is_unknown(self):
        self.assertEqual(time_ago(None), "Unknown")
        self.assertEqual(time_ago("not a date", now=NOW), "Unknown")

    def test_future_is_just_now(self):
        self.assertEqual(self.ago(-3600), "Just now")


class FormatDateTestCase(TestCase):
    def test_format(self):
        self.assertEqual(format_date("2025-03-07T16:05:00Z"), "Mar 7, 2025, 04:05 PM")

    def test_placeholder(self):
        self.assertEqual(format_date(None), "—")


class InstallTestCase(TestCase):
    def test_commands(self):
        self.assertEqual(install_command("@datakit/core", "pnpm"), "pnpm add @datakit/core")
        self.assertEqual(install_command("@datakit/core", PackageManager.NPM), "npm install @datakit/core")
        self.assertEqual(install_command("left-pad", "yarn"), "yarn add left-pad")

    def test_unknown_manager(self):
        with self.assertRaises(ValueError):
            install_command("left-pad", "bun")

    def test_snippet(self):
        snippet = install_snippet("@datakit/core", "1.10.0", "npm")
        self.assertEqual(snippet.command, "npm install @datakit/core")
        self.assertEqual(snippet.dependency, '"@datakit/core": "1.10.0"')

    def test_tarball_urls(self):
        base = "https://registry.example.com/"
        self.assertEqual(
            tarball_url(base, "@datakit/core", "1.2.0"),
            "https://registry.example.com/@datakit/core/tarball/1.2.0",
        )
        self.assertEqual(
            latest_tarball_url(base, "left-pad"),
            "https://registry.example.com/left-pad/tarball/latest",
        )


class DetailDerivationTestCase(TestCase):
    def setUp(self):
        self.detail = PackageDetail(
            name="@datakit/core",
            dist_tags={"latest": "1.10.0", "beta": "1.10.0", "legacy": "1.2.0"},
            versions=[
                VersionDetail(version="1.2.0", metadata={"main": "old.js"}),
                VersionDetail(
                    version="1.10.0",
                    metadata={
                        "main": "dist/index.js",
                        "keywords": ["data"],
                        "repository": {"type": "git", "url": "https://git.example.com/core"},
                        "bugs": "https://git.example.com/core/issues",
                        "dependencies": {"zod": "^3.23.0"},
                        "devDependencies": {},
                    },
                ),
            ],
        )

    def test_latest_falls_back_to_highest_version(self):
        self.assertEqual(resolve_latest_version(self.detail), "1.10.0")
        self.assertEqual(latest_metadata(self.detail)["main"], "dist/index.js")

    def test_stored_latest_wins(self):
        detail = self.detail.model_copy(update={"latest_version": "1.2.0"})
        self.assertEqual(resolve_latest_version(detail), "1.2.0")
        self.assertEqual(latest_metadata(detail), {"main": "old.js"})

    def test_no_versions(self):
        detail = PackageDetail(name="empty")
        self.assertEqual(resolve_latest_version(detail), "")
        self.assertEqual(latest_metadata(detail), {})

    def test_versions_newest_first(self):
        self.assertEqual(
            [v.version for v in versions_newest_first(self.detail)], ["1.10.0", "1.2.0"]
        )

    def test_tags_for_version(self):
        self.assertEqual(tags_for_version(self.detail.dist_tags, "1.10.0"), ["latest", "beta"])
        self.assertEqual(tags_for_version(self.detail.dist_tags, "0.0.1"), [])

    def test_dependency_groups_skip_empty(self):
        groups = dependency_groups(latest_metadata(self.detail))
        self.assertEqual(groups, {"Dependencies": {"zod": "^3.23.0"}})

    def test_dependency_preview(self):
        deps = {f"dep-{i}": "1.0.0" for i in range(12)}
        shown, hidden = dependency_preview(deps)
        self.assertEqual(len(shown), 10)
        self.assertEqual(hidden, 2)

    def test_links_and_keywords(self):
        metadata = latest_metadata(self.detail)
        self.assertEqual(
            metadata_links(metadata),
            {
                "Repository": "https://git.example.com/core",
                "Bug Tracker": "https://git.example.com/core/issues",
            },
        )
        self.assertEqual(keywords(metadata), ["data"])
        self.assertEqual(keywords({"keywords": "not-a-list"}), [])

    def test_placeholders(self):
        self.assertEqual(display_version(None), "—")
        self.assertEqual(display_version("1.0.0"), "1.0.0")
        self.assertEqual(display_description(None), "A DataKit private package")


if __name__ == "__main__":
    unittest.main()
