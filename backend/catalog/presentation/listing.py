from collections.abc import Sequence
from enum import Enum

from catalog.domain.models import PackageSummary
from catalog.presentation.collation import CollationKey, collation_key
from catalog.presentation.timefmt import parse_timestamp


class SortMode(str, Enum):
    """Orderings offered on the package list."""

    NAME = "name"
    UPDATED = "updated"
    BUILDS = "builds"


def filter_packages(query: str, packages: Sequence[PackageSummary]) -> list[PackageSummary]:
    """
    Keep packages whose name or description contains the query, ignoring case.

    A blank query keeps everything in its original order.
    """
    if not query.strip():
        return list(packages)

    needle = query.lower()
    return [
        package
        for package in packages
        if needle in package.name.lower()
        or needle in (package.description or "").lower()
    ]


def _name_key(package: PackageSummary) -> CollationKey:
    return collation_key(package.name)


def _updated_key(package: PackageSummary) -> float:
    # Missing or unparseable timestamps count as the epoch so they sort last
    updated = parse_timestamp(package.updated_at)
    return updated.timestamp() if updated else 0.0


def sort_packages(
    packages: Sequence[PackageSummary], mode: SortMode | str = SortMode.UPDATED
) -> list[PackageSummary]:
    """Return a new list ordered by the given mode. The sort is stable."""
    mode = SortMode(mode)
    if mode is SortMode.NAME:
        return sorted(packages, key=_name_key)
    if mode is SortMode.UPDATED:
        return sorted(packages, key=_updated_key, reverse=True)
    return sorted(packages, key=lambda package: package.build_count, reverse=True)


def browse_packages(
    packages: Sequence[PackageSummary],
    query: str = "",
    mode: SortMode | str = SortMode.UPDATED,
) -> list[PackageSummary]:
    """Filter by the search text, then sort, as the package list view does."""
    return sort_packages(filter_packages(query, packages), mode)
