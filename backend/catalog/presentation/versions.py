from collections.abc import Callable, Iterable
from typing import TypeVar

from catalog.presentation.collation import CollationKey, collation_key

T = TypeVar("T")


def version_key(version: str) -> CollationKey:
    return collation_key(version, numeric=True)


def compare_versions(left: str, right: str) -> int:
    """
    Numeric-aware comparison of two version strings.

    Runs of digits compare as numbers, everything else in collation order
    with case as the last tie-break. This is not semver precedence:
    "1.0.0-beta" sorts after "1.0.0".
    """
    left_key, right_key = version_key(left), version_key(right)
    return (left_key > right_key) - (left_key < right_key)


def sort_versions_desc(
    items: Iterable[T], key: Callable[[T], str] | None = None
) -> list[T]:
    """Sort newest first by numeric-aware version order. Ties keep input order."""
    get_version = key or (lambda item: item)
    return sorted(items, key=lambda item: version_key(get_version(item)), reverse=True)


def highest_version(versions: Iterable[str]) -> str | None:
    """Return the greatest version string, or None for an empty input."""
    ordered = sort_versions_desc(versions)
    return ordered[0] if ordered else None
