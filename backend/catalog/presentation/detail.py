"""
Derivations for the package detail view.

Metadata documents are whatever the publisher put in package.json, so every
accessor here checks the shape of the field before using it.
"""

from typing import Any

from catalog.domain.models import PackageDetail, VersionDetail
from catalog.presentation.timefmt import PLACEHOLDER
from catalog.presentation.versions import highest_version, sort_versions_desc

DEFAULT_DESCRIPTION = "A DataKit private package"
DEPENDENCY_GROUPS = (
    ("dependencies", "Dependencies"),
    ("devDependencies", "Dev Dependencies"),
    ("peerDependencies", "Peer Dependencies"),
)
DEPENDENCY_PREVIEW_LIMIT = 10


def resolve_latest_version(detail: PackageDetail) -> str:
    """
    The version to present as latest.

    The stored latest_version wins; otherwise the highest published version,
    or "" when nothing is published.
    """
    if detail.latest_version:
        return detail.latest_version
    return highest_version(v.version for v in detail.versions) or ""


def find_version(detail: PackageDetail, version: str) -> VersionDetail | None:
    return next((v for v in detail.versions if v.version == version), None)


def latest_metadata(detail: PackageDetail) -> dict[str, Any]:
    """Manifest of the latest version, or {} if that version has no row."""
    found = find_version(detail, resolve_latest_version(detail))
    return found.metadata if found else {}


def versions_newest_first(detail: PackageDetail) -> list[VersionDetail]:
    return sort_versions_desc(detail.versions, key=lambda v: v.version)


def tags_for_version(dist_tags: dict[str, str], version: str) -> list[str]:
    """Names of the dist tags pointing at a version, in tag order."""
    return [tag for tag, tagged in dist_tags.items() if tagged == version]


def dependency_groups(metadata: dict[str, Any]) -> dict[str, dict[str, str]]:
    """Non-empty dependency maps keyed by their display title."""
    groups = {}
    for field, title in DEPENDENCY_GROUPS:
        deps = metadata.get(field)
        if isinstance(deps, dict) and deps:
            groups[title] = {str(name): str(spec) for name, spec in deps.items()}
    return groups


def dependency_preview(
    deps: dict[str, str], limit: int = DEPENDENCY_PREVIEW_LIMIT
) -> tuple[list[tuple[str, str]], int]:
    """First `limit` dependencies and how many were left out."""
    items = list(deps.items())
    return items[:limit], max(0, len(items) - limit)


def _url_of(value: Any) -> str | None:
    # npm allows either "https://..." or {"type": "git", "url": "https://..."}
    if isinstance(value, str) and value:
        return value
    if isinstance(value, dict) and isinstance(value.get("url"), str) and value["url"]:
        return value["url"]
    return None


def metadata_links(metadata: dict[str, Any]) -> dict[str, str]:
    """Homepage, repository and bug tracker links that are present."""
    links = {}
    homepage = metadata.get("homepage")
    if isinstance(homepage, str) and homepage:
        links["Homepage"] = homepage
    repository = _url_of(metadata.get("repository"))
    if repository:
        links["Repository"] = repository
    bugs = _url_of(metadata.get("bugs"))
    if bugs:
        links["Bug Tracker"] = bugs
    return links


def keywords(metadata: dict[str, Any]) -> list[str]:
    values = metadata.get("keywords")
    if not isinstance(values, list):
        return []
    return [str(value) for value in values]


def display_version(version: str | None) -> str:
    return version or PLACEHOLDER


def display_description(description: str | None) -> str:
    return description or DEFAULT_DESCRIPTION
