"""
Pure functions that turn fetched catalog data into what the UI shows.

Nothing here reads ambient state: the current search text, sort mode and
package manager are always passed in by the caller.
"""

from catalog.presentation.detail import (
    dependency_groups,
    dependency_preview,
    display_description,
    display_version,
    keywords,
    latest_metadata,
    metadata_links,
    resolve_latest_version,
    tags_for_version,
    versions_newest_first,
)
from catalog.presentation.install import (
    PackageManager,
    dependency_fragment,
    install_command,
    install_snippet,
    latest_tarball_url,
    tarball_url,
)
from catalog.presentation.listing import (
    SortMode,
    browse_packages,
    filter_packages,
    sort_packages,
)
from catalog.presentation.names import split_package_name
from catalog.presentation.timefmt import format_date, time_ago
from catalog.presentation.versions import (
    compare_versions,
    highest_version,
    sort_versions_desc,
)

__all__ = [
    "PackageManager",
    "SortMode",
    "browse_packages",
    "compare_versions",
    "dependency_fragment",
    "dependency_groups",
    "dependency_preview",
    "display_description",
    "display_version",
    "filter_packages",
    "format_date",
    "highest_version",
    "install_command",
    "install_snippet",
    "keywords",
    "latest_metadata",
    "latest_tarball_url",
    "metadata_links",
    "resolve_latest_version",
    "sort_packages",
    "sort_versions_desc",
    "split_package_name",
    "tags_for_version",
    "tarball_url",
    "time_ago",
    "versions_newest_first",
]
