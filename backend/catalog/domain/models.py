from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# Data models for the four stored relations and the views derived from them.
# Field names of the derived views are part of the JSON contract with the UI.


class Package(BaseModel):
    """A package row. The name may carry a scope prefix like "@scope/"."""

    name: str  # Opaque, case-sensitive, never normalized
    description: str | None = None
    latest_version: str | None = None  # Caller-maintained, not recomputed
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Version(BaseModel):
    """A published version of a package with its raw manifest blob."""

    package_name: str
    version: str
    metadata: str | dict[str, Any] | None = None  # JSON text as stored, parsed on read
    tarball_path: str | None = None  # Key in the external tarball store
    created_at: datetime | None = None


class DistTag(BaseModel):
    """A named pointer from a tag to one version string of a package."""

    package_name: str
    tag: str
    version: str  # Not guaranteed to reference an existing Version row


class BuildStats(BaseModel):
    """Build counter for a package. A missing row means zero builds."""

    package_name: str
    build_count: int = 0


class VersionCount(BaseModel):
    """Number of stored versions for one package."""

    package_name: str
    count: int


class PackageSummary(BaseModel):
    """Package row enriched with counts and tags for list views."""

    name: str
    description: str | None = None
    latest_version: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    build_count: int = 0
    version_count: int = 0
    dist_tags: dict[str, str] = Field(default_factory=dict)


class VersionDetail(BaseModel):
    """A version with its manifest parsed into a loosely-typed document."""

    version: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    tarball_path: str | None = None
    created_at: datetime | None = None


class PackageDetail(BaseModel):
    """Package row joined with its tags, build count and versions."""

    name: str
    description: str | None = None
    latest_version: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    build_count: int = 0
    dist_tags: dict[str, str] = Field(default_factory=dict)
    versions: list[VersionDetail] = Field(default_factory=list)


class RegistryStats(BaseModel):
    """Registry-wide totals. Every field is an integer, never null."""

    totalPackages: int = 0  # noqa: N815
    totalVersions: int = 0  # noqa: N815
    totalDistTags: int = 0  # noqa: N815
    totalBuilds: int = 0  # noqa: N815


class RegistryStatus(BaseModel):
    """Liveness of the API and its metadata store."""

    status: str
    database: str
    packages: int = 0
    message: str | None = None
