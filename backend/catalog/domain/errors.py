"""
Error taxonomy for the catalog.

StoreUnavailableError and PackageNotFoundError travel up to the API layer,
where they are mapped to 503 and 404 responses. MalformedMetadataError is
always recovered inside the detail assembler.
"""


class CatalogError(Exception):
    """Base class for catalog errors."""


class StoreUnavailableError(CatalogError):
    """Raised when the metadata store cannot be reached."""

    def __init__(self, message: str = "Metadata store is unavailable") -> None:
        super().__init__(message)


class PackageNotFoundError(CatalogError):
    """Raised when no package row matches the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Package "{name}" not found')


class MalformedMetadataError(CatalogError):
    """Raised when a stored version metadata blob is not a JSON object."""

    def __init__(self, package_name: str, version: str, reason: str) -> None:
        self.package_name = package_name
        self.version = version
        self.reason = reason
        super().__init__(
            f"Malformed metadata for {package_name}@{version}: {reason}"
        )
