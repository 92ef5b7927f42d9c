import logging
from typing import Any
from urllib.parse import quote

import httpx

from catalog.core.config import CatalogSettings
from catalog.domain.errors import PackageNotFoundError
from catalog.domain.models import (
    PackageDetail,
    PackageSummary,
    RegistryStats,
    RegistryStatus,
)
from catalog.presentation.install import latest_tarball_url, tarball_url

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Async client for the catalog JSON API, used by the presentation side.

    Responses are parsed into the same pydantic models the server emits.
    """

    def __init__(
        self,
        base_url: str,
        registry_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.registry_url = registry_url
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport
        )

    @classmethod
    def from_settings(
        cls, settings: CatalogSettings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "CatalogClient":
        return cls(
            base_url=settings.api_base_url,
            registry_url=settings.registry_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_registry_status(self) -> RegistryStatus:
        """Fetch /status. A database error still carries a status body."""
        response = await self._client.get("/status")
        return RegistryStatus.model_validate(response.json())

    async def is_registry_online(self) -> bool:
        """True when the API reports ONLINE; False on any fetch or parse failure."""
        try:
            status = await self.get_registry_status()
        except (httpx.HTTPError, ValueError) as err:
            logger.warning(f"Registry status unavailable: {err!s}")
            return False
        return status.status == "ONLINE"

    async def get_registry_stats(self) -> RegistryStats:
        response = await self._client.get("/stats")
        response.raise_for_status()
        return RegistryStats.model_validate(response.json())

    async def get_all_packages(self) -> list[PackageSummary]:
        response = await self._client.get("/packages")
        response.raise_for_status()
        return [PackageSummary.model_validate(item) for item in response.json()]

    async def get_package_detail(self, name: str) -> PackageDetail:
        """Fetch one package. Raises PackageNotFoundError on 404."""
        response = await self._client.get(f"/packages/{quote(name, safe='')}")
        if response.status_code == httpx.codes.NOT_FOUND:
            raise PackageNotFoundError(name)
        response.raise_for_status()
        return PackageDetail.model_validate(response.json())

    def tarball_url(self, name: str, version: str) -> str:
        return tarball_url(self.registry_url, name, version)

    def latest_tarball_url(self, name: str) -> str:
        return latest_tarball_url(self.registry_url, name)
