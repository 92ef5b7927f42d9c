import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from catalog.api.dependencies.services import (
    get_catalog_service,
    get_optional_catalog_service,
)
from catalog.domain.errors import StoreUnavailableError
from catalog.domain.models import (
    PackageDetail,
    PackageSummary,
    RegistryStats,
    RegistryStatus,
)
from catalog.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/status", response_model=RegistryStatus, response_model_exclude_none=True)
async def registry_status(
    catalog_service: Annotated[
        CatalogService | None, Depends(get_optional_catalog_service)
    ],
) -> RegistryStatus | JSONResponse:
    """
    Report whether the API and its metadata store are up.

    The API is ONLINE whenever it answers; a store failure is reported in
    the body with a 500 rather than as a 503.
    """
    try:
        if catalog_service is None:
            raise StoreUnavailableError("Catalog service not initialized")
        return await catalog_service.get_registry_status()
    except StoreUnavailableError as err:
        logger.warning(f"Status check found the store unavailable: {err}")
        failure = RegistryStatus(status="ONLINE", database="ERROR", message=str(err))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure.model_dump(exclude_none=True),
        )


@router.get("/stats")
async def registry_stats(
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> RegistryStats:
    """Registry-wide totals of packages, versions, dist tags and builds."""
    return await catalog_service.get_registry_stats()


@router.get("/packages")
async def list_packages(
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[PackageSummary]:
    """Every package with its version count, build count and dist tags."""
    return await catalog_service.list_package_summaries()


@router.get("/packages/{name:path}")
async def package_detail(
    name: str,
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> PackageDetail:
    """
    Full detail of one package, including parsed version manifests.

    The name may contain a slash (`@scope/pkg`), either literally or
    percent-encoded.
    """
    return await catalog_service.get_package_detail(name)
