from fastapi import Depends, Request

from catalog.api.state import AppState
from catalog.domain.errors import StoreUnavailableError
from catalog.services.catalog_service import CatalogService


def get_app_state(request: Request) -> AppState:
    return request.app.state.state


def get_optional_catalog_service(
    state: AppState = Depends(get_app_state),
) -> CatalogService | None:
    return state.services.catalog


def get_catalog_service(state: AppState = Depends(get_app_state)) -> CatalogService:
    if not state.services.catalog:
        raise StoreUnavailableError("Catalog service not initialized")
    return state.services.catalog
