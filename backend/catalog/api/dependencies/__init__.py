from catalog.api.dependencies.services import (
    get_app_state,
    get_catalog_service,
    get_optional_catalog_service,
)

__all__ = [
    "get_app_state",
    "get_catalog_service",
    "get_optional_catalog_service",
]
