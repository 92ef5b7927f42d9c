from fastapi import FastAPI

from catalog.api.routes.health import router as health_router
from catalog.api.routes.metrics import router as metrics_router
from catalog.api.routes.v1.packages import router as packages_v1_router

API_PREFIX = "/api"


def setup_routes(app: FastAPI) -> None:
    """Configure all API routes."""
    # Operational endpoints
    app.include_router(health_router, prefix="/health", tags=["health"])
    app.include_router(metrics_router, prefix="/metrics", tags=["metrics"])

    # Catalog API consumed by the UI
    app.include_router(packages_v1_router, prefix=API_PREFIX, tags=["packages", "v1"])
