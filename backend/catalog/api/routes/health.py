import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from catalog.api.dependencies.services import get_app_state
from catalog.api.state import AppState

logger = logging.getLogger(__name__)


router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    postgres: bool
    valkey: bool | None  # None when the cache is disabled
    version: str
    environment: str


@router.get("/")
async def health_check(
    request: Request, state: Annotated[AppState, Depends(get_app_state)]
) -> HealthResponse:
    """Check the metadata store and, when enabled, the cache."""
    settings = request.app.state.settings

    postgres_healthy = False
    try:
        postgres_healthy = await state.postgres.health_check() if state.postgres else False
        if not postgres_healthy:
            pg_config = settings.postgres
            logger.warning(
                f"PostgreSQL health check failed: host={pg_config.host}, port={pg_config.port}, db={pg_config.database}"
            )
    except Exception:
        logger.exception("PostgreSQL health check error")

    valkey_healthy: bool | None = None
    if settings.valkey.enabled:
        valkey_healthy = False
        try:
            valkey_healthy = await state.valkey.health_check() if state.valkey else False
            if not valkey_healthy:
                logger.warning(
                    f"Valkey health check failed: host={settings.valkey.host}, port={settings.valkey.port}"
                )
        except Exception:
            logger.exception("Valkey health check error")

    healthy = postgres_healthy and valkey_healthy is not False
    status = "healthy" if healthy else "degraded"
    logger.info(f"Overall health status: {status}")

    return HealthResponse(
        status=status,
        postgres=postgres_healthy,
        valkey=valkey_healthy,
        version=settings.app.version,
        environment=settings.server.environment,
    )
