import logging
import traceback

from fastapi import FastAPI

from catalog.core.clients.postgres import PostgresClient
from catalog.core.clients.valkey import ValkeyClient
from catalog.core.config import Settings
from catalog.repos.postgres import PostgresMetadataRepository, ensure_schema
from catalog.repos.valkey import ValkeyCacheRepository
from catalog.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class Services:
    """Container for application services."""

    def __init__(self) -> None:
        self.catalog: CatalogService | None = None


class AppState:
    """Application state containing clients, repositories, and services."""

    def __init__(self, settings: Settings):
        self.settings = settings

        # Clients
        self.postgres: PostgresClient | None = None
        self.valkey: ValkeyClient | None = None

        # Repositories
        self.metadata_repo: PostgresMetadataRepository | None = None
        self.cache_repo: ValkeyCacheRepository | None = None

        # Services
        self.services = Services()

    async def initialize(self) -> None:
        """Initialize all clients, repositories, and services."""
        logger.info("Initializing application state")

        try:
            logger.info("Initializing PostgreSQL client")
            self.postgres = PostgresClient(self.settings.postgres)
            await self.postgres.initialize()
        except Exception:
            logger.exception("Failed to initialize PostgreSQL client")
            logger.debug(traceback.format_exc())
            # Continue without the store; catalog requests will get a 503
            self.postgres = None

        if self.postgres and self.settings.catalog.ensure_schema:
            try:
                await ensure_schema(self.postgres)
            except Exception:
                logger.exception("Failed to ensure metadata schema")

        if self.settings.valkey.enabled:
            try:
                logger.info("Initializing Valkey client")
                self.valkey = ValkeyClient(self.settings.valkey)
                await self.valkey.initialize()
            except Exception:
                logger.exception("Failed to initialize Valkey client")
                logger.debug(traceback.format_exc())
                # Continue uncached
                self.valkey = None
        else:
            logger.info("Valkey cache disabled by configuration")

        logger.info("Initializing repositories")
        if self.postgres:
            self.metadata_repo = PostgresMetadataRepository(self.postgres)
        else:
            logger.warning(
                "Metadata repository unavailable due to client initialization failure"
            )
            self.metadata_repo = None

        self.cache_repo = ValkeyCacheRepository(self.valkey) if self.valkey else None

        logger.info("Initializing services")
        if self.metadata_repo:
            catalog_settings = self.settings.catalog
            self.services.catalog = CatalogService(
                self.metadata_repo,
                self.cache_repo,  # Cache repo is optional
                summaries_ttl=catalog_settings.summaries_cache_ttl,
                stats_ttl=catalog_settings.stats_cache_ttl,
                detail_ttl=catalog_settings.detail_cache_ttl,
            )
            logger.info("CatalogService initialized")
        else:
            logger.warning(
                "CatalogService unavailable due to repository initialization failures"
            )
            self.services.catalog = None

        logger.info("Application state initialization complete")

    async def cleanup(self) -> None:
        """Clean up all clients."""
        logger.info("Cleaning up application state")

        if self.postgres:
            try:
                logger.info("Cleaning up PostgreSQL client")
                await self.postgres.cleanup()
            except Exception:
                logger.exception("Error during PostgreSQL cleanup")

        if self.valkey:
            try:
                logger.info("Cleaning up Valkey client")
                await self.valkey.cleanup()
            except Exception:
                logger.exception("Error during Valkey cleanup")

        logger.info("Application state cleanup complete")


def setup_app_state(app: FastAPI, settings: Settings) -> AppState:
    """Create application state and tie its lifecycle to the app."""
    state = AppState(settings)

    @app.on_event("startup")
    async def startup_event() -> None:
        await state.initialize()

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        await state.cleanup()

    return state
