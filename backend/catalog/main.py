import logging
import sys

import uvicorn

from catalog.core.config import get_settings


def main() -> None:
    """Run the application."""
    settings = get_settings()

    log_level = logging.DEBUG if settings.server.debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
    logging.basicConfig(level=log_level, format=log_format, stream=sys.stdout)

    # Client and state modules always log at DEBUG for connection diagnostics
    client_loggers = [
        "catalog.core.clients.postgres",
        "catalog.core.clients.valkey",
        "catalog.api.state",
    ]
    for logger_name in client_loggers:
        logging.getLogger(logger_name).setLevel(logging.DEBUG)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting {settings.app.name} v{settings.app.version}")
    logger.info(f"Environment: {settings.server.environment}")
    logger.info(f"Debug mode: {settings.server.debug}")
    logger.info(f"Host: {settings.server.host}:{settings.server.port}")
    logger.info(
        f"PostgreSQL: {settings.postgres.host}:{settings.postgres.port}/{settings.postgres.database}"
    )
    if settings.valkey.enabled:
        logger.info(
            f"Valkey: {settings.valkey.host}:{settings.valkey.port}/{settings.valkey.db}"
        )
    logger.info(f"Tarball registry: {settings.catalog.registry_url}")

    uvicorn.run(
        "catalog.api.app:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.debug,
        workers=settings.server.workers,
        log_level="debug" if settings.server.debug else "info",
    )


if __name__ == "__main__":
    main()
