import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import Histogram

from catalog.api.middleware.errors import register_exception_handlers
from catalog.api.middleware.rate_limit import RateLimitMiddleware
from catalog.api.routes.router import setup_routes
from catalog.api.state import AppState, setup_app_state
from catalog.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

REQUEST_LATENCY = Histogram(
    "catalog_http_request_duration_seconds",
    "Time spent handling HTTP requests",
    ["method", "status"],
)


def create_app(settings: Settings | None = None, state: AppState | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    When `state` is given it is used as-is and no startup/shutdown hooks are
    installed, which lets callers supply already-built services.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app.name,
        description=settings.app.description,
        version=settings.app.version,
        docs_url="/docs" if settings.server.debug else None,
        redoc_url="/redoc" if settings.server.debug else None,
    )

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RateLimitMiddleware,
        rate=settings.server.rate_limit_rate,
        capacity=settings.server.rate_limit_capacity,
    )

    app.state.settings = settings
    app.state.state = state if state is not None else setup_app_state(app, settings)

    setup_routes(app)

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Log all incoming requests and responses."""
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        REQUEST_LATENCY.labels(request.method, str(response.status_code)).observe(
            process_time
        )
        logger.info(
            f"{request.method} {request.url.path} "
            f"- Status: {response.status_code} "
            f"- Process time: {process_time:.4f}s"
        )

        return response

    return app


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.server.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


_settings = get_settings()
_configure_logging(_settings)
app = create_app(_settings)
