from fastapi import APIRouter
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

router = APIRouter()


@router.get("/")
async def metrics() -> Response:
    """Prometheus metrics, including request latency and metadata parse failures."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
