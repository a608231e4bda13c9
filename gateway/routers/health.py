"""Health and Prometheus metrics endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from starlette.responses import Response

from gateway.config import Settings, get_settings
from gateway.telemetry.metrics import get_metrics
from gateway.telemetry.tracing import SERVICE_VERSION

router = APIRouter(tags=["ops"])

_start_time = datetime.now(timezone.utc)


@router.get("/health")
async def health(settings: Settings = Depends(get_settings)):
    uptime = (datetime.now(timezone.utc) - _start_time).total_seconds()
    return {
        "status": "healthy",
        "uptime_seconds": round(uptime, 2),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": SERVICE_VERSION,
        "vendors": {
            "openai": bool(settings.openai_api_key),
            "anthropic": bool(settings.anthropic_api_key),
        },
    }


@router.get("/metrics", include_in_schema=False)
async def metrics():
    body, content_type = get_metrics()
    return Response(content=body, media_type=content_type)
