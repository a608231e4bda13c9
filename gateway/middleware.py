"""Request metrics middleware."""

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from gateway.telemetry.metrics import http_request_duration, http_requests_total

_SKIP_PATHS = {"/metrics", "/health", "/openapi.json", "/docs", "/redoc"}


def _endpoint_label(request: Request) -> str:
    # Route templates keep label cardinality bounded; unknown paths share one label.
    route = request.scope.get("route")
    return getattr(route, "path", "unmatched")


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        labels = {
            "method": request.method,
            "endpoint": _endpoint_label(request),
            "status_code": str(response.status_code),
        }
        http_request_duration.labels(**labels).observe(elapsed)
        http_requests_total.labels(**labels).inc()

        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        return response
