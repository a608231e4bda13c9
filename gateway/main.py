"""Problem Solver Gateway: FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from gateway.config import Settings, get_settings, key_hint
from gateway.middleware import MetricsMiddleware
from gateway.providers.errors import GatewayError
from gateway.providers.gateway import ProviderGateway
from gateway.routers import chat, config, health
from gateway.telemetry.logging import setup_logging
from gateway.telemetry.metrics import gateway_errors_total
from gateway.telemetry.tracing import SERVICE_VERSION, setup_tracing


def create_app(settings: Settings | None = None, http: httpx.AsyncClient | None = None) -> FastAPI:
    """Build the app. ``http`` lets callers supply the vendor transport."""
    settings = settings or get_settings()

    setup_tracing(otlp_endpoint=settings.otel_exporter_otlp_endpoint)
    logger = setup_logging(
        otlp_endpoint=settings.otel_exporter_otlp_endpoint,
        level=settings.log_level.upper(),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.gateway = ProviderGateway(settings, http=http)
        logger.info(
            "Gateway ready: openai_key=%s anthropic_key=%s default_model=%s",
            key_hint(settings.openai_api_key),
            key_hint(settings.anthropic_api_key),
            settings.openai_model,
        )
        yield
        await app.state.gateway.close()
        logger.info("Gateway shut down")

    app = FastAPI(
        title="Problem Solver Gateway",
        description="LLM vendor proxy for the problem-solving assistant",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.add_middleware(MetricsMiddleware)

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        gateway_errors_total.labels(error_type=type(exc).__name__).inc()
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    app.include_router(health.router)
    app.include_router(config.router)
    app.include_router(chat.router)

    FastAPIInstrumentor.instrument_app(app)
    return app


def run() -> None:
    settings = get_settings()
    logging.getLogger("gateway").info("Listening on %s:%d", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
