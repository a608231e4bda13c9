"""OpenTelemetry tracing configuration."""

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

SERVICE_NAME = "problem-solver-gateway"
SERVICE_VERSION = "1.0.0"

_provider: TracerProvider | None = None


def setup_tracing(otlp_endpoint: str = "") -> TracerProvider:
    """Install the global tracer provider. Later calls return the first one."""
    global _provider
    if _provider is not None:
        return _provider

    resource = Resource.create(
        {
            "service.name": SERVICE_NAME,
            "service.version": SERVICE_VERSION,
        }
    )

    provider = TracerProvider(resource=resource)

    # No collector configured: spans are still created, just never exported.
    if otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    trace.set_tracer_provider(provider)
    _provider = provider
    return provider
