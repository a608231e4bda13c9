"""Prometheus metrics definitions."""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

http_request_duration = Histogram(
    "http_request_duration_seconds",
    "Duration of HTTP requests in seconds",
    labelnames=["method", "endpoint", "status_code"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_total = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "endpoint", "status_code"],
)

vendor_requests_total = Counter(
    "vendor_requests_total",
    "Outbound LLM vendor calls",
    labelnames=["provider", "outcome"],
)

vendor_request_duration = Histogram(
    "vendor_request_duration_seconds",
    "Latency of outbound LLM vendor calls in seconds",
    labelnames=["provider"],
    buckets=(0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 40.0, 80.0, 120.0),
)

credit_fallbacks_total = Counter(
    "credit_fallbacks_total",
    "Anthropic requests retried against OpenAI after a credit balance error",
)

gateway_errors_total = Counter(
    "gateway_errors_total",
    "Requests answered with an error envelope",
    labelnames=["error_type"],
)


def get_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
