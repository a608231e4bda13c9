"""Vendor client base: one outbound HTTP call, timed, traced and error-mapped."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

import httpx
from opentelemetry import trace
from pydantic import ValidationError

from gateway.providers.errors import NetworkError, VendorError, vendor_error_message
from gateway.providers.models import ChatRequest, Provider, VendorResponse, parse_vendor_response
from gateway.telemetry.metrics import vendor_request_duration, vendor_requests_total

logger = logging.getLogger("gateway.providers")
tracer = trace.get_tracer(__name__)


class VendorClient(ABC):
    """Reshapes a ChatRequest into one vendor's dialect and sends it."""

    provider: Provider
    path: str

    def __init__(self, http: httpx.AsyncClient, base_url: str) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")

    @abstractmethod
    def build_payload(self, request: ChatRequest) -> dict:
        """Translate the normalized request into the vendor's JSON body."""

    @abstractmethod
    def build_headers(self, api_key: str) -> dict[str, str]:
        ...

    async def complete(self, request: ChatRequest, api_key: str) -> VendorResponse:
        payload = self.build_payload(request)
        url = f"{self._base_url}{self.path}"
        provider = self.provider.value

        with tracer.start_as_current_span(f"vendor.{provider}") as span:
            span.set_attribute("llm.provider", provider)
            span.set_attribute("llm.model", payload.get("model", ""))
            span.set_attribute("llm.message_count", len(payload.get("messages", [])))

            start = time.perf_counter()
            try:
                resp = await self._http.post(url, json=payload, headers=self.build_headers(api_key))
            except httpx.HTTPError as exc:
                vendor_requests_total.labels(provider=provider, outcome="network_error").inc()
                logger.error("Vendor call failed: provider=%s error=%s", provider, exc)
                raise NetworkError(f"Error calling {provider} API", detail=str(exc)) from exc
            finally:
                vendor_request_duration.labels(provider=provider).observe(time.perf_counter() - start)

            span.set_attribute("http.status_code", resp.status_code)
            body = _json_body(resp)

            if not resp.is_success:
                body = body if body is not None else {"error": resp.text or f"HTTP {resp.status_code}"}
                message = vendor_error_message(body, f"{provider} API returned HTTP {resp.status_code}")
                vendor_requests_total.labels(provider=provider, outcome="vendor_error").inc()
                logger.warning(
                    "Vendor error: provider=%s status=%d message=%s",
                    provider, resp.status_code, message,
                )
                raise VendorError(provider, resp.status_code, message, body)

            if not isinstance(body, dict):
                raise self._malformed(body if body is not None else resp.text[:200], "body is not a JSON object")
            try:
                parsed = parse_vendor_response(self.provider, body)
            except ValidationError as exc:
                raise self._malformed(body, exc) from exc

            vendor_requests_total.labels(provider=provider, outcome="success").inc()
            return parsed

    def _malformed(self, detail, reason) -> VendorError:
        provider = self.provider.value
        vendor_requests_total.labels(provider=provider, outcome="malformed").inc()
        logger.error("Unexpected response shape from %s: %s", provider, reason)
        return VendorError(provider, 502, f"Unexpected response shape from {provider} API", detail)


def _json_body(resp: httpx.Response):
    """Decoded JSON, or None when the body is not JSON."""
    try:
        return resp.json()
    except ValueError:
        return None
