"""Provider gateway: route a normalized request to its vendor and normalize the reply."""

from __future__ import annotations

import logging

import httpx

from gateway.config import Settings, key_hint
from gateway.providers.anthropic import AnthropicClient
from gateway.providers.base import VendorClient
from gateway.providers.errors import ConfigurationError, VendorError
from gateway.providers.models import ChatCompletion, ChatRequest, Provider, normalize
from gateway.providers.openai import OpenAIClient
from gateway.telemetry.metrics import credit_fallbacks_total

logger = logging.getLogger("gateway.providers")

# Section headings the prompt builder emits for optional problem context.
CONTEXT_MARKERS = ("Stakeholders", "Root Causes", "Impact Assessment")


class ProviderGateway:
    """Stateless per request; holds only the shared HTTP connection pool."""

    def __init__(self, settings: Settings, http: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._http = http or httpx.AsyncClient(timeout=settings.vendor_timeout_seconds)
        self._clients: dict[Provider, VendorClient] = {
            Provider.OPENAI: OpenAIClient(self._http, settings.openai_base_url),
            Provider.ANTHROPIC: AnthropicClient(
                self._http,
                settings.anthropic_base_url,
                version=settings.anthropic_version,
            ),
        }

    async def close(self) -> None:
        await self._http.aclose()

    def _resolve_key(self, provider: Provider) -> str:
        api_key = self._settings.api_key_for(provider.value)
        if not api_key:
            logger.error("Request rejected: %s API key not configured", provider.value)
            raise ConfigurationError(provider.value)
        return api_key

    async def complete(self, request: ChatRequest) -> ChatCompletion:
        provider = request.provider
        api_key = self._resolve_key(provider)
        _log_request_shape(request, api_key)

        try:
            response = await self._clients[provider].complete(request, api_key)
        except VendorError as exc:
            if provider is Provider.ANTHROPIC and exc.is_credit_exhausted:
                return await self._credit_fallback(request, exc)
            raise

        return normalize(response)

    async def _credit_fallback(self, request: ChatRequest, cause: VendorError) -> ChatCompletion:
        """Retry once against OpenAI after Anthropic reports an empty credit balance."""
        fallback = request.model_copy(
            update={"provider": Provider.OPENAI, "model": self._settings.fallback_model}
        )
        credit_fallbacks_total.inc()
        logger.warning(
            "Anthropic credit exhausted (%s); retrying once with openai model=%s",
            cause.message, fallback.model,
        )

        api_key = self._resolve_key(Provider.OPENAI)
        response = await self._clients[Provider.OPENAI].complete(fallback, api_key)
        return normalize(response)


def _log_request_shape(request: ChatRequest, api_key: str) -> None:
    user_text = "\n".join(m.content for m in request.messages if m.role == "user")
    markers = [marker for marker in CONTEXT_MARKERS if f"{marker}:" in user_text]
    logger.info(
        "Vendor request: provider=%s model=%s messages=%d max_tokens=%d context=%s key=%s",
        request.provider.value,
        request.model,
        len(request.messages),
        request.max_tokens,
        ",".join(markers) or "none",
        key_hint(api_key),
    )
