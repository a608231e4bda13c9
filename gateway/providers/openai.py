"""OpenAI chat completions dialect. The normalized contract is already its shape."""

from __future__ import annotations

from gateway.providers.base import VendorClient
from gateway.providers.models import ChatRequest, Provider


class OpenAIClient(VendorClient):
    provider = Provider.OPENAI
    path = "/v1/chat/completions"

    def build_payload(self, request: ChatRequest) -> dict:
        return {
            "model": request.model,
            "messages": [m.model_dump() for m in request.messages],
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        }

    def build_headers(self, api_key: str) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
