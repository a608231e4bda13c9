"""Anthropic messages dialect: model aliases, system lifting and headers."""

from __future__ import annotations

import re

import httpx

from gateway.providers.base import VendorClient
from gateway.providers.models import ChatMessage, ChatRequest, Provider

# Friendly alias substring -> dated model id. Checked in order.
MODEL_ALIASES: tuple[tuple[str, str], ...] = (
    ("opus", "claude-3-opus-20240229"),
    ("sonnet", "claude-3-sonnet-20240229"),
    ("haiku", "claude-3-haiku-20240307"),
)

_DATED_SUFFIX = re.compile(r"-\d{8}$")


def resolve_model(model: str) -> str:
    """Map a friendly alias to its dated id; dated and unknown names pass through."""
    if _DATED_SUFFIX.search(model):
        return model
    lowered = model.lower()
    for alias, dated in MODEL_ALIASES:
        if alias in lowered:
            return dated
    return model


def split_messages(messages: list[ChatMessage]) -> tuple[str, list[dict]]:
    """Lift system messages into one system string; keep the rest in order.

    When only system text was supplied it is sent as the single user turn,
    since the messages API rejects an empty conversation.
    """
    system_parts = [m.content for m in messages if m.role == "system"]
    turns = [{"role": m.role, "content": m.content} for m in messages if m.role != "system"]
    system = "\n\n".join(part for part in system_parts if part)

    if not turns and system:
        return "", [{"role": "user", "content": system}]
    return system, turns


class AnthropicClient(VendorClient):
    provider = Provider.ANTHROPIC
    path = "/v1/messages"

    def __init__(self, http: httpx.AsyncClient, base_url: str, version: str = "2023-06-01") -> None:
        super().__init__(http, base_url)
        self._version = version

    def build_payload(self, request: ChatRequest) -> dict:
        system, turns = split_messages(request.messages)
        payload: dict = {
            "model": resolve_model(request.model),
            "messages": turns,
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
        }
        if system:
            payload["system"] = system
        return payload

    def build_headers(self, api_key: str) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": self._version,
        }
