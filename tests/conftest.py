"""
Pytest configuration and fixtures.

Vendor and gateway HTTP traffic goes through httpx.MockTransport; nothing
touches the network.
"""

from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from gateway.config import Settings
from gateway.main import create_app

OPENAI_KEY = "sk-test-openai-abcd1234"
ANTHROPIC_KEY = "sk-ant-test-wxyz9876"


def make_settings(**overrides) -> Settings:
    """Settings with test keys; explicit values win over the environment."""
    values = {
        "openai_api_key": OPENAI_KEY,
        "anthropic_api_key": ANTHROPIC_KEY,
        "openai_model": "gpt-4o",
        "openai_base_url": "https://api.openai.com",
        "anthropic_base_url": "https://api.anthropic.com",
        "anthropic_version": "2023-06-01",
        "fallback_model": "gpt-4",
        "otel_exporter_otlp_endpoint": "",
        "log_level": "INFO",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def openai_body(content: str = "Hello from OpenAI", model: str = "gpt-4o") -> dict:
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


def anthropic_body(text: str = "Hello from Claude", model: str = "claude-3-opus-20240229") -> dict:
    return {
        "id": "msg_123",
        "type": "message",
        "role": "assistant",
        "model": model,
        "content": [{"type": "text", "text": text}],
        "stop_reason": "end_turn",
    }


class VendorRecorder:
    """Records outbound vendor requests and answers from a queue of responses."""

    def __init__(self, responses: list[httpx.Response] | Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []
        self._responses = responses

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if callable(self._responses):
            return self._responses(request)
        return self._responses.pop(0)

    def json_bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def make_client():
    """Build a TestClient whose vendor traffic is answered by ``responses``."""
    clients: list[TestClient] = []

    def _make(responses, **settings_overrides) -> tuple[TestClient, VendorRecorder]:
        recorder = VendorRecorder(responses)
        http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        app = create_app(make_settings(**settings_overrides), http=http)
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client, recorder

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


def chat_payload(model: str = "gpt-4o", provider: str = "openai", **overrides) -> dict:
    payload = {
        "model": model,
        "messages": [
            {"role": "system", "content": "You are an expert problem-solving assistant."},
            {"role": "user", "content": "Solve this"},
        ],
        "temperature": 0.7,
        "max_tokens": 4000,
        "provider": provider,
    }
    payload.update(overrides)
    return payload
