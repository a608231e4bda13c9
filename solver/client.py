"""HTTP client for the gateway, plus the sequential retry wrapper."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

import httpx

from solver.config import GatewayConfig, SessionConfig
from solver.errors import ConfigurationError, GatewayError, NetworkError
from solver.prompts import SYSTEM_PROMPT

logger = logging.getLogger("solver.client")

T = TypeVar("T")


async def with_retries(
    call: Callable[[], Awaitable[T]],
    attempts: int = 3,
    backoff_seconds: float = 1.0,
) -> T:
    """Run ``call`` up to ``attempts`` times, sleeping backoff * attempt between tries.

    The last failure is re-raised unmodified.
    """
    for attempt in range(1, attempts + 1):
        try:
            return await call()
        except Exception as exc:
            if attempt == attempts:
                logger.error("Giving up after %d attempts: %s", attempts, exc)
                raise
            delay = backoff_seconds * attempt
            logger.warning("Attempt %d/%d failed (%s); retrying in %.1fs", attempt, attempts, exc, delay)
            await asyncio.sleep(delay)
    raise RuntimeError("attempts must be at least 1")


class GatewayClient:
    def __init__(self, session: SessionConfig, http: httpx.AsyncClient | None = None) -> None:
        self._http = http or httpx.AsyncClient(
            base_url=session.gateway_url,
            timeout=session.timeout_seconds,
        )
        self._gateway_config: GatewayConfig | None = None

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> GatewayClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def load_config(self) -> GatewayConfig:
        """Fetch /api/config. Only a successful fetch is cached."""
        if self._gateway_config is not None:
            return self._gateway_config

        try:
            resp = await self._http.get("/api/config")
        except httpx.HTTPError as exc:
            logger.error("Failed to load gateway configuration: %s", exc)
            raise NetworkError(f"Gateway unreachable: {exc}") from exc

        if not resp.is_success:
            logger.error("Failed to load gateway configuration: HTTP %d", resp.status_code)
            raise GatewayError(
                f"Gateway configuration unavailable: HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            config = GatewayConfig.model_validate(resp.json())
        except ValueError as exc:
            logger.error("Malformed gateway configuration: %s", exc)
            raise GatewayError("Gateway configuration unavailable: malformed response") from exc

        logger.info(
            "Gateway configuration loaded: key_configured=%s model=%s",
            config.api_key_configured, config.model,
        )
        self._gateway_config = config
        return config

    def build_request(self, prompt: str, session: SessionConfig) -> dict:
        return {
            "model": session.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": session.temperature,
            "max_tokens": session.max_tokens,
            "provider": session.provider,
            "model_family": session.model_family,
        }

    async def complete(self, prompt: str, session: SessionConfig) -> str:
        """Send one prompt through the gateway and return the reply text."""
        config = await self.load_config()
        if not config.api_key_configured:
            raise ConfigurationError("API key not configured on the gateway")

        logger.info("Using model=%s provider=%s", session.model, session.provider)
        try:
            resp = await self._http.post("/api/openai", json=self.build_request(prompt, session))
        except httpx.HTTPError as exc:
            raise NetworkError(f"Gateway unreachable: {exc}") from exc

        try:
            body = resp.json()
        except ValueError:
            body = {}

        if not resp.is_success:
            message = body.get("error") if isinstance(body, dict) else None
            raise GatewayError(f"API error: {message or 'Unknown error'}", status_code=resp.status_code)

        try:
            return body["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as exc:
            raise GatewayError("API error: malformed response envelope", status_code=resp.status_code) from exc

    async def complete_with_retries(self, prompt: str, session: SessionConfig) -> str:
        return await with_retries(
            lambda: self.complete(prompt, session),
            attempts=session.max_attempts,
            backoff_seconds=session.backoff_seconds,
        )
