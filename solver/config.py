"""Session-scoped client configuration and the request fields derived from it."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GatewayConfig(BaseModel):
    """What GET /api/config reports about the gateway."""

    model_config = ConfigDict(populate_by_name=True)

    api_key_configured: bool = Field(default=False, alias="apiKeyConfigured")
    api_key_hint: str | None = Field(default=None, alias="apiKeyHint")
    model: str | None = None


class SessionConfig(BaseModel):
    """Everything one user session needs to issue requests.

    Passed explicitly to each operation; operations never mutate it.
    """

    model_config = ConfigDict(frozen=True)

    gateway_url: str = "http://localhost:3000"
    model: str = "gpt-4"
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_attempts: int = Field(default=3, ge=1)
    backoff_seconds: float = Field(default=1.0, ge=0.0)
    timeout_seconds: float = 120.0

    def with_gateway_config(self, gateway: GatewayConfig) -> SessionConfig:
        """Adopt the gateway's advertised default model, if it sends one."""
        if not gateway.model:
            return self
        return self.model_copy(update={"model": gateway.model})

    @property
    def provider(self) -> str:
        return derive_provider(self.model)

    @property
    def max_tokens(self) -> int:
        return 16000 if "16k" in self.model else 4000

    @property
    def model_family(self) -> str:
        return derive_model_family(self.model)


def derive_provider(model: str) -> str:
    """Models named ``claude*`` go to Anthropic; everything else to OpenAI."""
    return "anthropic" if model.startswith("claude") else "openai"


def derive_model_family(model: str) -> str:
    if model.startswith("claude-3"):
        return "claude-3"
    if model.startswith("claude"):
        return "claude"
    if model.startswith("gpt-4"):
        return "gpt-4"
    return "gpt-3.5"
