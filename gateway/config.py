"""Gateway configuration: vendor credentials, endpoints and server knobs."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Vendor credentials
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # Default model advertised to clients via /api/config
    openai_model: str = "gpt-4o"

    # Vendor endpoints
    openai_base_url: str = "https://api.openai.com"
    anthropic_base_url: str = "https://api.anthropic.com"
    anthropic_version: str = "2023-06-01"
    vendor_timeout_seconds: float = 120.0

    # Credit fallback target
    fallback_model: str = "gpt-4"

    # Observability
    otel_exporter_otlp_endpoint: str = ""
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    def api_key_for(self, provider: str) -> str:
        if provider == "anthropic":
            return self.anthropic_api_key
        return self.openai_api_key


def key_hint(api_key: str) -> str | None:
    """Return a loggable hint of the key: first 3 and last 4 characters."""
    if not api_key:
        return None
    return f"{api_key[:3]}...{api_key[-4:]}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
