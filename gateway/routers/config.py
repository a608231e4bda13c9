"""Client bootstrap configuration. Exposes a key hint, never the key."""

from fastapi import APIRouter, Depends

from gateway.config import Settings, get_settings, key_hint

router = APIRouter(prefix="/api", tags=["config"])


@router.get("/config")
async def client_config(settings: Settings = Depends(get_settings)):
    return {
        "apiKeyConfigured": bool(settings.openai_api_key),
        "apiKeyHint": key_hint(settings.openai_api_key),
        "model": settings.openai_model,
    }
