"""Chat proxy endpoint: normalized request in, normalized envelope out."""

import logging

from fastapi import APIRouter, Depends, Request

from gateway.providers.gateway import ProviderGateway
from gateway.providers.models import ChatCompletion, ChatRequest

router = APIRouter(prefix="/api", tags=["chat"])
logger = logging.getLogger("gateway.routers.chat")


def get_gateway(request: Request) -> ProviderGateway:
    return request.app.state.gateway


@router.post("/openai", response_model=ChatCompletion)
async def chat_completion(
    body: ChatRequest,
    gateway: ProviderGateway = Depends(get_gateway),
):
    """Proxy a chat completion to OpenAI or Anthropic, chosen by ``provider``."""
    completion = await gateway.complete(body)
    logger.info(
        "Completion returned: provider=%s chars=%d",
        body.provider.value, len(completion.content),
    )
    return completion
