"""Wire models for the normalized chat contract and the two vendor dialects."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Provider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class ChatMessage(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    """Normalized chat-completion request accepted by POST /api/openai."""

    model_config = ConfigDict(protected_namespaces=())

    model: str
    messages: list[ChatMessage]
    temperature: float = 0.7
    max_tokens: int = 4000
    provider: Provider = Provider.OPENAI
    model_family: str | None = None  # client hint, never forwarded


# ── Normalized envelope ────────────────────────────────────────────


class CompletionMessage(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: str = "assistant"
    content: str | None = None


class CompletionChoice(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int = 0
    message: CompletionMessage


class ChatCompletion(BaseModel):
    """OpenAI-shaped envelope every vendor response is converted into."""

    model_config = ConfigDict(extra="allow")

    choices: list[CompletionChoice] = Field(min_length=1)

    @classmethod
    def from_text(cls, content: str, **extra) -> ChatCompletion:
        return cls(
            choices=[CompletionChoice(message=CompletionMessage(content=content))],
            **extra,
        )

    @property
    def content(self) -> str:
        return self.choices[0].message.content or ""


# ── Vendor responses ───────────────────────────────────────────────


class OpenAIResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    vendor: Literal["openai"] = "openai"
    choices: list[CompletionChoice] = Field(min_length=1)


class AnthropicContentBlock(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str = "text"
    text: str = ""


class AnthropicResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    vendor: Literal["anthropic"] = "anthropic"
    type: Literal["message"]
    id: str = ""
    model: str = ""
    content: list[AnthropicContentBlock]
    stop_reason: str | None = None


VendorResponse = Annotated[
    Union[OpenAIResponse, AnthropicResponse],
    Field(discriminator="vendor"),
]

_vendor_adapter = TypeAdapter(VendorResponse)


def parse_vendor_response(provider: Provider, body: dict) -> VendorResponse:
    """Validate a 2xx vendor body against the dialect it came from."""
    return _vendor_adapter.validate_python({**body, "vendor": provider.value})


def normalize(response: VendorResponse) -> ChatCompletion:
    """Collapse a vendor response into the normalized envelope."""
    if response.vendor == Provider.ANTHROPIC.value:
        text = "".join(block.text for block in response.content if block.type == "text")
        return ChatCompletion.from_text(text, id=response.id, model=response.model)

    payload = response.model_dump(exclude={"vendor"})
    return ChatCompletion.model_validate(payload)
