# src/llm/models.py — v1
"""Wire types for chat completions: messages, content parts, request, response."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class ImageURL(BaseModel):
    """Opaque image reference (https URL or data URI)."""

    url: str


class TextPart(BaseModel):
    """Literal text content."""

    type: Literal["text", "input_text"] = "text"
    text: str


class ImagePart(BaseModel):
    """Image reference sent to vision-capable models. Outbound only."""

    type: Literal["input_image"] = "input_image"
    image_url: ImageURL

    @classmethod
    def from_url(cls, url: str) -> ImagePart:
        return cls(image_url=ImageURL(url=url))


ContentPart = Annotated[Union[TextPart, ImagePart], Field(discriminator="type")]


class Message(BaseModel):
    """Single message in a conversation."""

    role: Literal["system", "user", "assistant"]
    content: str | list[ContentPart]


class CompletionRequest(BaseModel):
    """Body of a POST /chat/completions call."""

    model: str
    temperature: float
    response_format: dict[str, Any] | None = None
    messages: list[Message]

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict in the provider's wire format."""
        return self.model_dump(mode="json", exclude_none=True)


class ResponseMessage(BaseModel):
    model_config = ConfigDict(extra="allow")

    role: str | None = None
    content: str | list[Any] | None = None


class Choice(BaseModel):
    model_config = ConfigDict(extra="allow")

    index: int | None = None
    message: ResponseMessage | None = None


class CompletionResponse(BaseModel):
    """Provider response envelope. Only choices[0].message.content is used."""

    model_config = ConfigDict(extra="allow")

    choices: list[Choice] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> CompletionResponse:
        """Build leniently from decoded JSON.

        The envelope differs between providers, so an unexpected shape yields
        an empty response and the caller reports missing content.
        """
        if not isinstance(payload, dict):
            logger.warning("Completion payload is not an object: %s", type(payload).__name__)
            return cls()
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Unexpected completion envelope: %s", exc.errors()[:3])
            return cls()

    def first_content(self) -> str | list[Any] | None:
        """Message content of the first choice, if any."""
        if not self.choices or self.choices[0].message is None:
            return None
        return self.choices[0].message.content
