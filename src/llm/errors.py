# src/llm/errors.py — v1
"""Error taxonomy for the prompt-completion pipeline.

ConfigurationError lives in config/settings.py; everything raised once a
request is under way derives from CompletionError.
"""

from __future__ import annotations

from enum import Enum


class CompletionError(Exception):
    """Base class for text-model completion failures."""


class ProviderErrorKind(str, Enum):
    """Why the provider call failed."""

    AUTHENTICATION = "authentication"
    CALL_FAILED = "call_failed"
    UNKNOWN = "unknown"


_KIND_PREFIX: dict[ProviderErrorKind, str] = {
    ProviderErrorKind.AUTHENTICATION: "Text model authentication failed",
    ProviderErrorKind.CALL_FAILED: "Text model call failed",
    ProviderErrorKind.UNKNOWN: "Unknown error while calling the text model",
}


class ProviderError(CompletionError):
    """Non-2xx HTTP status or transport failure.

    ``message`` is the provider's own text (error envelope message, raw
    body, or ``HTTP <status>``); ``str(err)`` prefixes it with the kind.
    """

    def __init__(
        self,
        message: str,
        kind: ProviderErrorKind = ProviderErrorKind.CALL_FAILED,
        status_code: int | None = None,
    ):
        self.message = message
        self.kind = kind
        self.status_code = status_code
        super().__init__(f"{_KIND_PREFIX[kind]}: {message}")

    @property
    def is_authentication(self) -> bool:
        return self.kind is ProviderErrorKind.AUTHENTICATION


class EmptyContentError(CompletionError):
    """The provider answered but returned no usable text."""

    def __init__(self, context: str):
        self.context = context
        super().__init__(f"The text model returned no {context}.")


class FormatError(CompletionError):
    """The provider's text failed to parse or failed shape validation."""

    def __init__(self, context: str, detail: str):
        self.context = context
        self.detail = detail
        super().__init__(f"Invalid {context} from the text model: {detail}")
