# src/llm/base_client.py — v1
"""Abstract completion client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from panelforge.llm.models import CompletionRequest, CompletionResponse


class BaseCompletionClient(ABC):
    """Unified interface for chat-completion providers."""

    @abstractmethod
    async def invoke(self, request: CompletionRequest) -> CompletionResponse:
        """Send one request and return the raw response envelope.

        Implementations make a single attempt: no retry, no backoff.
        """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier placed in outgoing requests."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (e.g. openai_compatible)."""
