# src/llm/adapters/openai_compatible_adapter.py — v1
"""OpenAI-compatible chat-completions adapter implementing BaseCompletionClient.

Talks plain HTTP (httpx) to ``{base_url}/chat/completions`` so any
OpenAI-compatible gateway works, and translates failures into ProviderError.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from panelforge.llm.base_client import BaseCompletionClient
from panelforge.llm.config import CompletionConfig, ensure_configured
from panelforge.llm.errors import ProviderError, ProviderErrorKind
from panelforge.llm.models import CompletionRequest, CompletionResponse

logger = logging.getLogger(__name__)

_AUTH_STATUSES = {401, 403}


class OpenAICompatibleAdapter(BaseCompletionClient):
    """Bearer-token chat-completions client."""

    def __init__(
        self,
        config: CompletionConfig,
        transport: httpx.AsyncBaseTransport | None = None,
        **kwargs: Any,
    ):
        self._config = config
        self._transport = transport

    @property
    def config(self) -> CompletionConfig:
        return self._config

    @property
    def model(self) -> str:
        return self._config.model

    @property
    def provider_name(self) -> str:
        return "openai_compatible"

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.api_key}",
        }

    async def invoke(self, request: CompletionRequest) -> CompletionResponse:
        ensure_configured(self._config)
        url = self._config.endpoint

        t0 = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
                response = await client.post(url, headers=self._headers(), json=request.to_wire())
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ProviderError(
                str(exc) or type(exc).__name__, kind=ProviderErrorKind.UNKNOWN,
            ) from exc
        latency = int((time.monotonic() - t0) * 1000)

        if not response.is_success:
            error = _error_from_response(response)
            logger.warning(
                "Completion call failed: status=%d kind=%s message=%s",
                response.status_code, error.kind.value, error.message,
            )
            raise error

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError(
                "response body is not valid JSON",
                kind=ProviderErrorKind.UNKNOWN,
                status_code=response.status_code,
            ) from exc

        logger.debug(
            "Completion ok: model=%s status=%d latency_ms=%d",
            request.model, response.status_code, latency,
        )
        return CompletionResponse.from_payload(payload)


def _error_from_response(response: httpx.Response) -> ProviderError:
    """Pick the most useful message out of a failed response."""
    message = f"HTTP {response.status_code}"
    try:
        envelope = response.json()
    except ValueError:
        text = response.text
        if text:
            message = text
    else:
        error = envelope.get("error") if isinstance(envelope, dict) else None
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            message = error["message"]

    kind = (
        ProviderErrorKind.AUTHENTICATION
        if response.status_code in _AUTH_STATUSES
        else ProviderErrorKind.CALL_FAILED
    )
    return ProviderError(message, kind=kind, status_code=response.status_code)
