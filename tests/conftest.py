# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides mock completion clients, canned provider envelopes and sample
images. No external dependencies: all network I/O is mocked.
"""

from __future__ import annotations

import base64
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from panelforge.core.models import GeneratedImage
from panelforge.llm.base_client import BaseCompletionClient
from panelforge.llm.config import CompletionConfig
from panelforge.llm.models import CompletionResponse
from panelforge.logging.context import clear_context

# Smallest payloads that pass the JPEG / PNG magic-byte sniff
JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png"


def completion_payload(content: Any) -> dict[str, Any]:
    """Chat-completions envelope with one choice holding ``content``."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}},
        ],
    }


def completion_response(content: Any) -> CompletionResponse:
    return CompletionResponse.from_payload(completion_payload(content))


def json_response(value: Any) -> CompletionResponse:
    """Response whose content is ``value`` serialized as JSON."""
    return completion_response(json.dumps(value, ensure_ascii=False))


def make_client(*responses: CompletionResponse, model: str = "gpt-4o-mini") -> MagicMock:
    """Mock BaseCompletionClient returning ``responses`` in order."""
    client = MagicMock(spec=BaseCompletionClient)
    client.model = model
    client.provider_name = "mock"
    client.invoke = AsyncMock(side_effect=list(responses))
    return client


# === FIXTURES ===


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture
def completion_config() -> CompletionConfig:
    return CompletionConfig(
        base_url="https://llm.example.test/v1",
        api_key="sk-test",
        model="gpt-4o-mini",
    )


@pytest.fixture
def jpeg_data_uri() -> str:
    return "data:image/jpeg;base64," + base64.b64encode(JPEG_BYTES).decode("ascii")


@pytest.fixture
def png_data_uri() -> str:
    return "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture
def sample_images(jpeg_data_uri: str, png_data_uri: str) -> list[GeneratedImage]:
    return [
        GeneratedImage(src=jpeg_data_uri, prompt="A fox at the river"),
        GeneratedImage(src=png_data_uri, prompt="The fox crosses the bridge"),
    ]


@pytest.fixture
def jpeg_bytes() -> bytes:
    return JPEG_BYTES


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


# Helper factories exposed as fixtures (test modules cannot import conftest)


@pytest.fixture(name="completion_payload")
def _completion_payload_fixture():
    return completion_payload


@pytest.fixture(name="completion_response")
def _completion_response_fixture():
    return completion_response


@pytest.fixture(name="json_response")
def _json_response_fixture():
    return json_response


@pytest.fixture(name="make_client")
def _make_client_fixture():
    return make_client
