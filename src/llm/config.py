# src/llm/config.py — v1
"""Text-model endpoint configuration.

Resolution order for each value: every alias in turn, each looked up in the
.env file and then the process environment (see config/resolver.py).
The resulting ``CompletionConfig`` is built once and handed to the client.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from panelforge.config.resolver import EnvSource, default_sources, resolve
from panelforge.config.settings import ConfigurationError

BASE_URL_KEYS: tuple[str, ...] = (
    "OPENAI_COMPATIBLE_BASE_URL",
    "VITE_OPENAI_COMPATIBLE_BASE_URL",
    "OPENAI_BASE_URL",
)
API_KEY_KEYS: tuple[str, ...] = (
    "OPENAI_COMPATIBLE_API_KEY",
    "VITE_OPENAI_COMPATIBLE_API_KEY",
    "OPENAI_API_KEY",
)
MODEL_KEYS: tuple[str, ...] = (
    "OPENAI_COMPATIBLE_TEXT_MODEL",
    "VITE_OPENAI_COMPATIBLE_TEXT_MODEL",
    "OPENAI_TEXT_MODEL",
)
DEFAULT_TEXT_MODEL = "gpt-4o-mini"


@dataclass(frozen=True)
class CompletionConfig:
    """Resolved OpenAI-compatible endpoint settings."""

    base_url: str | None
    api_key: str | None
    model: str = DEFAULT_TEXT_MODEL

    @property
    def endpoint(self) -> str:
        """Full chat-completions URL."""
        return f"{self.base_url}/chat/completions"

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url) and bool(self.api_key)


def load_completion_config(
    sources: Sequence[EnvSource] | None = None,
    env_file: str = ".env",
) -> CompletionConfig:
    """Resolve the endpoint triple from the environment.

    Missing base URL or key are left as None (checked later by
    ``ensure_configured``); a missing model falls back to the default.
    """
    if sources is None:
        sources = default_sources(env_file)

    base_url = resolve(BASE_URL_KEYS, sources)
    if base_url:
        base_url = base_url.rstrip("/")

    return CompletionConfig(
        base_url=base_url or None,
        api_key=resolve(API_KEY_KEYS, sources),
        model=resolve(MODEL_KEYS, sources) or DEFAULT_TEXT_MODEL,
    )


def _missing_message(what: str, keys: Sequence[str]) -> str:
    alternatives = ", ".join(keys[1:])
    return (
        f"The text model {what} is not configured. "
        f"Set {keys[0]} in the environment or .env file"
        + (f" (also accepted: {alternatives})." if alternatives else ".")
    )


def ensure_configured(config: CompletionConfig) -> None:
    """Fail fast before any network call when the endpoint is unusable.

    Raises:
        ConfigurationError: Base URL or API key is absent.
    """
    if not config.base_url:
        raise ConfigurationError(_missing_message("endpoint URL", BASE_URL_KEYS))
    if not config.api_key:
        raise ConfigurationError(_missing_message("API key", API_KEY_KEYS))
