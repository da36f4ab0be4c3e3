# src/llm/client_factory.py — v2
"""Factory: instantiate a completion client from a provider name.

The endpoint configuration is resolved once here and injected into the
adapter; adapters never read the environment themselves.
"""

from __future__ import annotations

import importlib
import logging

from panelforge.llm.base_client import BaseCompletionClient
from panelforge.llm.config import CompletionConfig, load_completion_config

logger = logging.getLogger(__name__)

# Registry of provider name → adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "openai_compatible": (
        "panelforge.llm.adapters.openai_compatible_adapter.OpenAICompatibleAdapter"
    ),
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_completion_client(
    provider: str = "openai_compatible",
    config: CompletionConfig | None = None,
    env_file: str = ".env",
    **kwargs: object,
) -> BaseCompletionClient:
    """Instantiate the correct adapter from provider name.

    Args:
        provider: Provider identifier.
        config: Resolved endpoint configuration. Loaded from the
            environment (and ``env_file``) if None.
        **kwargs: Additional adapter arguments (e.g. an httpx transport).

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported text provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    adapter_cls = _import_class(_PROVIDER_REGISTRY[provider])
    if config is None:
        config = load_completion_config(env_file=env_file)

    logger.debug("Creating completion client: provider=%s, model=%s", provider, config.model)
    return adapter_cls(config=config, **kwargs)


def register_provider(name: str, class_path: str) -> None:
    """Register a custom adapter implementing BaseCompletionClient."""
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered text provider: %s → %s", name, class_path)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
