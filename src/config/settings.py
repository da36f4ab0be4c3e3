# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Holds the media-generation and logging settings. The text-model endpoint
(base URL, API key, model) accepts several alias variable names and is
resolved separately by ``panelforge.llm.config``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from panelforge.logging.handlers import parse_size


class ConfigurationError(Exception):
    """Raised when required configuration is missing or inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Text model ===
    text_provider: str = "openai_compatible"

    # === Gemini media generation ===
    gemini_api_key: str = ""
    image_edit_model: str = "gemini-2.5-flash-image-preview"
    imagen_model: str = "imagen-4.0-generate-001"
    video_model: str = "veo-2.0-generate-001"
    image_output_mime_type: str = "image/jpeg"
    wiki_card_count: int = 4

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("wiki_card_count")
    @classmethod
    def validate_wiki_card_count(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("wiki_card_count must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        errors: list[str] = []

        if self.log_file is not None:
            try:
                parse_size(self.log_rotation)
            except ValueError:
                errors.append(
                    f"LOG_ROTATION must look like '10MB' when LOG_FILE is set, got {self.log_rotation!r}"
                )

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    @property
    def env_file(self) -> str:
        """Path of the .env file this settings class reads."""
        return str(self.model_config.get("env_file") or ".env")


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
