# src/api/models.py — v1
"""API-level models returned by the facade.

Style and media enums live in ``core.models`` and are re-exported here so
callers only need one import path.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from panelforge.core.models import (
    STYLE_PROMPTS,
    AspectRatio,
    CameraMovement,
    GeneratedImage,
    ImageModel,
    ImageStyle,
    InspirationStrength,
    StoryboardSegment,
    TextToImagePrompt,
)

__all__ = [
    "STYLE_PROMPTS",
    "AspectRatio",
    "CameraMovement",
    "ComicStrip",
    "GeneratedImage",
    "ImageModel",
    "ImageStyle",
    "InspirationStrength",
    "StoryboardSegment",
    "TextToImagePrompt",
]


class ComicStrip(BaseModel):
    """Rendered comic panels with the prompts that produced them."""

    image_urls: list[str] = Field(default_factory=list)
    panel_prompts: list[str] = Field(default_factory=list)

    def as_images(self) -> list[GeneratedImage]:
        return [
            GeneratedImage(src=src, prompt=prompt)
            for src, prompt in zip(self.image_urls, self.panel_prompts)
        ]
