# src/media/gemini_adapter.py — v1
"""Google Gemini / Imagen / Veo adapter for image and video generation.

Uses the google-genai SDK through its async surface (``client.aio``).
Returns images as data URIs; video calls return the provider's
long-running operation handle untouched.
"""

from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types

from panelforge.config.settings import ConfigurationError
from panelforge.media.parts import InlineImage, to_data_uri

logger = logging.getLogger(__name__)

IMAGE_MODALITIES = ["IMAGE", "TEXT"]


class GeminiMediaClient:
    """Thin async wrapper over ``genai.Client``."""

    def __init__(self, api_key: str, client: Any | None = None):
        if not api_key:
            raise ConfigurationError(
                "A Gemini API key is required to generate images and videos. "
                "Set GEMINI_API_KEY in the environment or .env file."
            )
        self._client = client if client is not None else genai.Client(api_key=api_key)

    async def generate_images(
        self,
        model: str,
        prompt: str,
        number_of_images: int = 1,
        aspect_ratio: str = "16:9",
        output_mime_type: str = "image/jpeg",
        negative_prompt: str | None = None,
    ) -> list[str]:
        """Imagen text-to-image. Returns data URIs (possibly empty)."""
        config = types.GenerateImagesConfig(
            number_of_images=number_of_images,
            output_mime_type=output_mime_type,
            aspect_ratio=aspect_ratio,
            negative_prompt=negative_prompt or None,
        )
        logger.debug("generate_images model=%s n=%d ratio=%s", model, number_of_images, aspect_ratio)
        response = await self._client.aio.models.generate_images(
            model=model, prompt=prompt, config=config,
        )

        images: list[str] = []
        for generated in response.generated_images or []:
            image = generated.image
            if image is not None and image.image_bytes:
                images.append(
                    to_data_uri(image.image_bytes, image.mime_type or output_mime_type)
                )
        return images

    async def generate_content_images(
        self,
        model: str,
        prompt: str,
        images: list[InlineImage] | None = None,
        prompt_first: bool = False,
    ) -> list[str]:
        """Multimodal generation (images in, images out).

        Only inline image parts of the first candidate are returned.
        """
        image_parts = [
            types.Part.from_bytes(data=image.data, mime_type=image.mime_type)
            for image in images or []
        ]
        text_part = types.Part.from_text(text=prompt)
        parts = [text_part, *image_parts] if prompt_first else [*image_parts, text_part]

        logger.debug("generate_content model=%s images=%d", model, len(image_parts))
        response = await self._client.aio.models.generate_content(
            model=model,
            contents=types.Content(role="user", parts=parts),
            config=types.GenerateContentConfig(response_modalities=IMAGE_MODALITIES),
        )

        results: list[str] = []
        candidates = response.candidates or []
        if not candidates or candidates[0].content is None:
            return results
        for part in candidates[0].content.parts or []:
            inline = part.inline_data
            if inline is not None and inline.data:
                results.append(to_data_uri(inline.data, inline.mime_type or "image/png"))
        return results

    async def generate_videos(
        self,
        model: str,
        prompt: str,
        start_image: InlineImage,
        number_of_videos: int = 1,
    ) -> Any:
        """Start an image-to-video job and return its operation handle.

        Aspect ratio is not forwarded: the provider rejects it alongside a
        start image.
        """
        logger.info("generate_videos model=%s", model)
        return await self._client.aio.models.generate_videos(
            model=model,
            prompt=prompt,
            image=types.Image(image_bytes=start_image.data, mime_type=start_image.mime_type),
            config=types.GenerateVideosConfig(number_of_videos=number_of_videos),
        )

    async def get_videos_operation(self, operation: Any) -> Any:
        """Fetch the current state of a video operation once."""
        return await self._client.aio.operations.get(operation)
