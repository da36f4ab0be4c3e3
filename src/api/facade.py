# src/api/facade.py — v1
"""Public API facade — image and video generation from user prompts.

Usage:
    from panelforge.api.facade import MediaStudio
    studio = MediaStudio.from_settings()
    strip = await studio.generate_comic_strip(story, ImageStyle.WATERCOLOR, 4)

Every operation first refines the user's input through a prompt builder
(text model) and then calls the Gemini media provider. Builder errors
propagate unchanged; provider failures surface as MediaGenerationError.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

from panelforge.api.models import ComicStrip
from panelforge.config.settings import Settings
from panelforge.core.models import (
    MOVEMENT_PROMPTS,
    STYLE_PROMPTS,
    AspectRatio,
    CameraMovement,
    GeneratedImage,
    ImageModel,
    ImageStyle,
    InspirationStrength,
    StoryboardSegment,
)
from panelforge.llm.client_factory import create_completion_client
from panelforge.logging.context import set_job_context
from panelforge.media.errors import MediaFailureReason, MediaGenerationError, to_media_error
from panelforge.media.gemini_adapter import GeminiMediaClient
from panelforge.media.parts import InlineImage, decode_image_source, load_image_file
from panelforge.pipeline import builders

if TYPE_CHECKING:
    from panelforge.llm.base_client import BaseCompletionClient

logger = logging.getLogger(__name__)

# data URI / bare base64 string, a file path, or already-decoded bytes
ImageInput = Union[str, Path, InlineImage]


class MediaStudio:
    """Entry point for all generation operations.

    Args:
        settings: Global settings. Loaded from .env if None.
        text_client: Completion client for the prompt builders. Created
            from the environment on first use if None.
        media_client: Gemini client. Created from ``settings.gemini_api_key``
            on first use if None.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        text_client: BaseCompletionClient | None = None,
        media_client: GeminiMediaClient | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._text_client = text_client
        self._media_client = media_client

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> MediaStudio:
        settings = settings or Settings()
        text_client = create_completion_client(
            provider=settings.text_provider, env_file=settings.env_file,
        )
        return cls(settings=settings, text_client=text_client)

    @property
    def text_client(self) -> BaseCompletionClient:
        if self._text_client is None:
            self._text_client = create_completion_client(
                provider=self.settings.text_provider, env_file=self.settings.env_file,
            )
        return self._text_client

    def _media(self) -> GeminiMediaClient:
        """Return the media client, creating it on first use.

        Raises:
            ConfigurationError: No Gemini API key configured.
        """
        if self._media_client is None:
            self._media_client = GeminiMediaClient(api_key=self.settings.gemini_api_key)
        return self._media_client

    # --- Comics and cards ---

    async def generate_illustrated_cards(
        self, topic: str, style: ImageStyle | str, model: ImageModel | str,
    ) -> list[str]:
        """Illustrated 16:9 explainer cards for ``topic``, one image per card."""
        media = self._media()
        _new_job("illustrated_cards")
        model = ImageModel(model)
        card_prompts = await builders.generate_wiki_card_prompts(
            topic, STYLE_PROMPTS[ImageStyle(style)], self.settings.wiki_card_count,
            self.text_client,
        )

        async def render(card_prompt: str) -> str:
            if model is ImageModel.NANO_BANANA:
                images = await media.generate_content_images(model.value, card_prompt)
            else:
                images = await media.generate_images(
                    model.value, card_prompt,
                    aspect_ratio=AspectRatio.WIDE.value,
                    output_mime_type=self.settings.image_output_mime_type,
                )
            if not images:
                raise MediaGenerationError(
                    "The model did not return an illustrated card.", MediaFailureReason.NO_OUTPUT,
                )
            return images[0]

        try:
            return await _render_all(render(p) for p in card_prompts)
        except Exception as exc:
            raise to_media_error(exc) from exc

    async def generate_comic_strip(
        self, story: str, style: ImageStyle | str, number_of_images: int,
    ) -> ComicStrip:
        """Break ``story`` into panels and render each one with Imagen."""
        media = self._media()
        _new_job("comic_strip")
        panel_prompts = await builders.generate_comic_panel_prompts(
            story, STYLE_PROMPTS[ImageStyle(style)], number_of_images, self.text_client,
        )

        async def render(panel_prompt: str) -> str:
            images = await media.generate_images(
                self.settings.imagen_model, panel_prompt,
                aspect_ratio=AspectRatio.WIDE.value,
                output_mime_type=self.settings.image_output_mime_type,
            )
            if not images:
                raise MediaGenerationError(
                    "One or more story panels failed to generate.", MediaFailureReason.NO_OUTPUT,
                )
            return images[0]

        try:
            image_urls = await _render_all(render(p) for p in panel_prompts)
        except Exception as exc:
            raise to_media_error(exc) from exc

        logger.info("Comic strip rendered: %d panels", len(image_urls))
        return ComicStrip(image_urls=image_urls, panel_prompts=panel_prompts)

    async def edit_comic_panel(self, original_image: ImageInput, prompt: str) -> str:
        """Apply an edit request to one panel image; returns a data URI."""
        media = self._media()
        _new_job("edit_comic_panel")
        image = _as_inline(original_image)
        refined = await builders.generate_image_edit_prompt(prompt, self.text_client)
        images = await self._content_images(media, refined, [image])
        return images[0]

    async def generate_video_scripts_for_comic_strip(
        self, story: str, images: Sequence[GeneratedImage],
    ) -> list[str]:
        """One animation script sentence per comic image.

        Padded (empty) storyboard segments yield an empty string.
        """
        _new_job("video_scripts")
        segments = await builders.generate_video_storyboard(story, images, self.text_client)
        return [_script_sentence(segment) for segment in segments]

    # --- Image generation ---

    async def generate_text_to_image(
        self,
        prompt: str,
        keywords: Sequence[str],
        negative_prompt: str,
        number_of_images: int,
        aspect_ratio: AspectRatio | str,
    ) -> list[str]:
        """Refine the prompt, then render ``number_of_images`` Imagen images."""
        media = self._media()
        _new_job("text_to_image")
        ratio = AspectRatio(aspect_ratio)
        refined = await builders.generate_text_to_image_prompt(
            prompt, keywords, ratio, number_of_images, self.text_client,
            negative_prompt=negative_prompt,
        )
        final_negative = refined.negative_prompt or (negative_prompt or "").strip() or None

        try:
            images = await media.generate_images(
                self.settings.imagen_model, refined.positive_prompt,
                number_of_images=number_of_images,
                aspect_ratio=ratio.value,
                output_mime_type=self.settings.image_output_mime_type,
                negative_prompt=final_negative,
            )
        except Exception as exc:
            raise to_media_error(exc) from exc
        if not images:
            raise MediaGenerationError(
                "The model did not generate any images. Try a different prompt.",
                MediaFailureReason.NO_OUTPUT,
            )
        return images

    async def generate_from_image_and_prompt(
        self, prompt: str, reference_images: Sequence[ImageInput],
    ) -> list[str]:
        """Generate a new image guided by reference images. Returns one image."""
        media = self._media()
        _new_job("image_and_prompt")
        inline = [_as_inline(image) for image in reference_images]
        refined = await builders.generate_image_edit_prompt(prompt, self.text_client)
        images = await self._content_images(
            media, f"Using the provided reference image(s), {refined}", inline,
        )
        return images[:1]

    async def generate_with_style_inspiration(
        self,
        reference_image: ImageInput,
        new_prompt: str,
        strength: InspirationStrength | str,
    ) -> list[str]:
        """Render ``new_prompt`` in the style of the reference image."""
        media = self._media()
        _new_job("style_inspiration")
        image = _as_inline(reference_image)
        refined = await builders.generate_style_inspiration_prompt(
            new_prompt, strength, self.text_client,
        )
        images = await self._content_images(media, refined, [image])
        return images[:1]

    async def generate_inpainting(
        self, prompt: str, original_image: ImageInput, mask_image: ImageInput,
    ) -> list[str]:
        """Replace the white area of ``mask_image`` in ``original_image``."""
        media = self._media()
        _new_job("inpainting")
        refined = await builders.generate_inpainting_prompt(prompt, self.text_client)
        instruction = (
            "Task: Inpainting. Using the provided mask, replace the masked (white) area "
            f"of the original image with content described as: {refined}"
        )
        return await self._content_images(
            media, instruction, [_as_inline(original_image), _as_inline(mask_image)],
            prompt_first=True,
        )

    # --- Video ---

    async def generate_video(
        self,
        prompt: str,
        start_image: ImageInput,
        camera_movement: CameraMovement | str,
        aspect_ratio: AspectRatio | str = AspectRatio.WIDE,
    ) -> Any:
        """Start an image-to-video job; returns the operation handle.

        ``aspect_ratio`` is accepted for callers but not sent with a start
        image.
        """
        media = self._media()
        _new_job("video")
        movement = CameraMovement(camera_movement)
        logger.debug("Video requested with aspect ratio %s (not forwarded)", AspectRatio(aspect_ratio).value)
        refined = await builders.generate_video_prompt(
            f"{prompt}\n\nCamera instruction: {MOVEMENT_PROMPTS[movement]}",
            movement, self.text_client,
        )
        image = _as_inline(start_image)
        try:
            return await media.generate_videos(self.settings.video_model, refined, image)
        except Exception as exc:
            raise to_media_error(exc) from exc

    async def generate_video_transition(
        self,
        start_image: GeneratedImage,
        next_scene_script: str,
        story_context: str,
        style: ImageStyle | str,
    ) -> Any:
        """Start a job animating ``start_image`` into the next scene."""
        media = self._media()
        _new_job("video_transition")
        refined = await builders.generate_video_transition_prompt(
            next_scene_script, story_context, STYLE_PROMPTS[ImageStyle(style)],
            self.text_client,
        )
        image = _as_inline(start_image.src)
        try:
            return await media.generate_videos(self.settings.video_model, refined, image)
        except Exception as exc:
            raise to_media_error(exc) from exc

    async def get_videos_operation(self, operation: Any) -> Any:
        """Refresh a video operation once; callers poll at their own pace."""
        media = self._media()
        try:
            return await media.get_videos_operation(operation)
        except Exception as exc:
            raise to_media_error(exc) from exc

    # --- Internal ---

    async def _content_images(
        self,
        media: GeminiMediaClient,
        prompt: str,
        images: list[InlineImage],
        prompt_first: bool = False,
    ) -> list[str]:
        try:
            results = await media.generate_content_images(
                self.settings.image_edit_model, prompt, images, prompt_first=prompt_first,
            )
        except Exception as exc:
            raise to_media_error(exc) from exc
        if not results:
            raise MediaGenerationError(
                "The model did not generate any images. Try a different prompt or image.",
                MediaFailureReason.NO_OUTPUT,
            )
        return results


def _new_job(operation: str) -> str:
    job_id = uuid.uuid4().hex[:12]
    set_job_context(job_id)
    logger.info("Starting %s (job_id=%s)", operation, job_id)
    return job_id


async def _render_all(renders: Iterable[Awaitable[str]]) -> list[str]:
    """Run renders concurrently; on the first failure cancel the rest."""
    tasks = [asyncio.ensure_future(render) for render in renders]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        # retrieve sibling outcomes so none is left unobserved
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def _as_inline(source: ImageInput) -> InlineImage:
    """Decode an image input.

    Raises:
        MediaGenerationError: Undecodable base64 or unreadable file.
    """
    if isinstance(source, InlineImage):
        return source
    try:
        if isinstance(source, Path):
            return load_image_file(source)
        return decode_image_source(source)
    except (ValueError, OSError) as exc:
        raise to_media_error(exc) from exc


def _script_sentence(segment: StoryboardSegment) -> str:
    if segment.is_empty:
        return ""
    return (
        f"{segment.camera_movement} {segment.shot_type}: {segment.action_description} "
        f"The scene is filled with a {segment.emotional_tone} atmosphere."
    )
