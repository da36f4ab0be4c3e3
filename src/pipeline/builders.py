# src/pipeline/builders.py — v1
"""Task-specific prompt builders.

Each builder turns raw user input into finished prompt text for the media
layer by running its PromptTask through the shared pipeline. All of them
hard-fail on a cardinality mismatch except the video storyboard, which
pads or truncates to the number of images instead.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from panelforge.core.models import (
    STRENGTH_DESCRIPTIONS,
    AspectRatio,
    CameraMovement,
    GeneratedImage,
    InspirationStrength,
    StoryboardSegment,
    TextToImagePrompt,
)
from panelforge.llm.models import ContentPart, ImagePart, TextPart
from panelforge.llm.shapes import ObjectArrayShape, PromptObjectShape, StringArrayShape
from panelforge.pipeline.prompt_task import PromptTask, run_prompt_task

if TYPE_CHECKING:
    from panelforge.llm.base_client import BaseCompletionClient

logger = logging.getLogger(__name__)

STORYBOARD_FIELDS = ("cameraMovement", "shotType", "actionDescription", "emotionalTone")


def _text(*lines: str) -> list[ContentPart]:
    return [TextPart(text=line) for line in lines]


# --- Task table ---

COMIC_PANELS = PromptTask(
    name="comic_panel_prompts",
    context="comic panel prompts",
    system_prompt=(
        "You are a master story book prompter that breaks a story into detailed, "
        "visually rich prompts for image generation."
    ),
    temperature=0.7,
)
VIDEO_STORYBOARD = PromptTask(
    name="video_storyboard_segments",
    context="video storyboard",
    system_prompt=(
        "You are an award-winning film director who creates vivid storyboard "
        "instructions for animators."
    ),
    temperature=0.6,
    enforce_count=False,
)
WIKI_CARDS = PromptTask(
    name="illustrated_wiki_cards",
    context="illustrated wiki card prompts",
    system_prompt=(
        "You are an instructional designer who writes concise, vivid prompts for "
        "educational infographic images."
    ),
    temperature=0.6,
)
TEXT_TO_IMAGE = PromptTask(
    name="text_to_image_prompt",
    context="text-to-image prompt",
    system_prompt=(
        "You are a professional image prompt engineer who optimises user ideas into "
        "rich, structured prompts for high-end diffusion models."
    ),
    temperature=0.5,
)
IMAGE_EDIT = PromptTask(
    name="image_edit_prompt",
    context="image edit prompt",
    system_prompt=(
        "You translate user editing requests into precise instructions for "
        "generative image models."
    ),
    temperature=0.6,
)
STYLE_INSPIRATION = PromptTask(
    name="style_inspiration_prompt",
    context="style inspiration prompt",
    system_prompt=(
        "You craft prompts that transfer the artistic style of a reference image "
        "onto a new subject."
    ),
    temperature=0.6,
)
INPAINTING = PromptTask(
    name="inpainting_prompt",
    context="inpainting prompt",
    system_prompt="You describe precise replacement content for masked regions in images.",
    temperature=0.6,
)
VIDEO = PromptTask(
    name="video_prompt",
    context="video prompt",
    system_prompt="You create cinematic prompts for short AI-generated videos.",
    temperature=0.5,
)
VIDEO_TRANSITION = PromptTask(
    name="video_transition_prompt",
    context="video transition prompt",
    system_prompt=(
        "You design cinematic transition prompts that bridge two scenes seamlessly."
    ),
    temperature=0.5,
)


# --- Array builders ---

async def generate_comic_panel_prompts(
    story: str,
    style_prompt: str,
    number_of_images: int,
    client: BaseCompletionClient,
) -> list[str]:
    """Split a story into ``number_of_images`` image-generation prompts."""
    shape = StringArrayShape(
        name=COMIC_PANELS.name,
        field="panels",
        count=number_of_images,
        item_description="Detailed visual prompt for a single comic panel",
    )
    parts = _text(
        f"**Task:** Break the story below into {number_of_images} coherent scenes "
        "to be illustrated as a comic strip.",
        f"**Story:**\n{story}",
        f"**Style:** {style_prompt}",
        "**Output requirements:**\n"
        f"1. Produce exactly {number_of_images} descriptions.\n"
        "2. Each description must be a prompt usable directly for image generation, "
        "covering characters, action, setting and mood.\n"
        "3. Write in one language throughout.\n"
        "4. Keep characters and settings consistent across all panels.\n"
        '5. Return a JSON object with a "panels" field holding an array of the '
        "panel prompts.",
    )
    payload = await run_prompt_task(COMIC_PANELS, client, parts, shape)
    return payload["panels"]


async def generate_video_storyboard(
    story: str,
    images: Sequence[GeneratedImage],
    client: BaseCompletionClient,
) -> list[StoryboardSegment]:
    """One shot description per image, always exactly ``len(images)`` long.

    A segment count that differs from the image count is logged and the
    list is truncated or padded with empty segments.
    """
    if not images:
        return []

    expected = len(images)
    shape = ObjectArrayShape(
        name=VIDEO_STORYBOARD.name,
        field="segments",
        count=expected,
        item_fields=STORYBOARD_FIELDS,
    )
    parts: list[ContentPart] = _text(
        f"**Story:** {story}",
        "**Task:** For each comic image provided, write a detailed shot script "
        "covering camera movement, shot type, core action and emotion. The number of "
        f"entries must match the number of images ({expected}).",
        '**Output format:** Return a JSON object with a "segments" field holding an '
        "array; every element has the fields cameraMovement, shotType, "
        "actionDescription and emotionalTone.",
    )
    parts.extend(ImagePart.from_url(image.src) for image in images)

    payload = await run_prompt_task(VIDEO_STORYBOARD, client, parts, shape)
    segments = [StoryboardSegment.model_validate(item) for item in payload["segments"]]

    if len(segments) != expected:
        logger.warning(
            "Storyboard returned %d segments for %d images; truncating or padding",
            len(segments), expected,
        )
        segments = segments[:expected]
        segments.extend(StoryboardSegment() for _ in range(expected - len(segments)))
    return segments


async def generate_wiki_card_prompts(
    topic: str,
    style_prompt: str,
    number_of_cards: int,
    client: BaseCompletionClient,
) -> list[str]:
    """Prompts for ``number_of_cards`` 16:9 educational illustration cards."""
    shape = StringArrayShape(
        name=WIKI_CARDS.name,
        field="cards",
        count=number_of_cards,
        item_description="A detailed 16:9 educational illustration prompt",
    )
    parts = _text(
        f'**Task:** Write {number_of_cards} prompts for illustrated explainer cards '
        f'about the topic "{topic}".',
        f"**Style:** {style_prompt}",
        "**Frame constraints:** Every prompt must specify a 16:9 frame, fit in a single "
        "image, and include legible English text labels and key explanation points.",
        '**Output format:** Return a JSON object with a "cards" field holding the full '
        "prompt for each card.",
    )
    payload = await run_prompt_task(WIKI_CARDS, client, parts, shape)
    return payload["cards"]


# --- Single-prompt builders ---

async def generate_text_to_image_prompt(
    base_prompt: str,
    selected_keywords: Sequence[str],
    aspect_ratio: AspectRatio | str,
    number_of_images: int,
    client: BaseCompletionClient,
    negative_prompt: str | None = None,
) -> TextToImagePrompt:
    """Merge a prompt, keywords and constraints into a positive/negative pair."""
    keywords_text = ", ".join(selected_keywords) if selected_keywords else "none"
    ratio = aspect_ratio.value if isinstance(aspect_ratio, AspectRatio) else aspect_ratio
    negative_text = negative_prompt if negative_prompt and negative_prompt.strip() else "none"

    shape = PromptObjectShape(
        name=TEXT_TO_IMAGE.name,
        field="positivePrompt",
        optional_field="negativePrompt",
        description="The final detailed prompt for generating an image",
        optional_description="Optional negative prompt to avoid unwanted elements",
    )
    parts = _text(
        f"**User prompt:** {base_prompt or '(empty)'}",
        f"**Selected keywords:** {keywords_text}",
        f"**Target aspect ratio:** {ratio}, **images requested:** {number_of_images}.",
        f"**Negative prompt:** {negative_text}",
        "Combine the information above into one highly specific, well-structured English "
        "prompt suitable for Imagen, adding sensible composition, lighting and lens "
        "details where useful. Produce an improved negative prompt if needed.",
    )
    payload = await run_prompt_task(TEXT_TO_IMAGE, client, parts, shape)

    refined_negative = payload.get("negativePrompt")
    if isinstance(refined_negative, str) and refined_negative.strip():
        refined_negative = refined_negative.strip()
    else:
        refined_negative = None
    return TextToImagePrompt(
        positive_prompt=payload["positivePrompt"].strip(),
        negative_prompt=refined_negative,
    )


async def _single_prompt(
    task: PromptTask, client: BaseCompletionClient, parts: list[ContentPart],
) -> str:
    payload = await run_prompt_task(task, client, parts, PromptObjectShape(name=task.name))
    return payload["prompt"].strip()


async def generate_image_edit_prompt(prompt: str, client: BaseCompletionClient) -> str:
    """English instruction for a Gemini image edit."""
    return await _single_prompt(IMAGE_EDIT, client, _text(
        f"Write an English prompt for a Gemini image edit based on this request:\n{prompt}",
        "Name the subject, the elements to change or add, and the lighting and mood. "
        "Avoid vague wording.",
    ))


async def generate_style_inspiration_prompt(
    new_prompt: str,
    strength: InspirationStrength | str,
    client: BaseCompletionClient,
) -> str:
    """Prompt that carries a reference image's style onto a new subject."""
    return await _single_prompt(STYLE_INSPIRATION, client, _text(
        f"**New subject:** {new_prompt}",
        f"**Style borrowing strength:** {STRENGTH_DESCRIPTIONS[InspirationStrength(strength)]}",
        "Write one English prompt that keeps the reference image's colours, lighting, "
        "materials and atmosphere while putting the new subject first.",
    ))


async def generate_inpainting_prompt(prompt: str, client: BaseCompletionClient) -> str:
    """Replacement description for a masked image region."""
    return await _single_prompt(INPAINTING, client, _text(
        f"Write an English prompt describing what should replace the masked area:\n{prompt}",
        "Cover subject, detail, lighting and style so the result blends naturally with "
        "the original image.",
    ))


async def generate_video_prompt(
    prompt: str,
    camera_movement: CameraMovement | str,
    client: BaseCompletionClient,
) -> str:
    """Cinematic prompt for an image-to-video clip."""
    movement = CameraMovement(camera_movement).value
    return await _single_prompt(VIDEO, client, _text(
        f"**Shot description:** {prompt}",
        f"**Camera movement:** {movement}",
        "Write one English prompt covering scene, subject, action, lighting and pacing, "
        "and work the requested camera movement into it.",
    ))


async def generate_video_transition_prompt(
    next_scene_script: str,
    story_context: str,
    style_prompt: str,
    client: BaseCompletionClient,
) -> str:
    """Prompt for a short clip bridging the current still to the next scene."""
    return await _single_prompt(VIDEO_TRANSITION, client, _text(
        f"**Story:** {story_context}",
        f"**Next scene:** {next_scene_script}",
        f"**Art style constraints:** {style_prompt}",
        "Write one English prompt describing a short clip that moves smoothly from the "
        "current still frame into the next scene, stressing atmosphere, lighting and "
        "camera language.",
    ))
