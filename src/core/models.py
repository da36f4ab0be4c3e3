# src/core/models.py — v1
"""Shared domain types: styles, media options, and prompt-task results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ImageStyle(str, Enum):
    """Visual styles offered for comics and wiki cards."""

    ILLUSTRATION = "illustration"
    CLAY = "clay"
    DOODLE = "doodle"
    CARTOON = "cartoon"
    INK_WASH = "ink_wash"
    AMERICAN_COMIC = "american_comic"
    WATERCOLOR = "watercolor"
    PHOTOREALISTIC = "photorealistic"
    JAPANESE_MANGA = "japanese_manga"
    THREE_D_ANIMATION = "3d_animation"


STYLE_PROMPTS: dict[ImageStyle, str] = {
    ImageStyle.ILLUSTRATION: (
        "A modern flat illustration style. Use simple shapes, bold colors, and clean lines. "
        "Avoid gradients and complex textures. The characters and objects should be stylized "
        "and minimalist. Maintain consistency in this flat illustration style."
    ),
    ImageStyle.CLAY: (
        "A charming and tactile claymation style. All objects and characters should appear as "
        "if they are sculpted from modeling clay, with visible textures like fingerprints and "
        "tool marks. Use a vibrant, saturated color palette and soft, dimensional lighting to "
        "enhance the handmade feel. Maintain consistency in this claymation style."
    ),
    ImageStyle.DOODLE: (
        "A playful and charming hand-drawn doodle style. Use thick, colorful pencil-like "
        "strokes, whimsical characters, and a scrapbook-like feel. The overall mood should be "
        "friendly and approachable. Maintain consistency in this doodle style."
    ),
    ImageStyle.CARTOON: (
        "A super cute and adorable 'kawaii' cartoon style. Characters should have large, "
        "expressive eyes, rounded bodies, and simple features. Use a soft, pastel color palette "
        "with clean, bold outlines. The overall mood should be sweet, charming, and "
        "heartwarming, like illustrations for a children's storybook. Maintain consistency in "
        "this cute cartoon style."
    ),
    ImageStyle.INK_WASH: (
        "A rich and expressive Chinese ink wash painting style (Shui-mo hua). Use varied "
        "brushstrokes, from delicate lines to broad washes. Emphasize atmosphere, negative "
        "space, and the flow of 'qi'. The palette should be primarily monochrome with "
        "occasional subtle color accents. Maintain consistency in this ink wash style."
    ),
    ImageStyle.AMERICAN_COMIC: (
        "A classic American comic book style. Use bold, dynamic outlines, dramatic shading with "
        "techniques like cross-hatching and ink spotting. The colors should be vibrant but with "
        "a slightly gritty, printed texture. Focus on heroic poses, action, and expressive "
        "faces. Maintain consistency in this American comic style."
    ),
    ImageStyle.WATERCOLOR: (
        "A delicate and translucent watercolor painting style. Use soft, blended washes of "
        "color with visible paper texture. The edges should be soft and sometimes bleed into "
        "each other. The overall mood should be light, airy, and artistic. Maintain consistency "
        "in this watercolor style."
    ),
    ImageStyle.PHOTOREALISTIC: (
        "A photorealistic style. Emphasize realistic lighting, textures, and details to make the "
        "image look like a high-resolution photograph. Use natural color grading and depth of "
        "field. Maintain consistency in this photorealistic style."
    ),
    ImageStyle.JAPANESE_MANGA: (
        "A classic black-and-white Japanese manga style. Use sharp, clean lines, screentones for "
        "shading, and expressive characters with large eyes. Focus on dynamic action lines and "
        "paneling aesthetics. Maintain consistency in this manga style."
    ),
    ImageStyle.THREE_D_ANIMATION: (
        "A vibrant and polished 3D animation style, similar to modern animated feature films. "
        "Characters and objects should have smooth, rounded surfaces, and the scene should "
        "feature dynamic lighting, shadows, and a sense of depth. The overall mood should be "
        "charming and visually rich. Maintain consistency in this 3D animation style."
    ),
}


class ImageModel(str, Enum):
    NANO_BANANA = "gemini-2.5-flash-image-preview"
    IMAGEN = "imagen-4.0-generate-001"


class AspectRatio(str, Enum):
    SQUARE = "1:1"
    PORTRAIT = "3:4"
    LANDSCAPE = "4:3"
    TALL = "9:16"
    WIDE = "16:9"


class CameraMovement(str, Enum):
    SUBTLE = "subtle"
    ZOOM_IN = "zoomIn"
    ZOOM_OUT = "zoomOut"


MOVEMENT_PROMPTS: dict[CameraMovement, str] = {
    CameraMovement.SUBTLE: "Subtle, ambient motion in the scene. ",
    CameraMovement.ZOOM_IN: "The camera slowly zooms in on the central subject. ",
    CameraMovement.ZOOM_OUT: "The camera slowly zooms out, revealing more of the scene. ",
}


class InspirationStrength(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "veryHigh"


STRENGTH_DESCRIPTIONS: dict[InspirationStrength, str] = {
    InspirationStrength.LOW: (
        "Borrow the style lightly; keep the new subject's own character first."
    ),
    InspirationStrength.MEDIUM: (
        "Borrow the style clearly, balancing the new subject with the reference mood."
    ),
    InspirationStrength.HIGH: (
        "Follow the reference style strictly and only swap in the new subject."
    ),
    InspirationStrength.VERY_HIGH: (
        "Replicate the reference image's overall style and texture as closely as possible."
    ),
}


class GeneratedImage(BaseModel):
    """An image already produced by the media layer."""

    src: str  # data URI
    prompt: str = ""


class StoryboardSegment(BaseModel):
    """Shot instructions for animating one comic panel."""

    model_config = ConfigDict(populate_by_name=True)

    camera_movement: str = Field("", alias="cameraMovement")
    shot_type: str = Field("", alias="shotType")
    action_description: str = Field("", alias="actionDescription")
    emotional_tone: str = Field("", alias="emotionalTone")

    @property
    def is_empty(self) -> bool:
        return not any(
            (self.camera_movement, self.shot_type, self.action_description, self.emotional_tone)
        )


class TextToImagePrompt(BaseModel):
    """Refined text-to-image prompt pair."""

    positive_prompt: str
    negative_prompt: str | None = None
