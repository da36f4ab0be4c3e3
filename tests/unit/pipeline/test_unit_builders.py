# tests/unit/pipeline/test_unit_builders.py — v1
"""Tests for pipeline/builders.py — the nine task-specific prompt builders."""

from __future__ import annotations

import pytest

from panelforge.core.models import (
    STRENGTH_DESCRIPTIONS,
    AspectRatio,
    CameraMovement,
    InspirationStrength,
    StoryboardSegment,
)
from panelforge.llm.errors import EmptyContentError, FormatError
from panelforge.llm.models import ImagePart, TextPart
from panelforge.pipeline import builders


def _sent_request(client):
    return client.invoke.await_args.args[0]


def _user_text(client) -> str:
    user = _sent_request(client).messages[1]
    return "\n".join(p.text for p in user.content if isinstance(p, TextPart))


def _segment(n: int) -> dict[str, str]:
    return {
        "cameraMovement": f"move {n}",
        "shotType": f"shot {n}",
        "actionDescription": f"action {n}",
        "emotionalTone": f"tone {n}",
    }


class TestComicPanelPrompts:
    @pytest.mark.asyncio
    async def test_returns_panels(self, make_client, json_response):
        client = make_client(json_response({"panels": ["p1", "p2"]}))
        panels = await builders.generate_comic_panel_prompts("A fox story", "flat style", 2, client)
        assert panels == ["p1", "p2"]

    @pytest.mark.asyncio
    async def test_request_configuration(self, make_client, json_response):
        client = make_client(json_response({"panels": ["p1", "p2", "p3"]}))
        await builders.generate_comic_panel_prompts("A fox story", "flat style", 3, client)
        request = _sent_request(client)
        assert request.temperature == 0.7
        schema = request.response_format["json_schema"]["schema"]
        assert schema["properties"]["panels"]["minItems"] == 3
        assert schema["properties"]["panels"]["maxItems"] == 3
        text = _user_text(client)
        assert "A fox story" in text
        assert "flat style" in text

    @pytest.mark.asyncio
    async def test_count_mismatch_fails(self, make_client, json_response):
        client = make_client(json_response({"panels": ["a", "b", "c"]}))
        with pytest.raises(FormatError, match="expected 2 items in 'panels', got 3"):
            await builders.generate_comic_panel_prompts("story", "style", 2, client)

    @pytest.mark.asyncio
    async def test_fenced_response(self, make_client, completion_response):
        client = make_client(completion_response('```json\n{"panels":["a","b"]}\n```'))
        assert await builders.generate_comic_panel_prompts("s", "st", 2, client) == ["a", "b"]


class TestVideoStoryboard:
    @pytest.mark.asyncio
    async def test_no_images_skips_model(self, make_client):
        client = make_client()
        assert await builders.generate_video_storyboard("story", [], client) == []
        client.invoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_one_segment_per_image(self, make_client, json_response, sample_images):
        client = make_client(json_response({"segments": [_segment(1), _segment(2)]}))
        segments = await builders.generate_video_storyboard("story", sample_images, client)
        assert [s.camera_movement for s in segments] == ["move 1", "move 2"]
        assert segments[1].emotional_tone == "tone 2"

    @pytest.mark.asyncio
    async def test_images_attached_in_order(self, make_client, json_response, sample_images):
        client = make_client(json_response({"segments": [_segment(1), _segment(2)]}))
        await builders.generate_video_storyboard("story", sample_images, client)
        request = _sent_request(client)
        image_parts = [p for p in request.messages[1].content if isinstance(p, ImagePart)]
        assert [p.image_url.url for p in image_parts] == [img.src for img in sample_images]
        assert request.temperature == 0.6

    @pytest.mark.asyncio
    async def test_pads_missing_segments(self, make_client, json_response, sample_images):
        client = make_client(json_response({"segments": [_segment(1)]}))
        segments = await builders.generate_video_storyboard("story", sample_images, client)
        assert len(segments) == 2
        assert segments[0].action_description == "action 1"
        assert segments[1] == StoryboardSegment()
        assert segments[1].is_empty

    @pytest.mark.asyncio
    async def test_truncates_extra_segments(self, make_client, json_response, sample_images):
        client = make_client(json_response({"segments": [_segment(1), _segment(2), _segment(3)]}))
        segments = await builders.generate_video_storyboard("story", sample_images, client)
        assert [s.shot_type for s in segments] == ["shot 1", "shot 2"]

    @pytest.mark.asyncio
    async def test_malformed_segment_fails(self, make_client, json_response, sample_images):
        client = make_client(json_response({"segments": [{"cameraMovement": "pan"}]}))
        with pytest.raises(FormatError, match="video storyboard"):
            await builders.generate_video_storyboard("story", sample_images, client)


class TestWikiCardPrompts:
    @pytest.mark.asyncio
    async def test_returns_cards(self, make_client, json_response):
        cards = [f"card {i}" for i in range(4)]
        client = make_client(json_response({"cards": cards}))
        assert await builders.generate_wiki_card_prompts("Photosynthesis", "doodle", 4, client) == cards
        assert "Photosynthesis" in _user_text(client)

    @pytest.mark.asyncio
    async def test_too_few_cards(self, make_client, json_response):
        client = make_client(json_response({"cards": ["only one"]}))
        with pytest.raises(FormatError):
            await builders.generate_wiki_card_prompts("topic", "style", 4, client)


class TestTextToImagePrompt:
    @pytest.mark.asyncio
    async def test_positive_and_negative(self, make_client, json_response):
        client = make_client(json_response({"positivePrompt": "  a red fox  ", "negativePrompt": " blur "}))
        result = await builders.generate_text_to_image_prompt(
            "fox", ["cinematic", "golden hour"], AspectRatio.WIDE, 2, client, negative_prompt="text",
        )
        assert result.positive_prompt == "a red fox"
        assert result.negative_prompt == "blur"
        text = _user_text(client)
        assert "cinematic, golden hour" in text
        assert "16:9" in text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("negative", [None, "", "   ", 7])
    async def test_missing_negative_is_none(self, make_client, json_response, negative):
        payload = {"positivePrompt": "fox"}
        if negative is not None:
            payload["negativePrompt"] = negative
        client = make_client(json_response(payload))
        result = await builders.generate_text_to_image_prompt("fox", [], "1:1", 1, client)
        assert result.negative_prompt is None

    @pytest.mark.asyncio
    async def test_empty_inputs_are_described(self, make_client, json_response):
        client = make_client(json_response({"positivePrompt": "x"}))
        await builders.generate_text_to_image_prompt("", [], "1:1", 1, client)
        text = _user_text(client)
        assert "(empty)" in text
        assert "**Selected keywords:** none" in text

    @pytest.mark.asyncio
    async def test_blank_positive_fails(self, make_client, json_response):
        client = make_client(json_response({"positivePrompt": "  "}))
        with pytest.raises(FormatError, match="positivePrompt"):
            await builders.generate_text_to_image_prompt("fox", [], "1:1", 1, client)


class TestSinglePromptBuilders:
    @pytest.mark.asyncio
    async def test_image_edit_prompt_trimmed(self, make_client, json_response):
        client = make_client(json_response({"prompt": "  Add a hat.  "}))
        assert await builders.generate_image_edit_prompt("give him a hat", client) == "Add a hat."
        assert _sent_request(client).temperature == 0.6

    @pytest.mark.asyncio
    async def test_style_inspiration_uses_strength_description(self, make_client, json_response):
        client = make_client(json_response({"prompt": "styled"}))
        result = await builders.generate_style_inspiration_prompt("a castle", "veryHigh", client)
        assert result == "styled"
        assert STRENGTH_DESCRIPTIONS[InspirationStrength.VERY_HIGH] in _user_text(client)

    @pytest.mark.asyncio
    async def test_inpainting_prompt(self, make_client, json_response):
        client = make_client(json_response({"prompt": "a blue sky"}))
        assert await builders.generate_inpainting_prompt("sky", client) == "a blue sky"

    @pytest.mark.asyncio
    async def test_video_prompt_mentions_movement(self, make_client, json_response):
        client = make_client(json_response({"prompt": "slow push in"}))
        result = await builders.generate_video_prompt("a fox", CameraMovement.ZOOM_IN, client)
        assert result == "slow push in"
        assert "zoomIn" in _user_text(client)
        assert _sent_request(client).temperature == 0.5

    @pytest.mark.asyncio
    async def test_video_transition_prompt(self, make_client, json_response):
        client = make_client(json_response({"prompt": "bridge"}))
        result = await builders.generate_video_transition_prompt("next", "whole story", "ink", client)
        assert result == "bridge"
        text = _user_text(client)
        assert "next" in text and "whole story" in text and "ink" in text

    @pytest.mark.asyncio
    async def test_missing_prompt_field(self, make_client, json_response):
        client = make_client(json_response({"text": "wrong key"}))
        with pytest.raises(FormatError, match="video prompt"):
            await builders.generate_video_prompt("a fox", "subtle", client)

    @pytest.mark.asyncio
    async def test_empty_response(self, make_client, completion_response):
        client = make_client(completion_response("   "))
        with pytest.raises(EmptyContentError, match="inpainting prompt"):
            await builders.generate_inpainting_prompt("sky", client)

    @pytest.mark.asyncio
    async def test_invalid_camera_movement(self, make_client):
        with pytest.raises(ValueError):
            await builders.generate_video_prompt("a fox", "spin", make_client())
