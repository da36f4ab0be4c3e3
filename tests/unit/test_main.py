# tests/unit/test_main.py — v1
"""Tests for main.py — CLI entry point."""

from __future__ import annotations

import json
import logging
from unittest.mock import AsyncMock, patch

import pytest

from panelforge.core.models import TextToImagePrompt
from panelforge.logging.logger import ROOT_LOGGER
from panelforge.main import _build_parser, main


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger(ROOT_LOGGER)
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ---------------------------------------------------------------------------
# Parser tests
# ---------------------------------------------------------------------------

class TestBuildParser:
    def test_version_flag(self, capsys):
        parser = _build_parser()
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "panelforge" in capsys.readouterr().out

    def test_comic_prompts(self):
        args = _build_parser().parse_args(["comic-prompts", "a story", "-n", "3", "--style", "clay"])
        assert args.command == "comic-prompts"
        assert args.story == "a story"
        assert args.number == 3
        assert args.style == "clay"

    def test_t2i_keywords_repeatable(self):
        args = _build_parser().parse_args(
            ["t2i-prompt", "fox", "-k", "cinematic", "-k", "moody", "--aspect-ratio", "9:16"],
        )
        assert args.keywords == ["cinematic", "moody"]
        assert args.aspect_ratio == "9:16"
        assert args.negative is None

    def test_invalid_style_rejected(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["wiki-cards", "topic", "--style", "pixel"])

    def test_video_prompt_default_movement(self):
        args = _build_parser().parse_args(["video-prompt", "a shot"])
        assert args.movement == "subtle"

    def test_env_file_option(self):
        args = _build_parser().parse_args(["--env-file", "prod.env", "edit-prompt", "x"])
        assert args.env_file == "prod.env"


# ---------------------------------------------------------------------------
# main() tests
# ---------------------------------------------------------------------------

class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_comic_prompts_prints_json(self, capsys):
        with patch("panelforge.main._client") as client_factory, patch(
            "panelforge.pipeline.builders.generate_comic_panel_prompts",
            new=AsyncMock(return_value=["p1", "p2"]),
        ) as builder:
            code = main(["comic-prompts", "story", "-n", "2"])
        assert code == 0
        assert json.loads(capsys.readouterr().out) == ["p1", "p2"]
        args = builder.await_args.args
        assert args[0] == "story"
        assert args[2] == 2
        assert args[3] is client_factory.return_value

    def test_t2i_prompt_prints_object(self, capsys):
        result = TextToImagePrompt(positive_prompt="fox", negative_prompt=None)
        with patch("panelforge.main._client"), patch(
            "panelforge.pipeline.builders.generate_text_to_image_prompt",
            new=AsyncMock(return_value=result),
        ):
            assert main(["t2i-prompt", "fox"]) == 0
        assert json.loads(capsys.readouterr().out) == {"positive_prompt": "fox", "negative_prompt": None}

    def test_missing_configuration_exits_1(self, tmp_path, monkeypatch, capsys):
        for name in (
            "OPENAI_COMPATIBLE_BASE_URL", "VITE_OPENAI_COMPATIBLE_BASE_URL", "OPENAI_BASE_URL",
        ):
            monkeypatch.delenv(name, raising=False)
        code = main(["--env-file", str(tmp_path / "none.env"), "edit-prompt", "add a hat"])
        assert code == 1
        assert capsys.readouterr().out == ""

    def test_keyboard_interrupt(self):
        with patch("panelforge.main._client"), patch(
            "panelforge.pipeline.builders.generate_image_edit_prompt",
            new=AsyncMock(side_effect=KeyboardInterrupt),
        ):
            assert main(["edit-prompt", "x"]) == 130
