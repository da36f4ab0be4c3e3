# src/main.py — v1
"""CLI entry point — run the prompt builders from the shell.

Usage:
    panelforge comic-prompts "<story>" -n 4 [--style watercolor]
    panelforge wiki-cards "<topic>" [-n 4] [--style doodle]
    panelforge t2i-prompt "<prompt>" [-k keyword ...] [--negative ...]
    panelforge edit-prompt "<request>"
    panelforge video-prompt "<shot>" [--movement zoomIn]

Results are printed to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from panelforge.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        result = asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1

    _print_json(result)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    from panelforge.core.models import AspectRatio, CameraMovement, ImageStyle

    styles = [s.value for s in ImageStyle]

    parser = argparse.ArgumentParser(
        prog="panelforge",
        description=f"panelforge v{__version__} — prompt builders for comics, cards and video",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--env-file", default=".env",
        help="Path to the .env file (default: .env)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- comic-prompts ---
    p_comic = subparsers.add_parser(
        "comic-prompts", help="Split a story into comic panel prompts",
    )
    p_comic.add_argument("story", help="Story text")
    p_comic.add_argument(
        "-n", "--number", type=int, default=4,
        help="Number of panels (default: 4)",
    )
    p_comic.add_argument(
        "--style", choices=styles, default="illustration",
        help="Art style (default: illustration)",
    )
    p_comic.set_defaults(func=_cmd_comic_prompts)

    # --- wiki-cards ---
    p_wiki = subparsers.add_parser(
        "wiki-cards", help="Write prompts for illustrated explainer cards",
    )
    p_wiki.add_argument("topic", help="Topic to explain")
    p_wiki.add_argument(
        "-n", "--number", type=int, default=4,
        help="Number of cards (default: 4)",
    )
    p_wiki.add_argument(
        "--style", choices=styles, default="illustration",
        help="Art style (default: illustration)",
    )
    p_wiki.set_defaults(func=_cmd_wiki_cards)

    # --- t2i-prompt ---
    p_t2i = subparsers.add_parser(
        "t2i-prompt", help="Refine a text-to-image prompt",
    )
    p_t2i.add_argument("prompt", help="Base prompt")
    p_t2i.add_argument(
        "-k", "--keyword", action="append", default=[], dest="keywords",
        help="Style keyword (repeatable)",
    )
    p_t2i.add_argument("--negative", default=None, help="Negative prompt")
    p_t2i.add_argument(
        "--aspect-ratio", choices=[r.value for r in AspectRatio], default="16:9",
        help="Target aspect ratio (default: 16:9)",
    )
    p_t2i.add_argument(
        "-n", "--number", type=int, default=1,
        help="Number of images planned (default: 1)",
    )
    p_t2i.set_defaults(func=_cmd_t2i_prompt)

    # --- edit-prompt ---
    p_edit = subparsers.add_parser(
        "edit-prompt", help="Turn an edit request into an image-edit instruction",
    )
    p_edit.add_argument("request", help="Edit request")
    p_edit.set_defaults(func=_cmd_edit_prompt)

    # --- video-prompt ---
    p_video = subparsers.add_parser(
        "video-prompt", help="Write a cinematic image-to-video prompt",
    )
    p_video.add_argument("shot", help="Shot description")
    p_video.add_argument(
        "--movement", choices=[m.value for m in CameraMovement], default="subtle",
        help="Camera movement (default: subtle)",
    )
    p_video.set_defaults(func=_cmd_video_prompt)

    return parser


def _client(args: argparse.Namespace):
    from panelforge.llm.client_factory import create_completion_client

    return create_completion_client(env_file=args.env_file)


async def _cmd_comic_prompts(args: argparse.Namespace) -> list[str]:
    from panelforge.core.models import STYLE_PROMPTS, ImageStyle
    from panelforge.pipeline.builders import generate_comic_panel_prompts

    return await generate_comic_panel_prompts(
        args.story, STYLE_PROMPTS[ImageStyle(args.style)], args.number, _client(args),
    )


async def _cmd_wiki_cards(args: argparse.Namespace) -> list[str]:
    from panelforge.core.models import STYLE_PROMPTS, ImageStyle
    from panelforge.pipeline.builders import generate_wiki_card_prompts

    return await generate_wiki_card_prompts(
        args.topic, STYLE_PROMPTS[ImageStyle(args.style)], args.number, _client(args),
    )


async def _cmd_t2i_prompt(args: argparse.Namespace) -> dict[str, Any]:
    from panelforge.pipeline.builders import generate_text_to_image_prompt

    result = await generate_text_to_image_prompt(
        args.prompt, args.keywords, args.aspect_ratio, args.number, _client(args),
        negative_prompt=args.negative,
    )
    return result.model_dump()


async def _cmd_edit_prompt(args: argparse.Namespace) -> str:
    from panelforge.pipeline.builders import generate_image_edit_prompt

    return await generate_image_edit_prompt(args.request, _client(args))


async def _cmd_video_prompt(args: argparse.Namespace) -> str:
    from panelforge.pipeline.builders import generate_video_prompt

    return await generate_video_prompt(args.shot, args.movement, _client(args))


def _print_json(result: object) -> None:
    print(json.dumps(result, ensure_ascii=False, indent=2))


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from panelforge.logging.logger import setup_logging

    setup_logging(level="DEBUG" if verbose else "INFO", log_format="text")
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
