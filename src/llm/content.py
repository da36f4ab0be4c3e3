# src/llm/content.py — v1
"""Normalization of completion text before parsing.

``extract_message_content`` flattens string-or-parts message content into
one string; ``strip_code_fences`` removes Markdown fences that models add
around JSON even when asked not to.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from panelforge.llm.models import ImagePart, TextPart

_TEXT_PART_TYPES = frozenset({"text", "input_text"})
_FENCE = "```"


def extract_message_content(content: str | Sequence[Any] | None) -> str:
    """Flatten message content into a single trimmed string.

    Parts may be typed models or raw mappings straight from the response
    JSON. Only "text" / "input_text" parts contribute; image parts and
    unknown tags are skipped.
    """
    if not content:
        return ""
    if isinstance(content, str):
        return content.strip()

    pieces: list[str] = []
    for part in content:
        if isinstance(part, TextPart):
            pieces.append(part.text)
        elif isinstance(part, ImagePart):
            continue
        elif isinstance(part, Mapping) and part.get("type") in _TEXT_PART_TYPES:
            text = part.get("text")
            if isinstance(text, str):
                pieces.append(text)
    return "".join(pieces).strip()


def strip_code_fences(raw: str | None) -> str:
    """Return the payload of a ```-fenced block, or the trimmed input.

    A missing closing fence (truncated output) keeps everything after the
    opening line.
    """
    text = (raw or "").strip()
    if not text:
        return ""
    if not text.startswith(_FENCE):
        return text

    lines = text.split("\n")
    for index in range(1, len(lines)):
        if lines[index].strip() == _FENCE:
            return "\n".join(lines[1:index]).strip()
    return "\n".join(lines[1:]).strip()
