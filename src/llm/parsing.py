# src/llm/parsing.py — v1
"""Parse and validate the structured payload of a completion."""

from __future__ import annotations

import json
from typing import Any, Callable

from panelforge.llm.content import strip_code_fences
from panelforge.llm.errors import EmptyContentError, FormatError

ShapeCheck = Callable[[Any], "str | None"]

PARSE_FAILURE = "failed to parse provider response as structured data"


def parse_and_validate(raw: str, context: str, check: ShapeCheck | None = None) -> Any:
    """Sanitize, parse and shape-check ``raw``.

    Args:
        raw: Flattened message content.
        context: What the caller asked for (e.g. "comic panel prompts");
            named in every error.
        check: Returns None when the value has the expected shape, else a
            description of the violation.

    Returns:
        The parsed JSON value. Never a partial result.

    Raises:
        EmptyContentError: Nothing left after sanitization.
        FormatError: Not JSON, or the shape check failed.
    """
    text = strip_code_fences(raw)
    if not text:
        raise EmptyContentError(context)

    try:
        value = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise FormatError(context, PARSE_FAILURE) from exc

    if check is not None:
        violation = check(value)
        if violation is not None:
            raise FormatError(context, violation)

    return value
