# src/media/errors.py — v1
"""Translate generation-provider failures into user-facing errors."""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class MediaFailureReason(str, Enum):
    INVALID_API_KEY = "invalid_api_key"
    QUOTA_EXHAUSTED = "quota_exhausted"
    SAFETY_BLOCKED = "safety_blocked"
    INVALID_ARGUMENT = "invalid_argument"
    NO_OUTPUT = "no_output"
    FAILED = "failed"


_MESSAGES: dict[MediaFailureReason, str] = {
    MediaFailureReason.INVALID_API_KEY: (
        "The API key you provided is invalid or incorrect. Please check it and try again."
    ),
    MediaFailureReason.QUOTA_EXHAUSTED: (
        "Your API key quota is exhausted or the rate limit was reached. Check your "
        "Google AI Studio quota or try again later."
    ),
    MediaFailureReason.SAFETY_BLOCKED: (
        "The generated content may have violated the safety policy and was blocked. "
        "Try adjusting your prompt."
    ),
    MediaFailureReason.INVALID_ARGUMENT: (
        "Your input is invalid. Check your prompt or uploaded images and try again; "
        "this model may also require a paid API key."
    ),
    MediaFailureReason.FAILED: (
        "Generation failed. Please try again later or check your network connection."
    ),
}


class MediaGenerationError(Exception):
    """Image or video generation failed."""

    def __init__(self, message: str, reason: MediaFailureReason = MediaFailureReason.FAILED):
        self.message = message
        self.reason = reason
        super().__init__(message)

    @classmethod
    def for_reason(cls, reason: MediaFailureReason) -> MediaGenerationError:
        return cls(_MESSAGES[reason], reason)


def classify_failure(exc: BaseException) -> MediaFailureReason:
    """Map a provider exception to a failure reason by its message."""
    message = str(exc).lower()
    if "api key not valid" in message or "api_key_invalid" in message:
        return MediaFailureReason.INVALID_API_KEY
    if any(s in message for s in ("resource_exhausted", "rate limit", "quota")):
        return MediaFailureReason.QUOTA_EXHAUSTED
    if "safety" in message or "blocked" in message:
        return MediaFailureReason.SAFETY_BLOCKED
    if "invalid_argument" in message:
        return MediaFailureReason.INVALID_ARGUMENT
    return MediaFailureReason.FAILED


def to_media_error(exc: BaseException) -> MediaGenerationError:
    """Wrap ``exc`` for the caller. Our own errors pass through unchanged."""
    if isinstance(exc, MediaGenerationError):
        return exc
    logger.error("Error calling the generation provider: %s", exc)
    return MediaGenerationError.for_reason(classify_failure(exc))
