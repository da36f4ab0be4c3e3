# src/pipeline/prompt_task.py — v1
"""One prompt-completion pipeline, configured per task.

A ``PromptTask`` holds everything that differs between builders apart from
the per-call inputs: the system framing, the temperature, the name used in
error messages and whether array cardinality is enforced. Builders supply
the user instructions and the output shape, then narrow the validated
payload to their result type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from panelforge.llm.content import extract_message_content
from panelforge.llm.models import CompletionRequest, ContentPart, Message, TextPart
from panelforge.llm.parsing import parse_and_validate
from panelforge.logging.context import task_scope

if TYPE_CHECKING:
    from panelforge.llm.base_client import BaseCompletionClient
    from panelforge.llm.shapes import OutputShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptTask:
    """Static configuration of one builder."""

    name: str
    context: str  # human-readable result name, e.g. "comic panel prompts"
    system_prompt: str
    temperature: float
    enforce_count: bool = True

    def build_request(
        self, model: str, user_parts: list[ContentPart], shape: OutputShape,
    ) -> CompletionRequest:
        return CompletionRequest(
            model=model,
            temperature=self.temperature,
            response_format=shape.response_format(),
            messages=[
                Message(role="system", content=[TextPart(text=self.system_prompt)]),
                Message(role="user", content=user_parts),
            ],
        )


async def run_prompt_task(
    task: PromptTask,
    client: BaseCompletionClient,
    user_parts: list[ContentPart],
    shape: OutputShape,
) -> Any:
    """Invoke the model and return the validated JSON payload.

    Raises:
        ConfigurationError: Endpoint not configured.
        ProviderError: HTTP or transport failure.
        EmptyContentError: No text in the first choice.
        FormatError: Not JSON, or wrong shape (cardinality included unless
            the task opts out).
    """
    with task_scope(task.name):
        request = task.build_request(client.model, user_parts, shape)
        logger.info("Running prompt task %s (model=%s)", task.name, request.model)

        response = await client.invoke(request)
        raw = extract_message_content(response.first_content())

        check = shape.check if task.enforce_count else shape.check_structure
        return parse_and_validate(raw, task.context, check)
