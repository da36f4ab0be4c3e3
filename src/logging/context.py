# src/logging/context.py — v1
"""Contextual logging support — attach job_id and the running prompt task to log records."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging — set per job / per builder call.
_job_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "job_id", default=None
)
_task: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "task", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    job_id: str | None = None
    task: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(job_id=_job_id.get(), task=_task.get())


def set_job_context(job_id: str) -> None:
    """Set job-level context (one facade operation, e.g. a comic strip)."""
    _job_id.set(job_id)


def set_task_context(task: str | None) -> None:
    """Set the prompt task currently running."""
    _task.set(task)


@contextmanager
def task_scope(task: str) -> Iterator[None]:
    """Set the task for the duration of a block, restoring the previous one."""
    token = _task.set(task)
    try:
        yield
    finally:
        _task.reset(token)


def clear_context() -> None:
    """Reset all context variables."""
    _job_id.set(None)
    _task.set(None)
