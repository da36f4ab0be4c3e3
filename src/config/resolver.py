# src/config/resolver.py — v1
"""Alias-aware lookup of configuration values.

A value may live in the project's ``.env`` file (injected at build/deploy
time) or in the process environment, and each setting accepts several
variable names. ``resolve`` walks the candidate names in order and returns
the first non-empty trimmed value it finds.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from pathlib import Path

from dotenv import dotenv_values

EnvSource = Mapping[str, "str | None"]


def dotenv_source(env_file: str | Path = ".env") -> dict[str, str]:
    """Read a .env file into a plain mapping. Missing file = empty mapping."""
    path = Path(env_file)
    if not path.is_file():
        return {}
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


def default_sources(env_file: str | Path = ".env") -> list[EnvSource]:
    """The two standard sources: .env file first, then the process env."""
    return [dotenv_source(env_file), os.environ]


def resolve(
    candidate_keys: Sequence[str],
    sources: Sequence[EnvSource] | None = None,
) -> str | None:
    """Return the first non-empty value for any of ``candidate_keys``.

    Args:
        candidate_keys: Variable names, most preferred first.
        sources: Mappings to search for each key. Defaults to
            ``default_sources()``.

    Returns:
        The trimmed value, or None when no source holds a non-empty value.
    """
    if sources is None:
        sources = default_sources()

    for key in candidate_keys:
        for source in sources:
            value = source.get(key)
            if value is None:
                continue
            value = value.strip()
            if value:
                return value
    return None
