# src/__init__.py — v1
"""panelforge — prompt refinement and Gemini media generation for comics and cards."""

from panelforge.version import __version__

__all__ = ["__version__"]
