# src/media/__init__.py — v1
