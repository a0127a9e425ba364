"""Video rendering helpers for the LS-8 console window."""

from __future__ import annotations

from .renderer import AMBER, GREEN, MONOCHROME, PALETTES, RenderResult, Renderer, validate_palette

__all__ = [
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "GREEN",
    "AMBER",
    "PALETTES",
    "validate_palette",
]
