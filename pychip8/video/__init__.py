"""Video helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .display import SCREEN_HEIGHT, SCREEN_WIDTH, Display
from .font import FONT_SET, FONT_START, GLYPH_BYTES, glyph_address
from .renderer import AMBER, MONOCHROME, RenderResult, Renderer, RGBColor, validate_palette

__all__ = [
    "Display",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "FONT_SET",
    "FONT_START",
    "GLYPH_BYTES",
    "glyph_address",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "AMBER",
    "validate_palette",
    "RGBColor",
]
