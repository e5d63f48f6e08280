"""Video helpers for the CHIP-8 Python port."""

from __future__ import annotations

from .font import FONT_SET, FONT_START, GLYPH_BYTES, glyph_address
from .framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH, Framebuffer
from .renderer import MONOCHROME, RenderResult, Renderer, validate_palette

__all__ = [
    "Framebuffer",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "validate_palette",
    "FONT_SET",
    "FONT_START",
    "GLYPH_BYTES",
    "glyph_address",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
