"""Unit tests for the CHIP-8 video renderer."""

from __future__ import annotations

import pytest

from pychip8.video import FONT_SET, GLYPH_BYTES, Framebuffer, Renderer, glyph_address


def test_render_single_pixel() -> None:
    fb = Framebuffer()
    fb.toggle(0, 0)
    result = Renderer().render(fb)

    assert result.width == 64
    assert result.height == 32
    assert result.get_pixel(0, 0) == (255, 255, 255)
    assert result.get_pixel(1, 0) == (0, 0, 0)
    assert result.get_pixel(0, 1) == (0, 0, 0)


def test_render_scale_factor() -> None:
    fb = Framebuffer()
    fb.toggle(1, 0)
    result = Renderer().render(fb, scale=4)

    assert result.width == 256
    assert result.height == 128
    assert len(result.pixels) == 256 * 128 * 3
    assert result.get_pixel(3, 0) == (0, 0, 0)
    assert result.get_pixel(4, 0) == (255, 255, 255)
    assert result.get_pixel(7, 3) == (255, 255, 255)
    assert result.get_pixel(8, 0) == (0, 0, 0)
    assert result.get_pixel(4, 4) == (0, 0, 0)


def test_custom_palette() -> None:
    fb = Framebuffer()
    fb.toggle(10, 10)
    result = Renderer(((0x10, 0x20, 0x30), (0x40, 0x50, 0x60))).render(fb)

    assert result.get_pixel(10, 10) == (0x40, 0x50, 0x60)
    assert result.get_pixel(0, 0) == (0x10, 0x20, 0x30)


def test_invalid_palette_and_scale() -> None:
    with pytest.raises(ValueError):
        Renderer(((0, 0, 0),))

    with pytest.raises(ValueError):
        Renderer(((0, 0, 0), (0x100, 0, 0)))

    with pytest.raises(ValueError):
        Renderer().render(Framebuffer(), scale=0)


def test_font_glyphs() -> None:
    assert len(FONT_SET) == 16 * GLYPH_BYTES
    assert glyph_address(0x0) == 0x050
    assert glyph_address(0xF) == 0x050 + 15 * GLYPH_BYTES
    assert glyph_address(0x1A) == glyph_address(0xA)
