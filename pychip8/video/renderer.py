"""Convert the CHIP-8 framebuffer into RGB pixels for presentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .framebuffer import Framebuffer

RGBColor = Tuple[int, int, int]

# Background first, then the colour of lit pixels.
MONOCHROME: Tuple[RGBColor, RGBColor] = ((0x00, 0x00, 0x00), (0xFF, 0xFF, 0xFF))


def validate_palette(palette: Sequence[RGBColor]) -> Tuple[RGBColor, RGBColor]:
    if len(palette) != 2:
        raise ValueError("palette needs a background and a foreground colour")
    colours = []
    for colour in palette:
        if len(colour) != 3 or any(not 0 <= int(channel) <= 0xFF for channel in colour):
            raise ValueError(f"invalid RGB colour: {colour!r}")
        colours.append(tuple(int(channel) for channel in colour))
    return colours[0], colours[1]  # type: ignore[return-value]


@dataclass
class RenderResult:
    """RGB24 image produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytearray

    def get_pixel(self, x: int, y: int) -> RGBColor:
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(bytes(self.pixels), (self.width, self.height), "RGB")


class Renderer:
    """Scale framebuffer pixels by an integer factor using a two-colour palette."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        self._background, self._foreground = validate_palette(palette)

    def render(self, framebuffer: Framebuffer, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")

        width = framebuffer.width * scale
        height = framebuffer.height * scale
        background = bytes(self._background)
        foreground = bytes(self._foreground)
        source = framebuffer.snapshot()
        pixels = bytearray()

        for row in range(framebuffer.height):
            start = row * framebuffer.width
            line = bytearray()
            for lit in source[start : start + framebuffer.width]:
                line += (foreground if lit else background) * scale
            for _ in range(scale):
                pixels += line

        return RenderResult(width, height, pixels)
