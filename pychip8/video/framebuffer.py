"""64x32 monochrome framebuffer driven by the CHIP-8 draw instructions."""

from __future__ import annotations

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32


class Framebuffer:
    """Pixel grid with XOR-toggle writes and toroidal addressing."""

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)

    def _index(self, x: int, y: int) -> int:
        return (y % self.height) * self.width + (x % self.width)

    def get(self, x: int, y: int) -> bool:
        return self._pixels[self._index(x, y)] != 0

    def toggle(self, x: int, y: int) -> bool:
        """Flip the pixel at ``(x, y)`` and return its new state."""

        index = self._index(x, y)
        self._pixels[index] ^= 1
        return self._pixels[index] != 0

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))

    def snapshot(self) -> bytes:
        """Row-major copy of the grid, one byte per pixel (1 = lit)."""

        return bytes(self._pixels)

    def lit_count(self) -> int:
        return sum(self._pixels)


__all__ = ["Framebuffer", "SCREEN_WIDTH", "SCREEN_HEIGHT"]
