"""64x32 monochrome framebuffer."""

from __future__ import annotations

from typing import Iterable

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32


class Display:
    """Row-major on/off framebuffer mutated by ``00E0`` and ``DXYN``.

    ``dirty`` is raised whenever the buffer changes so the rendering side can
    skip frames where nothing was drawn; the renderer clears it.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("display dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)
        self.dirty = True

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))
        self.dirty = True

    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[(y % self.height) * self.width + (x % self.width)] != 0

    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """XOR an 8-pixel-wide sprite onto the buffer at ``(x, y)``.

        Every pixel coordinate wraps around the display edges. Returns ``True``
        when at least one lit pixel was switched off.
        """

        collision = False
        width = self.width
        height = self.height
        pixels = self._pixels
        for line, bits in enumerate(rows):
            if not bits:
                continue
            row_offset = ((y + line) % height) * width
            for column in range(8):
                if not bits & (0x80 >> column):
                    continue
                index = row_offset + (x + column) % width
                if pixels[index]:
                    collision = True
                pixels[index] ^= 1
        self.dirty = True
        return collision

    def snapshot(self) -> bytes:
        """Return the buffer as ``width * height`` bytes of 0/1 in row-major order."""

        return bytes(self._pixels)

    def pixels(self) -> tuple[bool, ...]:
        return tuple(value != 0 for value in self._pixels)

    def lit_count(self) -> int:
        return sum(self._pixels)
