"""Convert the CHIP-8 framebuffer into scaled RGB pixel data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .display import SCREEN_HEIGHT, SCREEN_WIDTH

RGBColor = Tuple[int, int, int]

# (background, foreground) pairs for unlit and lit cells.
MONOCHROME: Tuple[RGBColor, RGBColor] = ((0, 0, 0), (0xFF, 0xFF, 0xFF))
AMBER: Tuple[RGBColor, RGBColor] = ((0x1A, 0x0F, 0x00), (0xFF, 0xB0, 0x00))


def validate_palette(palette: Sequence[RGBColor]) -> Tuple[bytes, bytes]:
    """Check a two-colour palette and return its packed RGB byte triples."""

    if len(palette) != 2:
        raise ValueError(f"palette needs a background and a foreground colour, got {len(palette)}")
    packed = []
    for color in palette:
        if len(color) != 3 or not all(0 <= channel <= 0xFF for channel in color):
            raise ValueError(f"invalid RGB colour: {color!r}")
        packed.append(bytes(color))
    return packed[0], packed[1]


@dataclass
class RenderResult:
    """Packed RGB image produced by :class:`Renderer`."""

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
    """Expand a 0/1 framebuffer into RGB bytes using a two-colour palette."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        self._colors = validate_palette(palette)

    def render(
        self,
        framebuffer: bytes,
        *,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        scale: int = 1,
    ) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        if len(framebuffer) != width * height:
            raise ValueError(
                f"framebuffer holds {len(framebuffer)} cells, expected {width * height}"
            )

        colors = self._colors
        out_width = width * scale
        out = bytearray()
        for y in range(height):
            row = framebuffer[y * width : (y + 1) * width]
            line = b"".join(colors[1 if cell else 0] * scale for cell in row)
            out += line * scale
        return RenderResult(out_width, height * scale, out)
