"""Python CHIP-8 interpreter.

The CPU, memory, video, input and loader layers are assembled by
``pychip8.system`` and driven by the Pygame front end in ``pychip8.ui``.
"""

from __future__ import annotations

from . import bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
