"""Program image metadata and loader."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pychip8.bus import PROGRAM_START, Memory
from pychip8.utils import debug_enabled, debug_log


class ProgramLoadError(RuntimeError):
    """Raised when a program image cannot be placed into memory."""


@dataclass
class ProgramImage:
    """Describes a program image copied into memory."""

    data: bytes
    name: str = ""
    start: int = PROGRAM_START

    @property
    def end(self) -> int:
        return self.start + len(self.data) - 1

    def length(self) -> int:
        return len(self.data)


def max_program_size(memory: Memory) -> int:
    return memory.length - PROGRAM_START


def load_image(image: ProgramImage, memory: Memory) -> ProgramImage:
    """Copy ``image`` into ``memory`` at its start address."""

    limit = max_program_size(memory)
    if len(image.data) > limit:
        raise ProgramLoadError(
            f"program {image.name or '<anonymous>'} is {len(image.data)} bytes; at most {limit} fit"
        )
    memory.store_block(image.start, image.data)
    if debug_enabled("loader"):
        debug_log(
            "loader",
            "loaded name=%s bytes=%d range=%04x-%04x",
            image.name or "-",
            len(image.data),
            image.start,
            image.end,
        )
    return image


def load_program(stream: BinaryIO, memory: Memory, *, name: str = "") -> ProgramImage:
    """Read a raw program image from ``stream`` into ``memory``."""

    # One extra byte is enough to tell an oversized image from one that fits.
    data = stream.read(max_program_size(memory) + 1)
    return load_image(ProgramImage(bytes(data), name=name), memory)


def load_program_from_path(path: Path, memory: Memory) -> ProgramImage:
    """Load a program image from the filesystem."""

    with path.open("rb") as handle:
        return load_program(handle, memory, name=path.name)
