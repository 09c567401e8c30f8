"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .program import (
    ProgramImage,
    ProgramLoadError,
    load_image,
    load_program,
    load_program_from_path,
    max_program_size,
)

__all__ = [
    "ProgramImage",
    "ProgramLoadError",
    "load_image",
    "load_program",
    "load_program_from_path",
    "max_program_size",
]
