"""Bus-related helpers for the CHIP-8 interpreter."""

from .memory import PROGRAM_START, RAM_SIZE, Memory, MemoryAccessError

__all__ = [
    "Memory",
    "MemoryAccessError",
    "PROGRAM_START",
    "RAM_SIZE",
]
