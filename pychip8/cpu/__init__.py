"""CPU package for the CHIP-8 interpreter."""

from .core import (
    CPUError,
    CPUState,
    Chip8CPU,
    IllegalOpcodeError,
    StackError,
    StackOverflowError,
    StackUnderflowError,
)
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "CPUError",
    "IllegalOpcodeError",
    "StackError",
    "StackOverflowError",
    "StackUnderflowError",
    "opcodes",
]
