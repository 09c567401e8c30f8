"""Flat 4 KiB memory for the CHIP-8 interpreter.

The CHIP-8 address space is a single byte array. The low 512 bytes are
reserved for the interpreter (the built-in font lives at the very start) and
programs are loaded from ``PROGRAM_START`` upwards. Every access is bounds
checked: programs rely on exact addressing, so an access outside the array is
reported instead of being wrapped or clamped.
"""

from __future__ import annotations

from dataclasses import dataclass

RAM_SIZE = 4096
PROGRAM_START = 0x200


class MemoryAccessError(Exception):
    """Raised when an address falls outside the memory array."""


@dataclass
class Memory:
    """Simple byte-addressable memory region."""

    length: int = RAM_SIZE

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("memory must have a positive length")
        self._data = bytearray(self.length)

    def get_end_address(self) -> int:
        return self.length - 1

    def check_range(self, address: int, length: int = 1) -> None:
        """Raise :class:`MemoryAccessError` unless ``address..address+length-1`` is valid."""

        if length < 0:
            raise ValueError("length must not be negative")
        if address < 0 or address + length > self.length:
            end = address + max(length, 1) - 1
            raise MemoryAccessError(
                f"access {address:#06x}-{end:#06x} outside memory 0x0000-{self.get_end_address():#06x}"
            )

    def load8(self, address: int) -> int:
        self.check_range(address)
        return self._data[address]

    def store8(self, address: int, value: int) -> None:
        self.check_range(address)
        self._data[address] = value & 0xFF

    def load16(self, address: int) -> int:
        """Read a big-endian word."""

        self.check_range(address, 2)
        return (self._data[address] << 8) | self._data[address + 1]

    def load_block(self, address: int, length: int) -> bytes:
        self.check_range(address, length)
        return bytes(self._data[address : address + length])

    def store_block(self, address: int, data: bytes) -> None:
        self.check_range(address, len(data))
        self._data[address : address + len(data)] = data

    def clear(self) -> None:
        self._data[:] = bytes(self.length)

    def snapshot(self) -> bytes:
        return bytes(self._data)
