"""Unit tests for the CHIP-8 memory."""

import pytest

from pychip8.bus import RAM_SIZE, Memory, MemoryAccessError


def test_memory_defaults_to_zero() -> None:
    memory = Memory()

    assert memory.length == RAM_SIZE
    assert memory.get_end_address() == 0xFFF
    assert memory.snapshot() == bytes(RAM_SIZE)


def test_store_and_load() -> None:
    memory = Memory()
    memory.store8(0x0200, 0x1FF)
    memory.store_block(0x0300, b"\xab\xcd")

    assert memory.load8(0x0200) == 0xFF
    assert memory.load16(0x0300) == 0xABCD
    assert memory.load_block(0x0300, 2) == b"\xab\xcd"


@pytest.mark.parametrize("address", [-1, RAM_SIZE, 0x10000])
def test_out_of_bounds_byte_access(address: int) -> None:
    memory = Memory()

    with pytest.raises(MemoryAccessError):
        memory.load8(address)
    with pytest.raises(MemoryAccessError):
        memory.store8(address, 0)


def test_block_crossing_end_is_rejected_without_partial_write() -> None:
    memory = Memory()

    with pytest.raises(MemoryAccessError):
        memory.store_block(0xFFE, b"\x01\x02\x03")
    assert memory.load_block(0xFFE, 2) == b"\x00\x00"

    with pytest.raises(MemoryAccessError):
        memory.load16(0xFFF)


def test_clear_zeroes_memory() -> None:
    memory = Memory(0x20)
    memory.store_block(0, b"\xff" * 0x20)
    memory.clear()

    assert memory.snapshot() == bytes(0x20)


def test_invalid_length() -> None:
    with pytest.raises(ValueError):
        Memory(0)
