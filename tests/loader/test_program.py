"""Tests for the program image loader."""

from __future__ import annotations

import io

import pytest

from pychip8.bus import Memory
from pychip8.loader import ProgramLoadError, load_program, load_program_from_path, max_program_size


def test_load_program_copies_bytes_at_origin() -> None:
    memory = Memory()

    image = load_program(io.BytesIO(b"\x60\x01\x12\x00"), memory, name="demo")

    assert image.start == 0x200
    assert image.end == 0x203
    assert image.length() == 4
    assert memory.load_block(0x200, 4) == b"\x60\x01\x12\x00"
    assert memory.load8(0x1FF) == 0


def test_load_program_accepts_largest_image() -> None:
    memory = Memory()
    payload = bytes([0xAA]) * max_program_size(memory)

    load_program(io.BytesIO(payload), memory)

    assert max_program_size(memory) == 4096 - 512
    assert memory.load8(0xFFF) == 0xAA


def test_load_program_rejects_overlong_image() -> None:
    memory = Memory()
    payload = bytes(max_program_size(memory) + 1)

    with pytest.raises(ProgramLoadError):
        load_program(io.BytesIO(payload), memory)
    assert memory.snapshot() == bytes(4096)


def test_load_program_from_path(tmp_path) -> None:
    path = tmp_path / "pong.ch8"
    path.write_bytes(b"\x00\xe0")
    memory = Memory()

    image = load_program_from_path(path, memory)

    assert image.name == "pong.ch8"
    assert memory.load16(0x200) == 0x00E0
