from __future__ import annotations

import pytest

from pychip8.cpu.opcodes import (
    DEFAULT_INSTRUCTIONS,
    Instruction,
    OPCODE_TABLE,
    OpcodeTable,
    decode,
    lookup,
)


def test_pattern_compiles_to_mask_and_value() -> None:
    instruction = Instruction("8XY4", "ADD", "op_add_register")

    assert instruction.mask == 0xF00F
    assert instruction.value == 0x8004
    assert instruction.family == 0x8
    assert instruction.matches(0x8AB4)
    assert not instruction.matches(0x8AB5)


def test_invalid_patterns_are_rejected() -> None:
    with pytest.raises(ValueError):
        Instruction("8XY", "BAD", "op_bad")
    with pytest.raises(ValueError):
        Instruction("8XYG", "BAD", "op_bad")
    with pytest.raises(ValueError):
        Instruction("XNNN", "BAD", "op_bad")


def test_overlapping_patterns_are_rejected() -> None:
    table = OpcodeTable()
    table.register(Instruction("1NNN", "JP", "op_jp"))

    with pytest.raises(ValueError):
        table.register(Instruction("1234", "JP", "op_other"))


def test_decode_extracts_operand_fields() -> None:
    decoded = decode(0xD3A7)

    assert decoded is not None
    assert decoded.instruction.mnemonic == "DRW"
    assert (decoded.x, decoded.y, decoded.n) == (0x3, 0xA, 0x7)
    assert decoded.nn == 0xA7
    assert decoded.nnn == 0x3A7
    assert decoded.describe() == "D3A7 DRW (DXYN)"


def test_decode_unknown_returns_none() -> None:
    assert decode(0x00E1) is None
    assert lookup(0xE09F) is None


def test_every_family_is_covered() -> None:
    assert all(OPCODE_TABLE[family] for family in range(16))
    assert len(DEFAULT_INSTRUCTIONS) == 35
