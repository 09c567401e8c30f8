"""Opcode metadata for the CHIP-8 instruction set.

Instructions are described by four-character patterns such as ``"8XY4"``:
hexadecimal digits must match exactly while ``X``/``Y``/``N`` mark operand
nibbles. The table is grouped by the high nibble so decoding only scans the
handful of patterns that share a family.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Iterable, List, Sequence

_OPERAND_NIBBLES: Final[frozenset[str]] = frozenset("XYN")


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single CHIP-8 opcode pattern."""

    pattern: str
    mnemonic: str
    handler: str
    mask: int = field(init=False, repr=False)
    value: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        pattern = self.pattern.upper()
        if len(pattern) != 4:
            raise ValueError(f"pattern must be four nibbles: {self.pattern!r}")
        mask = 0
        value = 0
        for char in pattern:
            mask <<= 4
            value <<= 4
            if char in _OPERAND_NIBBLES:
                continue
            try:
                nibble = int(char, 16)
            except ValueError:
                raise ValueError(f"invalid nibble {char!r} in pattern {self.pattern!r}") from None
            mask |= 0xF
            value |= nibble
        if not mask & 0xF000:
            raise ValueError(f"pattern must fix the family nibble: {self.pattern!r}")
        object.__setattr__(self, "pattern", pattern)
        object.__setattr__(self, "mask", mask)
        object.__setattr__(self, "value", value)

    @property
    def family(self) -> int:
        return self.value >> 12

    def matches(self, opcode: int) -> bool:
        return (opcode & self.mask) == self.value


@dataclass(frozen=True)
class DecodedInstruction:
    """An opcode split into its operand fields."""

    opcode: int
    instruction: Instruction
    x: int
    y: int
    n: int
    nn: int
    nnn: int

    def describe(self) -> str:
        return f"{self.opcode:04X} {self.instruction.mnemonic} ({self.instruction.pattern})"


class OpcodeTable:
    """Mutable builder for the 16 family buckets."""

    _FAMILIES: Final[int] = 0x10

    def __init__(self) -> None:
        self._table: List[List[Instruction]] = [[] for _ in range(self._FAMILIES)]

    def register(self, instruction: Instruction) -> None:
        bucket = self._table[instruction.family]
        for existing in bucket:
            overlap = existing.mask & instruction.mask
            if (existing.value & overlap) == (instruction.value & overlap):
                raise ValueError(
                    f"pattern {instruction.pattern} overlaps {existing.pattern} ({existing.mnemonic})"
                )
        bucket.append(instruction)

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[Sequence[Instruction]]:
        return tuple(tuple(bucket) for bucket in self._table)


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[Sequence[Instruction]]:
    """Build the family-indexed instruction lookup table."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction("0000", "NOP", "op_nop"),
    Instruction("00E0", "CLS", "op_cls"),
    Instruction("00EE", "RET", "op_ret"),
    Instruction("1NNN", "JP", "op_jp"),
    Instruction("2NNN", "CALL", "op_call"),
    Instruction("3XNN", "SE", "op_skip_eq_immediate"),
    Instruction("4XNN", "SNE", "op_skip_ne_immediate"),
    Instruction("5XY0", "SE", "op_skip_eq_register"),
    Instruction("6XNN", "LD", "op_ld_immediate"),
    Instruction("7XNN", "ADD", "op_add_immediate"),
    # Register ALU
    Instruction("8XY0", "LD", "op_ld_register"),
    Instruction("8XY1", "OR", "op_or"),
    Instruction("8XY2", "AND", "op_and"),
    Instruction("8XY3", "XOR", "op_xor"),
    Instruction("8XY4", "ADD", "op_add_register"),
    Instruction("8XY5", "SUB", "op_sub"),
    Instruction("8XY6", "SHR", "op_shr"),
    Instruction("8XY7", "SUBN", "op_subn"),
    Instruction("8XYE", "SHL", "op_shl"),
    Instruction("9XY0", "SNE", "op_skip_ne_register"),
    # Index, jumps, random, draw
    Instruction("ANNN", "LD I", "op_ld_index"),
    Instruction("BNNN", "JP V0", "op_jp_offset"),
    Instruction("CXNN", "RND", "op_rnd"),
    Instruction("DXYN", "DRW", "op_drw"),
    # Keypad
    Instruction("EX9E", "SKP", "op_skip_key_pressed"),
    Instruction("EXA1", "SKNP", "op_skip_key_released"),
    # Timers, memory, key wait
    Instruction("FX07", "LD DT", "op_ld_from_delay"),
    Instruction("FX0A", "LD K", "op_wait_key"),
    Instruction("FX15", "LD DT", "op_ld_delay"),
    Instruction("FX18", "LD ST", "op_ld_sound"),
    Instruction("FX1E", "ADD I", "op_add_index"),
    Instruction("FX29", "LD F", "op_ld_font"),
    Instruction("FX33", "LD B", "op_ld_bcd"),
    Instruction("FX55", "LD [I]", "op_store_registers"),
    Instruction("FX65", "LD [I]", "op_load_registers"),
)


OPCODE_TABLE: Sequence[Sequence[Instruction]] = build_instruction_table(DEFAULT_INSTRUCTIONS)


def lookup(opcode: int, table: Sequence[Sequence[Instruction]] = OPCODE_TABLE) -> Instruction | None:
    for instruction in table[(opcode >> 12) & 0xF]:
        if instruction.matches(opcode):
            return instruction
    return None


def decode(opcode: int, table: Sequence[Sequence[Instruction]] = OPCODE_TABLE) -> DecodedInstruction | None:
    """Split ``opcode`` into operand fields, or return ``None`` if no pattern matches."""

    opcode &= 0xFFFF
    instruction = lookup(opcode, table)
    if instruction is None:
        return None
    return DecodedInstruction(
        opcode=opcode,
        instruction=instruction,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        nn=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )
