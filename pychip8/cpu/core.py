"""CHIP-8 CPU: register file plus the fetch/decode/execute engine."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from pychip8.bus import PROGRAM_START, Memory, MemoryAccessError
from pychip8.io import Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import Display, glyph_address

from .opcodes import OPCODE_TABLE, DecodedInstruction, Instruction, decode


class CPUError(Exception):
    """Base error for CPU-related failures."""


class IllegalOpcodeError(CPUError):
    """Raised when a fetched opcode matches no instruction pattern."""


class StackError(CPUError):
    """Base error for call stack exhaustion."""


class StackOverflowError(StackError):
    """Raised when ``2NNN`` is executed with a full call stack."""


class StackUnderflowError(StackError):
    """Raised when ``00EE`` is executed with an empty call stack."""


NUM_REGISTERS = 16
STACK_DEPTH = 16
FLAG_REGISTER = 0xF


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file."""

    v: bytearray = field(default_factory=lambda: bytearray(NUM_REGISTERS))
    i: int = 0x000
    pc: int = PROGRAM_START
    sp: int = 0
    stack: list[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    delay_timer: int = 0
    sound_timer: int = 0
    # Register awaiting a key press while an ``FX0A`` is pending.
    waiting_register: int | None = None
    # Key latch as last sampled during the wait; only released->pressed edges count.
    wait_latch: tuple[bool, ...] = ()

    def clone(self) -> "CPUState":
        return CPUState(
            bytearray(self.v),
            self.i,
            self.pc,
            self.sp,
            list(self.stack),
            self.delay_timer,
            self.sound_timer,
            self.waiting_register,
            self.wait_latch,
        )


@dataclass
class Chip8CPU:
    """Interpreter core operating on shared memory, display and keypad.

    ``step`` is the CPU tick and ``tick_timers`` the 60 Hz timer tick; the
    caller drives both at independent rates. Faulting instructions raise
    before writing any state, and ``step`` rewinds the program counter so it
    still points at the instruction that failed.
    """

    memory: Memory
    display: Display
    keypad: Keypad
    rng: random.Random = field(default_factory=random.Random)
    instruction_table: Sequence[Sequence[Instruction]] = field(default=OPCODE_TABLE)

    state: CPUState = field(default_factory=CPUState)
    instruction_count: int = 0

    def reset(self) -> None:
        """Restore the power-on register file."""

        self.state = CPUState()
        self.instruction_count = 0

    @property
    def waiting_for_key(self) -> bool:
        return self.state.waiting_register is not None

    @property
    def sound_active(self) -> bool:
        return self.state.sound_timer > 0

    def fetch(self) -> int:
        """Read the big-endian opcode at PC and advance PC by two."""

        opcode = self.memory.load16(self.state.pc)
        self.state.pc = (self.state.pc + 2) & 0xFFFF
        return opcode

    def execute(self, opcode: int) -> DecodedInstruction:
        """Decode ``opcode`` and apply it to the machine state."""

        decoded = decode(opcode, self.instruction_table)
        if decoded is None:
            raise IllegalOpcodeError(f"unrecognised opcode {opcode:04X}")
        handler = getattr(self, decoded.instruction.handler, None)
        if handler is None:
            raise CPUError(f"handler '{decoded.instruction.handler}' not implemented")
        handler(decoded)
        return decoded

    def step(self) -> int:
        """Run one CPU tick; returns the number of instructions executed."""

        if self.state.waiting_register is not None:
            self._poll_key_wait()
            return 0

        pc_before = self.state.pc
        try:
            opcode = self.fetch()
            decoded = self.execute(opcode)
        except (CPUError, MemoryAccessError):
            self.state.pc = pc_before
            raise
        self.instruction_count += 1
        if debug_enabled("cpu"):
            debug_log(
                "cpu",
                "pc=%04x op=%s i=%03x v=%s",
                pc_before,
                decoded.describe(),
                self.state.i,
                self.state.v.hex(),
            )
        return 1

    def tick_timers(self) -> None:
        """Decrement the delay and sound timers once, stopping at zero."""

        state = self.state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_nop(self, _: DecodedInstruction) -> None:
        """No operation."""

    def op_cls(self, _: DecodedInstruction) -> None:
        self.display.clear()

    def op_ret(self, _: DecodedInstruction) -> None:
        self.state.pc = self._pop()

    def op_jp(self, op: DecodedInstruction) -> None:
        self.state.pc = op.nnn

    def op_call(self, op: DecodedInstruction) -> None:
        self._push(self.state.pc)
        self.state.pc = op.nnn

    def op_skip_eq_immediate(self, op: DecodedInstruction) -> None:
        if self.state.v[op.x] == op.nn:
            self._skip()

    def op_skip_ne_immediate(self, op: DecodedInstruction) -> None:
        if self.state.v[op.x] != op.nn:
            self._skip()

    def op_skip_eq_register(self, op: DecodedInstruction) -> None:
        if self.state.v[op.x] == self.state.v[op.y]:
            self._skip()

    def op_skip_ne_register(self, op: DecodedInstruction) -> None:
        if self.state.v[op.x] != self.state.v[op.y]:
            self._skip()

    def op_ld_immediate(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] = op.nn

    def op_add_immediate(self, op: DecodedInstruction) -> None:
        # VF is untouched.
        self.state.v[op.x] = (self.state.v[op.x] + op.nn) & 0xFF

    def op_ld_register(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] = self.state.v[op.y]

    def op_or(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] |= self.state.v[op.y]

    def op_and(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] &= self.state.v[op.y]

    def op_xor(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] ^= self.state.v[op.y]

    def op_add_register(self, op: DecodedInstruction) -> None:
        v = self.state.v
        total = v[op.x] + v[op.y]
        v[op.x] = total & 0xFF
        v[FLAG_REGISTER] = 1 if total > 0xFF else 0

    def op_sub(self, op: DecodedInstruction) -> None:
        v = self.state.v
        vx, vy = v[op.x], v[op.y]
        v[op.x] = (vx - vy) & 0xFF
        v[FLAG_REGISTER] = 0 if vx < vy else 1

    def op_subn(self, op: DecodedInstruction) -> None:
        v = self.state.v
        vx, vy = v[op.x], v[op.y]
        v[op.x] = (vy - vx) & 0xFF
        v[FLAG_REGISTER] = 0 if vy < vx else 1

    def op_shr(self, op: DecodedInstruction) -> None:
        v = self.state.v
        lsb = v[op.x] & 0x01
        v[op.x] >>= 1
        v[FLAG_REGISTER] = lsb

    def op_shl(self, op: DecodedInstruction) -> None:
        v = self.state.v
        msb = (v[op.x] >> 7) & 0x01
        v[op.x] = (v[op.x] << 1) & 0xFF
        v[FLAG_REGISTER] = msb

    def op_ld_index(self, op: DecodedInstruction) -> None:
        self.state.i = op.nnn

    def op_jp_offset(self, op: DecodedInstruction) -> None:
        # An out-of-range target faults on the next fetch.
        self.state.pc = (op.nnn + self.state.v[0]) & 0xFFFF

    def op_rnd(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] = self.rng.randrange(0x100) & op.nn

    def op_drw(self, op: DecodedInstruction) -> None:
        v = self.state.v
        rows = self.memory.load_block(self.state.i, op.n)
        x = v[op.x] % self.display.width
        y = v[op.y] % self.display.height
        collision = self.display.draw_sprite(x, y, rows)
        v[FLAG_REGISTER] = 1 if collision else 0

    def op_skip_key_pressed(self, op: DecodedInstruction) -> None:
        if self.keypad.is_pressed(self.state.v[op.x]):
            self._skip()

    def op_skip_key_released(self, op: DecodedInstruction) -> None:
        if not self.keypad.is_pressed(self.state.v[op.x]):
            self._skip()

    def op_ld_from_delay(self, op: DecodedInstruction) -> None:
        self.state.v[op.x] = self.state.delay_timer

    def op_wait_key(self, op: DecodedInstruction) -> None:
        # Keys already held do not count; the wait ends on a fresh press.
        self.state.waiting_register = op.x
        self.state.wait_latch = self.keypad.snapshot()
        if debug_enabled("input"):
            debug_log("input", "wait_key register=V%X pc=%04x", op.x, self.state.pc)

    def op_ld_delay(self, op: DecodedInstruction) -> None:
        self.state.delay_timer = self.state.v[op.x]

    def op_ld_sound(self, op: DecodedInstruction) -> None:
        self.state.sound_timer = self.state.v[op.x]

    def op_add_index(self, op: DecodedInstruction) -> None:
        # No carry flag: VF keeps its value.
        self.state.i = (self.state.i + self.state.v[op.x]) & 0xFFFF

    def op_ld_font(self, op: DecodedInstruction) -> None:
        self.state.i = glyph_address(self.state.v[op.x])

    def op_ld_bcd(self, op: DecodedInstruction) -> None:
        value = self.state.v[op.x]
        self.memory.store_block(self.state.i, bytes((value // 100, (value // 10) % 10, value % 10)))

    def op_store_registers(self, op: DecodedInstruction) -> None:
        self.memory.store_block(self.state.i, bytes(self.state.v[: op.x + 1]))

    def op_load_registers(self, op: DecodedInstruction) -> None:
        data = self.memory.load_block(self.state.i, op.x + 1)
        self.state.v[: op.x + 1] = data

    # ------------------------------------------------------------------
    # Helpers

    def _skip(self) -> None:
        self.state.pc = (self.state.pc + 2) & 0xFFFF

    def _push(self, address: int) -> None:
        state = self.state
        if state.sp >= STACK_DEPTH:
            raise StackOverflowError(f"call stack full ({STACK_DEPTH} entries) at pc={state.pc:04x}")
        state.stack[state.sp] = address
        state.sp += 1

    def _pop(self) -> int:
        state = self.state
        if state.sp <= 0:
            raise StackUnderflowError(f"return with empty call stack at pc={state.pc:04x}")
        state.sp -= 1
        return state.stack[state.sp]

    def _poll_key_wait(self) -> None:
        state = self.state
        register = state.waiting_register
        if register is None:
            return
        current = self.keypad.snapshot()
        previous = state.wait_latch
        key = next(
            (key for key, pressed in enumerate(current) if pressed and not previous[key]),
            None,
        )
        if key is None:
            state.wait_latch = current
            return
        state.v[register] = key
        state.waiting_register = None
        state.wait_latch = ()
        if debug_enabled("input"):
            debug_log("input", "wait_key resolved V%X=%X", register, key)
