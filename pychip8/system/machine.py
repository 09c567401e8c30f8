"""CHIP-8 machine assembly."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from pychip8.bus import Memory
from pychip8.cpu import Chip8CPU
from pychip8.io import Keypad
from pychip8.loader import ProgramImage, load_image
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import FONT_SET, FONT_START, Display

TIMER_HZ = 60


@dataclass
class MachineConfig:
    """Runtime configuration for the CHIP-8 machine."""

    program_image: Optional[bytes] = None
    program_name: str = ""
    seed: Optional[int] = None
    keypad: Keypad | None = None


@dataclass
class Machine:
    """Aggregates memory, CPU, framebuffer and keypad into one state owner."""

    config: MachineConfig
    memory: Memory
    display: Display
    keypad: Keypad
    cpu: Chip8CPU
    program: ProgramImage | None = None

    def reset(self) -> None:
        """Return every component to its post-construction state.

        The program image is not reloaded; call :meth:`load_program` again.
        """

        self.memory.clear()
        self.memory.store_block(FONT_START, FONT_SET)
        self.display.clear()
        self.keypad.reset()
        self.cpu.reset()
        self.cpu.rng.seed(self.config.seed)
        self.program = None
        if debug_enabled("cpu"):
            debug_log("cpu", "machine reset")

    def load_program(self, data: bytes, name: str = "") -> ProgramImage:
        self.program = load_image(ProgramImage(bytes(data), name=name), self.memory)
        return self.program

    def step(self) -> int:
        """CPU tick."""

        return self.cpu.step()

    def tick_timers(self) -> None:
        """60 Hz timer tick."""

        self.cpu.tick_timers()

    def run_cycles(self, count: int) -> int:
        """Run ``count`` CPU ticks and return how many instructions executed."""

        executed = 0
        for _ in range(count):
            executed += self.cpu.step()
        return executed

    @property
    def framebuffer(self) -> bytes:
        return self.display.snapshot()


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a CHIP-8 machine with the requested configuration."""

    config = config or MachineConfig()

    memory = Memory()
    memory.store_block(FONT_START, FONT_SET)

    display = Display()
    keypad = config.keypad or Keypad()
    cpu = Chip8CPU(memory, display, keypad, rng=random.Random(config.seed))

    machine = Machine(
        config=config,
        memory=memory,
        display=display,
        keypad=keypad,
        cpu=cpu,
    )
    if config.program_image is not None:
        machine.load_program(config.program_image, config.program_name)
    return machine
