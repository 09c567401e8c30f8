"""Tests for the CHIP-8 machine assembly."""

from __future__ import annotations

import pytest

from pychip8.io import Keypad
from pychip8.loader import ProgramLoadError
from pychip8.system import MachineConfig, create_machine
from pychip8.video import FONT_SET


def test_default_machine_layout() -> None:
    machine = create_machine()

    assert machine.memory.length == 4096
    assert machine.memory.load_block(0, 80) == FONT_SET
    assert machine.memory.load_block(80, 4096 - 80) == bytes(4096 - 80)
    assert machine.cpu.memory is machine.memory
    assert machine.cpu.display is machine.display
    assert machine.cpu.keypad is machine.keypad
    assert machine.program is None


def test_config_program_image_is_loaded() -> None:
    machine = create_machine(MachineConfig(program_image=b"\x12\x00", program_name="loop"))

    assert machine.memory.load16(0x200) == 0x1200
    assert machine.program is not None
    assert machine.program.name == "loop"


def test_external_keypad_is_shared() -> None:
    keypad = Keypad()
    machine = create_machine(MachineConfig(keypad=keypad))

    keypad.press(0x2)
    assert machine.cpu.keypad.is_pressed(0x2)


def test_overlong_program_is_rejected() -> None:
    machine = create_machine()

    with pytest.raises(ProgramLoadError):
        machine.load_program(bytes(4096 - 512 + 1))


def test_reset_restores_post_construction_state() -> None:
    program = bytes.fromhex("6a05 a300 fa55 2208 00e0 d015 f015 f118".replace(" ", ""))
    pristine = create_machine(MachineConfig(seed=7))
    machine = create_machine(MachineConfig(program_image=program, seed=7))

    machine.cpu.state.v[1] = 3
    machine.keypad.press(0xF)
    machine.memory.store_block(0x10, b"\xff\xff")
    machine.run_cycles(4)
    machine.tick_timers()
    assert machine.cpu.state.sp == 1

    machine.reset()

    assert machine.cpu.state == pristine.cpu.state
    assert machine.memory.snapshot() == pristine.memory.snapshot()
    assert machine.framebuffer == pristine.framebuffer
    assert machine.keypad.snapshot() == pristine.keypad.snapshot()
    assert machine.cpu.state.pc == 0x200
    assert machine.memory.load_block(0, 80) == FONT_SET
    assert machine.program is None


def test_reset_reseeds_random_generator() -> None:
    machine = create_machine(MachineConfig(program_image=b"\xc0\xff", seed=3))
    machine.step()
    first = machine.cpu.state.v[0]

    machine.reset()
    machine.load_program(b"\xc0\xff")
    machine.step()

    assert machine.cpu.state.v[0] == first


def test_run_cycles_counts_executed_instructions() -> None:
    # LD V0, 1 ; LD K, V1 (wait)
    machine = create_machine(MachineConfig(program_image=b"\x60\x01\xf1\x0a"))

    assert machine.run_cycles(5) == 2
    assert machine.cpu.waiting_for_key
