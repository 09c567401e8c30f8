"""Pygame front end for the CHIP-8 interpreter."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from pychip8.bus import MemoryAccessError
from pychip8.cpu import CPUError
from pychip8.loader import ProgramImage, ProgramLoadError, load_program_from_path
from pychip8.system import TIMER_HZ, Machine, MachineConfig, create_machine
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import MONOCHROME, Renderer, RGBColor


@dataclass
class AppConfig:
    """Configuration for the CHIP-8 window."""

    program_path: Optional[Path] = None
    scale: int = 10
    fullscreen: bool = False
    cpu_hz: int = 700
    palette: Sequence[RGBColor] = MONOCHROME
    seed: Optional[int] = None

    def cycles_per_frame(self) -> int:
        return max(1, self.cpu_hz // TIMER_HZ)


class Chip8App:
    """Thin wrapper around the Pygame event loop.

    Each frame pumps input into the keypad, runs ``cpu_hz / 60`` CPU ticks,
    performs one timer tick and redraws the window when the framebuffer
    changed.
    """

    def __init__(self, config: AppConfig) -> None:
        if config.scale <= 0:
            raise ValueError("scale must be positive")
        if config.cpu_hz <= 0:
            raise ValueError("cpu_hz must be positive")
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._program_path: Path | None = None
        self._renderer = Renderer(config.palette)
        self._perf_enabled = debug_enabled("perf")
        self._frame_counter = 0

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        if not self._config.program_path:
            raise RuntimeError("program image is required; pass --program <path>")

        machine = self._create_machine()
        self._load_program(machine, self._config.program_path)

        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {self._config.program_path.name}")

        display = machine.display
        surface_size = (display.width * self._config.scale, display.height * self._config.scale)
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode(surface_size, flags)

        clock = pygame.time.Clock()
        self._running = True

        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_F5:
                        self._restart(machine)
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame, event.key, pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame, event.key, pressed=False)

                self._step_frame(machine)

                if display.dirty:
                    self._draw(screen, machine)
                    pygame.display.flip()

                clock.tick(TIMER_HZ)
                self._frame_counter += 1
        finally:
            pygame.quit()

    def _create_machine(self) -> Machine:
        machine = create_machine(MachineConfig(seed=self._config.seed))
        self._machine = machine
        return machine

    def _load_program(self, machine: Machine, program_path: Path) -> ProgramImage:
        try:
            image = load_program_from_path(program_path, machine.memory)
        except FileNotFoundError as exc:
            raise RuntimeError(f"Program file not found: {program_path}") from exc
        except ProgramLoadError as exc:
            raise RuntimeError(f"Failed to load program {program_path}: {exc}") from exc
        machine.program = image
        self._program_path = program_path
        return image

    def _restart(self, machine: Machine) -> None:
        machine.reset()
        if self._program_path is not None:
            self._load_program(machine, self._program_path)
        if debug_enabled("cpu"):
            debug_log("cpu", "restart program=%s", self._program_path)

    def _handle_key_event(self, pygame, key_code: int, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        name = pygame.key.name(key_code)
        if debug_enabled("input"):
            debug_log("input", "event=%s pressed=%s", name, pressed)
        if pressed:
            machine.keypad.press_named(name)
        else:
            machine.keypad.release_named(name)

    def _step_frame(self, machine: Machine) -> int:
        frame_start = time.perf_counter()
        try:
            executed = machine.run_cycles(self._config.cycles_per_frame())
        except (CPUError, MemoryAccessError) as exc:
            self._running = False
            raise RuntimeError(
                f"Execution stopped at pc={machine.cpu.state.pc:04X}: {exc}"
            ) from exc
        machine.tick_timers()

        if self._perf_enabled:
            duration = time.perf_counter() - frame_start
            debug_log(
                "perf",
                "frame=%d executed=%d frame_ms=%.3f waiting=%s",
                self._frame_counter,
                executed,
                duration * 1000.0,
                machine.cpu.waiting_for_key,
            )
        return executed

    def _draw(self, screen, machine: Machine) -> None:
        display = machine.display
        frame = self._renderer.render(
            display.snapshot(),
            width=display.width,
            height=display.height,
            scale=self._config.scale,
        )
        screen.blit(frame.to_surface(), (0, 0))
        display.dirty = False
