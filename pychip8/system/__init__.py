"""CHIP-8 system assembly helpers."""

from __future__ import annotations

from .machine import TIMER_HZ, Machine, MachineConfig, create_machine

__all__ = [
    "MachineConfig",
    "Machine",
    "create_machine",
    "TIMER_HZ",
]
