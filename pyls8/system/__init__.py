"""LS-8 system assembly helpers."""

from __future__ import annotations

from .machine import (
    KEYBOARD_ADDRESS,
    KEYBOARD_INTERRUPT,
    TIMER_INTERRUPT,
    IntervalTimer,
    Machine,
    MachineConfig,
    create_machine,
)

__all__ = [
    "MachineConfig",
    "Machine",
    "IntervalTimer",
    "create_machine",
    "TIMER_INTERRUPT",
    "KEYBOARD_INTERRUPT",
    "KEYBOARD_ADDRESS",
]
