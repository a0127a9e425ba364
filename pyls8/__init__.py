"""Python emulator for the LS-8 8-bit computer.

The package hosts the CPU, memory, loaders, console output, window UI and
debugging helpers used by ``run.py``.
"""

from __future__ import annotations

from . import bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "io",
    "loader",
    "system",
    "video",
    "ui",
    "utils",
]
