"""Loader for raw LS-8 memory images."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pyls8.bus import Addressable
from pyls8.utils import debug_enabled, debug_log

from .program import ProgramImage


class BinaryImageError(RuntimeError):
    """Raised when a binary image cannot be placed in memory."""


def load_binary(stream: BinaryIO, memory: Addressable, *, start: int = 0, name: str = "") -> ProgramImage:
    """Copy the bytes of ``stream`` into ``memory`` starting at ``start``."""

    if start < 0 or start >= memory.size:
        raise BinaryImageError(f"start address {start:#04x} outside memory of {memory.size} bytes")

    # Read one byte past the limit so oversized images are detected without
    # slurping arbitrarily large files.
    limit = memory.size - start
    payload = stream.read(limit + 1)
    if len(payload) > limit:
        raise BinaryImageError(f"image does not fit in {limit} bytes available from {start:#04x}")

    for offset, value in enumerate(payload):
        memory.write(start + offset, value)

    program = ProgramImage(name=name, source_format="binary")
    if payload:
        program.add_region(start, start + len(payload) - 1)
    if debug_enabled("loader"):
        debug_log("loader", "binary name=%s start=%02x length=%d", name or "-", start, len(payload))
    return program


def load_binary_from_path(path: Path, memory: Addressable, *, start: int = 0) -> ProgramImage:
    """Load a raw memory image from the filesystem."""

    with path.open("rb") as handle:
        return load_binary(handle, memory, start=start, name=path.stem)
