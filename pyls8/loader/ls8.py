"""Loader for LS-8 text programs (``.ls8``).

Each meaningful line holds one byte written as eight binary digits. Anything
after ``#`` is a comment and blank lines are skipped::

    10011001 # LDI R0,8
    00000000
    00001000
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, TextIO

from pyls8.bus import Addressable
from pyls8.utils import debug_enabled, debug_log

from .program import ProgramImage


class LS8FormatError(RuntimeError):
    """Raised when an ``.ls8`` file cannot be parsed."""


COMMENT_MARKER = "#"
_BYTE_PATTERN = re.compile(r"^[01]{8}$")


def parse_ls8(lines: Iterable[str]) -> bytes:
    """Decode the bytes described by ``lines``."""

    payload = bytearray()
    for line_number, raw_line in enumerate(lines, start=1):
        text = _strip_comment(raw_line)
        if not text:
            continue
        if not _BYTE_PATTERN.match(text):
            raise LS8FormatError(f"line {line_number}: expected eight binary digits, got {text!r}")
        payload.append(int(text, 2))
    return bytes(payload)


def load_ls8(handle: TextIO, memory: Addressable, *, start: int = 0, name: str = "") -> ProgramImage:
    """Load an LS-8 text program from ``handle`` into ``memory``."""

    payload = parse_ls8(handle)
    if start < 0 or start + len(payload) > memory.size:
        raise LS8FormatError(
            f"program of {len(payload)} bytes at {start:#04x} does not fit in {memory.size} bytes of memory"
        )

    for offset, value in enumerate(payload):
        memory.write(start + offset, value)

    program = ProgramImage(name=name, source_format="ls8")
    if payload:
        program.add_region(start, start + len(payload) - 1)
    if debug_enabled("loader"):
        debug_log("loader", "ls8 name=%s start=%02x length=%d", name or "-", start, len(payload))
    return program


def load_ls8_from_path(path: Path, memory: Addressable, *, start: int = 0) -> ProgramImage:
    """Load an LS-8 text program from the filesystem."""

    try:
        with path.open("r", encoding="utf-8") as handle:
            return load_ls8(handle, memory, start=start, name=path.stem)
    except UnicodeDecodeError as exc:
        raise LS8FormatError(f"{path.name}: not a text file ({exc.reason} at byte {exc.start})") from exc


def _strip_comment(line: str) -> str:
    parts: List[str] = line.split(COMMENT_MARKER, 1)
    return parts[0].strip()
