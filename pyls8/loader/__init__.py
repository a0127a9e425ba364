"""Loaders for LS-8 program formats."""

from __future__ import annotations

from pathlib import Path

from pyls8.bus import Addressable

from .binary import BinaryImageError, load_binary, load_binary_from_path
from .ls8 import LS8FormatError, load_ls8, load_ls8_from_path, parse_ls8
from .program import AddressRegion, ProgramImage

TEXT_SUFFIXES = frozenset({".ls8", ".txt"})
FORMATS = ("auto", "ls8", "bin")


def detect_format(path: Path) -> str:
    """Guess the program format from the file suffix."""

    return "ls8" if path.suffix.lower() in TEXT_SUFFIXES else "bin"


def load_program_from_path(path: Path, memory: Addressable, *, fmt: str = "auto", start: int = 0) -> ProgramImage:
    """Load ``path`` in the requested format (``auto`` picks by suffix)."""

    if fmt not in FORMATS:
        raise ValueError(f"unknown program format {fmt!r}; expected one of {', '.join(FORMATS)}")
    if fmt == "auto":
        fmt = detect_format(path)
    if fmt == "ls8":
        return load_ls8_from_path(path, memory, start=start)
    return load_binary_from_path(path, memory, start=start)


__all__ = [
    "AddressRegion",
    "ProgramImage",
    "LS8FormatError",
    "BinaryImageError",
    "FORMATS",
    "detect_format",
    "parse_ls8",
    "load_ls8",
    "load_ls8_from_path",
    "load_binary",
    "load_binary_from_path",
    "load_program_from_path",
]
