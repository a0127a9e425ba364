"""Tests for the raw binary image loader."""

from __future__ import annotations

import io

import pytest

from pyls8.bus import RAM
from pyls8.loader import BinaryImageError, load_binary, load_program_from_path


def test_load_binary_copies_bytes() -> None:
    ram = RAM()

    program = load_binary(io.BytesIO(b"\x99\x00\x08\x01"), ram, start=4)

    assert ram.snapshot()[4:8] == b"\x99\x00\x08\x01"
    assert program.source_format == "binary"
    assert program.size == 4


def test_empty_image_has_no_regions() -> None:
    program = load_binary(io.BytesIO(b""), RAM())

    assert program.regions == []
    assert program.size == 0


def test_oversized_image_is_rejected() -> None:
    with pytest.raises(BinaryImageError):
        load_binary(io.BytesIO(bytes(0x101)), RAM())

    with pytest.raises(BinaryImageError):
        load_binary(io.BytesIO(bytes(0x11)), RAM(), start=0xF0)


def test_start_outside_memory_is_rejected() -> None:
    with pytest.raises(BinaryImageError):
        load_binary(io.BytesIO(b"\x01"), RAM(), start=0x100)


def test_format_detection_by_suffix(tmp_path) -> None:
    text_path = tmp_path / "prog.ls8"
    text_path.write_text("00000001\n")
    bin_path = tmp_path / "prog.bin"
    bin_path.write_bytes(b"\x01")

    assert load_program_from_path(text_path, RAM()).source_format == "ls8"
    assert load_program_from_path(bin_path, RAM()).source_format == "binary"
    assert load_program_from_path(text_path, RAM(), fmt="bin").size == len("00000001\n")

    with pytest.raises(ValueError):
        load_program_from_path(bin_path, RAM(), fmt="hex")
