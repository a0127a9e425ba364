"""Tests for the .ls8 text program loader."""

from __future__ import annotations

import io

import pytest

from pyls8.bus import RAM
from pyls8.loader import AddressRegion, LS8FormatError, load_ls8, load_ls8_from_path, parse_ls8

SAMPLE = """\
# print8.ls8
10011001 # LDI R0,8
00000000
00001000

01000011 # PRN R0
00000000
00000001 # HLT
"""


def test_parse_skips_comments_and_blank_lines() -> None:
    assert parse_ls8(io.StringIO(SAMPLE)) == bytes([0x99, 0x00, 0x08, 0x43, 0x00, 0x01])


def test_malformed_line_reports_line_number() -> None:
    with pytest.raises(LS8FormatError, match="line 3"):
        parse_ls8(["00000001", "", "1002"])


def test_load_writes_memory_and_reports_region() -> None:
    ram = RAM()

    program = load_ls8(io.StringIO(SAMPLE), ram, start=0x10, name="print8")

    assert ram.snapshot()[0x10:0x16] == bytes([0x99, 0x00, 0x08, 0x43, 0x00, 0x01])
    assert program.name == "print8"
    assert program.source_format == "ls8"
    assert program.size == 6
    assert program.regions == [AddressRegion(0x10, 0x15)]
    assert program.regions[0].length() == 6


def test_program_larger_than_memory_is_rejected() -> None:
    lines = ["00000000"] * 257

    with pytest.raises(LS8FormatError):
        load_ls8(io.StringIO("\n".join(lines)), RAM())


def test_load_from_path_uses_file_stem(tmp_path) -> None:
    path = tmp_path / "halt.ls8"
    path.write_text("00000001\n", encoding="utf-8")
    ram = RAM()

    program = load_ls8_from_path(path, ram)

    assert program.name == "halt"
    assert ram.read(0) == 0x01


def test_non_text_file_is_a_format_error(tmp_path) -> None:
    path = tmp_path / "garbage.ls8"
    path.write_bytes(b"\xff\xfe10011001\n")

    with pytest.raises(LS8FormatError, match="garbage.ls8"):
        load_ls8_from_path(path, RAM())
