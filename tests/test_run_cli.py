"""Headless command-line runs through ``run.main``."""

from __future__ import annotations

import pytest

import run

MULT_LS8 = "\n".join(
    [
        "10011001",
        "00000000",
        "00001000",
        "10011001",
        "00000001",
        "00001001",
        "10101010",
        "00000000",
        "00000001",
        "01000011",
        "00000000",
        "00000001",
    ]
)


def test_headless_run_prints_output_and_exits_zero(tmp_path, capsys) -> None:
    path = tmp_path / "mult.ls8"
    path.write_text(MULT_LS8)

    assert run.main([str(path)]) == 0

    assert capsys.readouterr().out == "72\n"


def test_fault_exits_with_status_one(tmp_path, capsys) -> None:
    path = tmp_path / "bad.bin"
    path.write_bytes(bytes([0x99, 0x00, 0x01, 0xAB, 0x00, 0x01]))

    with pytest.raises(SystemExit) as excinfo:
        run.main([str(path)])

    assert excinfo.value.code == 1
    assert "division by zero" in capsys.readouterr().err


def test_step_limit_exits_with_status_one(tmp_path, capsys) -> None:
    path = tmp_path / "spin.bin"
    path.write_bytes(bytes([0x99, 0x00, 0x00, 0x50, 0x00]))

    with pytest.raises(SystemExit) as excinfo:
        run.main([str(path), "--max-steps", "20"])

    assert excinfo.value.code == 1
    assert "step limit" in capsys.readouterr().err


def test_malformed_program_is_reported(tmp_path, capsys) -> None:
    path = tmp_path / "bad.ls8"
    path.write_text("00000001\nnot-binary\n")

    with pytest.raises(SystemExit) as excinfo:
        run.main([str(path)])

    assert excinfo.value.code == 1
    assert "line 2" in capsys.readouterr().err


def test_trace_is_written_to_stderr(tmp_path, capsys) -> None:
    path = tmp_path / "halt.bin"
    path.write_bytes(bytes([0x00, 0x01]))

    assert run.main([str(path), "--trace", "4", "--format", "bin"]) == 0

    err = capsys.readouterr().err
    assert "NOP" in err
    assert "flags=HALT,halted" in err


def test_missing_program_is_a_usage_error(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run.main([str(tmp_path / "missing.ls8")])

    assert excinfo.value.code == 2


def test_undecodable_program_exits_with_status_one(tmp_path, capsys) -> None:
    path = tmp_path / "garbage.ls8"
    path.write_bytes(b"\xff\xfe10011001\n")

    with pytest.raises(SystemExit) as excinfo:
        run.main([str(path)])

    assert excinfo.value.code == 1
    assert "not a text file" in capsys.readouterr().err
