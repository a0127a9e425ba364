"""Tests for opcode metadata and the dispatch table."""

from __future__ import annotations

import pytest

from pyls8.cpu.opcodes import (
    DEFAULT_INSTRUCTIONS,
    OPCODE_TABLE,
    Instruction,
    Opcode,
    OpcodeTable,
    format_instruction,
    operand_count,
)


def test_operand_count_comes_from_high_bits() -> None:
    assert operand_count(Opcode.HLT) == 0
    assert operand_count(Opcode.PRN) == 1
    assert operand_count(Opcode.LDI) == 2
    assert Instruction(Opcode.ADD, "op_add").size == 3


def test_table_covers_every_opcode() -> None:
    assert len(OPCODE_TABLE) == 256
    for opcode in Opcode:
        instruction = OPCODE_TABLE[opcode]
        assert instruction is not None
        assert instruction.mnemonic == opcode.name
    assert sum(entry is not None for entry in OPCODE_TABLE) == len(DEFAULT_INSTRUCTIONS)


def test_duplicate_registration_is_rejected() -> None:
    table = OpcodeTable()
    table.register(Instruction(Opcode.NOP, "op_nop"))

    with pytest.raises(ValueError):
        table.register(Instruction(Opcode.NOP, "op_other"))


def test_format_instruction() -> None:
    assert format_instruction(OPCODE_TABLE[Opcode.HLT], []) == "HLT"
    assert format_instruction(OPCODE_TABLE[Opcode.PUSH], [3]) == "PUSH R3"
    assert format_instruction(OPCODE_TABLE[Opcode.CMP], [0, 1]) == "CMP R0,R1"
    assert format_instruction(OPCODE_TABLE[Opcode.LDI], [2, 0xF8]) == "LDI R2,0xf8"
