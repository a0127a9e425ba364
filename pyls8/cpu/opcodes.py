"""Opcode metadata for the LS-8 instruction set.

Bits 7-6 of every opcode give the number of operand bytes that follow it, so
the dispatcher can advance the program counter without knowing what the
instruction does.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Final, Iterable, List, Sequence


class Opcode(IntEnum):
    """Every instruction the LS-8 understands."""

    NOP = 0b00000000
    HLT = 0b00000001
    RET = 0b00001001
    IRET = 0b00001011
    PRA = 0b01000010
    PRN = 0b01000011
    CALL = 0b01001000
    INT = 0b01001010
    POP = 0b01001100
    PUSH = 0b01001101
    JMP = 0b01010000
    JEQ = 0b01010001
    JNE = 0b01010010
    JLT = 0b01010011
    JGT = 0b01010100
    NOT = 0b01110000
    INC = 0b01111000
    DEC = 0b01111001
    LD = 0b10011000
    LDI = 0b10011001
    ST = 0b10011010
    CMP = 0b10100000
    ADD = 0b10101000
    SUB = 0b10101001
    MUL = 0b10101010
    DIV = 0b10101011
    MOD = 0b10101100
    OR = 0b10110001
    XOR = 0b10110010
    AND = 0b10110011


def operand_count(opcode: int) -> int:
    """Number of operand bytes encoded in the two high bits of ``opcode``."""

    return (opcode >> 6) & 0b11


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single LS-8 opcode."""

    opcode: Opcode
    handler: str
    immediate: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.opcode <= 0xFF:
            raise ValueError(f"opcode out of range: {self.opcode}")
        if self.operand_count > 2:
            raise ValueError(f"{self.mnemonic}: LS-8 instructions take at most two operands")

    @property
    def mnemonic(self) -> str:
        return self.opcode.name

    @property
    def operand_count(self) -> int:
        return operand_count(self.opcode)

    @property
    def size(self) -> int:
        return self.operand_count + 1


class OpcodeTable:
    """Mutable builder for the 256-entry instruction table."""

    _TABLE_SIZE: Final[int] = 0x100

    def __init__(self) -> None:
        self._table: List[Instruction | None] = [None] * self._TABLE_SIZE

    def register(self, instruction: Instruction) -> None:
        opcode = instruction.opcode
        existing = self._table[opcode]
        if existing is not None:
            raise ValueError(f"opcode {opcode:#04x} already registered as {existing.mnemonic}")
        self._table[opcode] = instruction

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[Instruction | None]:
        return tuple(self._table)


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[Instruction | None]:
    """Build a 256-entry instruction lookup table."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


def format_instruction(instruction: Instruction, operands: Sequence[int]) -> str:
    """Render ``instruction`` with its operand bytes in assembler syntax."""

    if instruction.operand_count == 0:
        return instruction.mnemonic
    rendered = [f"R{operands[0]}"]
    if instruction.operand_count == 2:
        if instruction.immediate:
            rendered.append(f"{operands[1]:#04x}")
        else:
            rendered.append(f"R{operands[1]}")
    return f"{instruction.mnemonic} {','.join(rendered)}"


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(Opcode.NOP, "op_nop"),
    Instruction(Opcode.HLT, "op_hlt"),
    # Subroutines and interrupts
    Instruction(Opcode.CALL, "op_call"),
    Instruction(Opcode.RET, "op_ret"),
    Instruction(Opcode.INT, "op_int"),
    Instruction(Opcode.IRET, "op_iret"),
    # Stack
    Instruction(Opcode.PUSH, "op_push"),
    Instruction(Opcode.POP, "op_pop"),
    # Output
    Instruction(Opcode.PRN, "op_prn"),
    Instruction(Opcode.PRA, "op_pra"),
    # Jumps
    Instruction(Opcode.JMP, "op_jmp"),
    Instruction(Opcode.JEQ, "op_jeq"),
    Instruction(Opcode.JNE, "op_jne"),
    Instruction(Opcode.JGT, "op_jgt"),
    Instruction(Opcode.JLT, "op_jlt"),
    # Loads and stores
    Instruction(Opcode.LDI, "op_ldi", immediate=True),
    Instruction(Opcode.LD, "op_ld"),
    Instruction(Opcode.ST, "op_st"),
    # ALU
    Instruction(Opcode.ADD, "op_add"),
    Instruction(Opcode.SUB, "op_sub"),
    Instruction(Opcode.MUL, "op_mul"),
    Instruction(Opcode.DIV, "op_div"),
    Instruction(Opcode.MOD, "op_mod"),
    Instruction(Opcode.INC, "op_inc"),
    Instruction(Opcode.DEC, "op_dec"),
    Instruction(Opcode.AND, "op_and"),
    Instruction(Opcode.OR, "op_or"),
    Instruction(Opcode.XOR, "op_xor"),
    Instruction(Opcode.NOT, "op_not"),
    Instruction(Opcode.CMP, "op_cmp"),
)


OPCODE_TABLE: Sequence[Instruction | None] = build_instruction_table(DEFAULT_INSTRUCTIONS)
