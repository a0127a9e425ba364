"""Arithmetic/logic unit for the LS-8.

The functions here are pure: they take register values and return a result
byte (or, for CMP, a flags byte). Writing results back into the register file
is the CPU core's job, which keeps a failed DIV or MOD from touching its
destination register.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable, Mapping

from .errors import DivisionByZeroError
from .registers import FLAG_EQ, FLAG_GT, FLAG_LT

BYTE_MASK = 0xFF


class AluOp(Enum):
    """Operations the ALU can perform."""

    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    MOD = auto()
    INC = auto()
    DEC = auto()
    AND = auto()
    OR = auto()
    XOR = auto()
    NOT = auto()
    CMP = auto()


UNARY_OPS = frozenset({AluOp.INC, AluOp.DEC, AluOp.NOT})


def _div(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZeroError(AluOp.DIV.name)
    return a // b


def _mod(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZeroError(AluOp.MOD.name)
    return a % b


_OPERATIONS: Mapping[AluOp, Callable[[int, int], int]] = {
    AluOp.ADD: lambda a, b: a + b,
    AluOp.SUB: lambda a, b: a - b,
    AluOp.MUL: lambda a, b: a * b,
    AluOp.DIV: _div,
    AluOp.MOD: _mod,
    AluOp.INC: lambda a, _: a + 1,
    AluOp.DEC: lambda a, _: a - 1,
    AluOp.AND: lambda a, b: a & b,
    AluOp.OR: lambda a, b: a | b,
    AluOp.XOR: lambda a, b: a ^ b,
    AluOp.NOT: lambda a, _: ~a,
}

_unhandled = set(AluOp) - set(_OPERATIONS) - {AluOp.CMP}
if _unhandled:
    raise RuntimeError(f"ALU operations without a handler: {sorted(op.name for op in _unhandled)}")


def compute(op: AluOp, a: int, b: int = 0) -> int:
    """Return the 8-bit result of ``a op b``.

    Unary operations ignore ``b``. CMP produces flags rather than a value and
    must go through :func:`compare`.

    Raises:
        DivisionByZeroError: DIV or MOD with ``b == 0``.
    """

    if op is AluOp.CMP:
        raise ValueError("CMP does not produce a register value; use compare()")
    return _OPERATIONS[op](a & BYTE_MASK, b & BYTE_MASK) & BYTE_MASK


def compare(a: int, b: int) -> int:
    """Return the flags byte for an unsigned comparison of ``a`` with ``b``."""

    a &= BYTE_MASK
    b &= BYTE_MASK
    if a == b:
        return FLAG_EQ
    if a > b:
        return FLAG_GT
    return FLAG_LT
