"""Tests for the pure ALU helpers."""

from __future__ import annotations

import pytest

from pyls8.cpu import AluOp, DivisionByZeroError
from pyls8.cpu.alu import UNARY_OPS, compare, compute
from pyls8.cpu.registers import FLAG_EQ, FLAG_GT, FLAG_LT


def test_results_wrap_to_eight_bits() -> None:
    assert compute(AluOp.ADD, 255, 1) == 0
    assert compute(AluOp.SUB, 0, 1) == 255
    assert compute(AluOp.MUL, 0x80, 2) == 0
    assert compute(AluOp.INC, 255) == 0
    assert compute(AluOp.DEC, 0) == 255
    assert compute(AluOp.NOT, 0) == 0xFF


def test_unary_ops_ignore_second_operand() -> None:
    for op in UNARY_OPS:
        assert compute(op, 0x10, 0x55) == compute(op, 0x10)


@pytest.mark.parametrize("op", [AluOp.DIV, AluOp.MOD])
def test_division_by_zero_raises(op: AluOp) -> None:
    with pytest.raises(DivisionByZeroError) as excinfo:
        compute(op, 10, 0)

    assert excinfo.value.operation == op.name


def test_cmp_goes_through_compare() -> None:
    with pytest.raises(ValueError):
        compute(AluOp.CMP, 1, 2)

    assert compare(5, 10) == FLAG_LT
    assert compare(10, 10) == FLAG_EQ
    assert compare(10, 5) == FLAG_GT
    assert compare(0x105, 5) == FLAG_EQ
