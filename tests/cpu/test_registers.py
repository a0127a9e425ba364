"""Tests for the LS-8 register file."""

from __future__ import annotations

import pytest

from pyls8.cpu import InvalidRegisterError, RegisterFile
from pyls8.cpu.registers import FLAG_EQ, FLAG_LT, IM, SP, STACK_TOP


def test_initial_values() -> None:
    regs = RegisterFile()

    assert regs.gp == [0, 0, 0, 0, 0, 0, 0, STACK_TOP]
    assert regs.sp == STACK_TOP
    assert regs.im == 0
    assert regs.interrupts_enabled


def test_write_masks_and_validates() -> None:
    regs = RegisterFile()
    regs.write(2, 0x1FF)

    assert regs.read(2) == 0xFF
    assert regs.read(2) == regs.read(2)
    with pytest.raises(InvalidRegisterError):
        regs.write(8, 1)
    with pytest.raises(InvalidRegisterError):
        regs.read(-1)


def test_im_and_sp_alias_general_registers() -> None:
    regs = RegisterFile()
    regs.im = 0x103
    regs.sp = -1

    assert regs.gp[IM] == 0x03
    assert regs.gp[SP] == 0xFF


def test_flags_and_reset() -> None:
    regs = RegisterFile()
    regs.set_flag(FLAG_LT, True)
    regs.set_flag(FLAG_EQ, True)
    regs.set_flag(FLAG_LT, False)
    assert regs.fl == FLAG_EQ

    regs.pc = 0x20
    regs.interrupt_status = 0x3
    regs.interrupts_enabled = False
    regs.reset()

    assert regs.fl == 0
    assert regs.pc == 0
    assert regs.interrupt_status == 0
    assert regs.interrupts_enabled
    assert regs.sp == STACK_TOP


def test_clone_is_independent() -> None:
    regs = RegisterFile()
    regs.write(0, 1)
    copy = regs.clone()
    copy.write(0, 2)

    assert regs.read(0) == 1
    assert copy.snapshot()["registers"][0] == 2
    assert "R0=01" in str(regs)
