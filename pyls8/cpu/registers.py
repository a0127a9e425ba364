"""LS-8 register file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .errors import InvalidRegisterError

REGISTER_COUNT = 8
IM = 5
SP = 7
STACK_TOP = 0xF4

FLAG_EQ = 0b001
FLAG_GT = 0b010
FLAG_LT = 0b100


def _initial_registers() -> List[int]:
    registers = [0] * REGISTER_COUNT
    registers[SP] = STACK_TOP
    return registers


@dataclass
class RegisterFile:
    """General-purpose registers R0-R7 plus the special registers.

    R5 doubles as the interrupt mask (IM) and R7 as the stack pointer (SP).
    ``interrupt_status`` is the IS register; it lives outside R0-R7 so that
    saving and restoring R0-R6 around a handler never clobbers pending bits.
    """

    gp: List[int] = field(default_factory=_initial_registers)
    pc: int = 0
    ir: int = 0
    fl: int = 0
    interrupt_status: int = 0
    interrupts_enabled: bool = True

    def validate(self, index: int) -> int:
        if not 0 <= index < REGISTER_COUNT:
            raise InvalidRegisterError(index)
        return index

    def read(self, index: int) -> int:
        return self.gp[self.validate(index)]

    def write(self, index: int, value: int) -> None:
        self.gp[self.validate(index)] = value & 0xFF

    @property
    def im(self) -> int:
        return self.gp[IM]

    @im.setter
    def im(self, value: int) -> None:
        self.gp[IM] = value & 0xFF

    @property
    def sp(self) -> int:
        return self.gp[SP]

    @sp.setter
    def sp(self, value: int) -> None:
        self.gp[SP] = value & 0xFF

    def get_flag(self, flag: int) -> bool:
        return (self.fl & flag) != 0

    def set_flag(self, flag: int, enabled: bool) -> None:
        if enabled:
            self.fl |= flag
        else:
            self.fl &= ~flag & 0xFF

    def reset(self) -> None:
        self.gp[:] = _initial_registers()
        self.pc = 0
        self.ir = 0
        self.fl = 0
        self.interrupt_status = 0
        self.interrupts_enabled = True

    def clone(self) -> "RegisterFile":
        return RegisterFile(
            list(self.gp),
            self.pc,
            self.ir,
            self.fl,
            self.interrupt_status,
            self.interrupts_enabled,
        )

    def snapshot(self) -> dict:
        return {
            "registers": tuple(self.gp),
            "pc": self.pc,
            "ir": self.ir,
            "fl": self.fl,
            "is": self.interrupt_status,
            "im": self.im,
            "sp": self.sp,
            "interrupts_enabled": self.interrupts_enabled,
        }

    def __str__(self) -> str:
        regs = " ".join(f"R{index}={value:02X}" for index, value in enumerate(self.gp))
        return (
            f"PC={self.pc:02X} IR={self.ir:02X} FL={self.fl:03b} IS={self.interrupt_status:02X} "
            f"{regs} {'IE' if self.interrupts_enabled else 'ID'}"
        )
