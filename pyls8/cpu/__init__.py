"""CPU package for the LS-8 Python emulator."""

from .alu import AluOp
from .core import INTERRUPT_VECTOR_BASE, LS8, StepResult
from .errors import (
    CPUError,
    DivisionByZeroError,
    InvalidInterruptLineError,
    InvalidRegisterError,
    MachineFault,
    UnknownInstructionError,
)
from .registers import RegisterFile
from . import opcodes

__all__ = [
    "LS8",
    "StepResult",
    "RegisterFile",
    "AluOp",
    "INTERRUPT_VECTOR_BASE",
    "CPUError",
    "MachineFault",
    "InvalidRegisterError",
    "UnknownInstructionError",
    "DivisionByZeroError",
    "InvalidInterruptLineError",
    "opcodes",
]
