"""Exception hierarchy for the LS-8 CPU."""

from __future__ import annotations


class CPUError(Exception):
    """Base error for CPU-related failures."""


class MachineFault(CPUError):
    """Fatal condition that halts the engine at the failing instruction."""


class InvalidRegisterError(MachineFault):
    """Raised when an operand names a register outside R0-R7."""

    def __init__(self, index: int) -> None:
        super().__init__(f"invalid register index {index} (expected 0-7)")
        self.index = index


class UnknownInstructionError(MachineFault):
    """Raised when the fetched byte has no entry in the dispatch table."""

    def __init__(self, opcode: int, pc: int) -> None:
        super().__init__(f"unknown instruction {opcode:#010b} ({opcode:#04x}) at pc={pc:#04x}")
        self.opcode = opcode
        self.pc = pc


class DivisionByZeroError(MachineFault):
    """Raised by DIV and MOD when the divisor register holds zero."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation}: division by zero")
        self.operation = operation


class InvalidInterruptLineError(CPUError):
    """Raised when a host requests an interrupt line outside 0-7."""
