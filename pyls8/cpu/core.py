"""LS-8 CPU core: dispatcher, stack discipline and interrupt controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from pyls8.bus import ADDRESS_SPACE, Addressable, AddressOutOfRangeError
from pyls8.io import Console, StreamConsole
from pyls8.utils import debug_enabled, debug_log

from .alu import AluOp, compare, compute
from .errors import CPUError, InvalidInterruptLineError, MachineFault, UnknownInstructionError
from .opcodes import OPCODE_TABLE, Instruction, format_instruction
from .registers import FLAG_EQ, FLAG_GT, FLAG_LT, RegisterFile

INTERRUPT_VECTOR_BASE = 0xF8
INTERRUPT_LINES = 8
SAVED_REGISTERS = tuple(range(7))

Handler = Callable[..., Optional[int]]


class StepResult(Enum):
    """Outcome of a single call to :meth:`LS8.step`."""

    CONTINUE = "continue"
    HALTED = "halted"


@dataclass
class LS8:
    """The LS-8 execution engine.

    Each :meth:`step` services at most one pending interrupt or executes one
    instruction. Fatal faults halt the engine with PC and IR still pointing at
    the failing instruction; nothing the instruction would have written is
    committed.
    """

    memory: Addressable
    console: Console = field(default_factory=StreamConsole)
    instruction_table: Sequence[Instruction | None] = field(default=OPCODE_TABLE)
    strict: bool = False

    state: RegisterFile = field(default_factory=RegisterFile)
    halted: bool = False
    fault: MachineFault | None = None
    cycle_count: int = 0
    serviced_interrupt: int | None = None

    def __post_init__(self) -> None:
        if self.memory.size != ADDRESS_SPACE:
            raise AddressOutOfRangeError(
                f"memory of {self.memory.size} bytes does not match the {ADDRESS_SPACE}-byte address space"
            )
        self._handlers = self._bind_handlers()

    def _bind_handlers(self) -> List[Handler | None]:
        handlers: List[Handler | None] = []
        for instruction in self.instruction_table:
            if instruction is None:
                handlers.append(None)
                continue
            handler = getattr(self, instruction.handler, None)
            if handler is None:
                raise CPUError(f"handler '{instruction.handler}' not implemented")
            handlers.append(handler)
        return handlers

    # ------------------------------------------------------------------
    # Host interface

    def reset(self) -> None:
        """Reset registers and execution status; memory is left untouched."""

        self.state.reset()
        self.halted = False
        self.fault = None
        self.cycle_count = 0
        self.serviced_interrupt = None

    def load_byte(self, address: int, value: int) -> None:
        self.memory.write(address, value)

    def load_program(self, program: Sequence[int], start: int = 0) -> int:
        for offset, value in enumerate(program):
            self.memory.write(start + offset, value)
        return len(program)

    def request_interrupt(self, line: int) -> None:
        """Latch interrupt ``line`` in IS; it fires once unmasked and armed."""

        if not 0 <= line < INTERRUPT_LINES:
            raise InvalidInterruptLineError(f"interrupt line {line} out of range (0-{INTERRUPT_LINES - 1})")
        self.state.interrupt_status |= 1 << line

    def step(self) -> StepResult:
        """Service one interrupt or execute one instruction."""

        if self.halted:
            return StepResult.HALTED

        self.serviced_interrupt = self._service_interrupts()
        if self.serviced_interrupt is not None:
            self.cycle_count += 1
            return StepResult.CONTINUE

        state = self.state
        pc = state.pc
        try:
            opcode = self._read(pc)
            state.ir = opcode
            instruction = self._decode(opcode, pc)
            operands = [self._read(pc + 1 + offset) for offset in range(instruction.operand_count)]
            if debug_enabled("cpu"):
                debug_log("cpu", "pc=%02x ir=%02x %s", pc, opcode, format_instruction(instruction, operands))
            next_pc = self._handlers[opcode](*operands)
        except MachineFault as exc:
            self._halt_on_fault(exc)
            return StepResult.HALTED

        self.cycle_count += 1
        if self.halted:
            return StepResult.HALTED
        if next_pc is None:
            next_pc = pc + instruction.size
        state.pc = next_pc % self.memory.size
        return StepResult.CONTINUE

    def alu(self, op: AluOp, reg_a: int, reg_b: int | None = None) -> None:
        """Apply ``op`` to ``reg_a`` (and ``reg_b``), writing back to ``reg_a``.

        CMP writes the flags register instead. The destination is left as is
        when the operation raises.
        """

        state = self.state
        value_a = state.read(reg_a)
        value_b = state.read(reg_b) if reg_b is not None else 0
        if op is AluOp.CMP:
            state.fl = compare(value_a, value_b)
            return
        state.write(reg_a, compute(op, value_a, value_b))

    def disassemble(self, address: int) -> tuple[str, int]:
        """Return the assembler text and byte size of the instruction at ``address``."""

        opcode = self._read(address)
        instruction = self.instruction_table[opcode]
        if instruction is None:
            return f".byte {opcode:#04x}", 1
        operands = [self._read(address + 1 + offset) for offset in range(instruction.operand_count)]
        return format_instruction(instruction, operands), instruction.size

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_nop(self) -> None:
        """No operation."""

        return None

    def op_hlt(self) -> None:
        self.halted = True
        if debug_enabled("cpu"):
            debug_log("cpu", "halt pc=%02x", self.state.pc)

    def op_call(self, reg: int) -> int:
        target = self.state.read(reg)
        self._push(self.state.pc + 2)
        return target

    def op_ret(self) -> int:
        return self._pop()

    def op_int(self, reg: int) -> None:
        line = self.state.read(reg) % INTERRUPT_LINES
        self.state.interrupt_status |= 1 << line
        if debug_enabled("irq"):
            debug_log("irq", "software interrupt line=%d is=%02x", line, self.state.interrupt_status)

    def op_iret(self) -> int:
        state = self.state
        for index in reversed(SAVED_REGISTERS):
            state.write(index, self._pop())
        state.fl = self._pop()
        return_address = self._pop()
        state.interrupts_enabled = True
        if debug_enabled("irq"):
            debug_log("irq", "iret pc=%02x", return_address)
        return return_address

    def op_push(self, reg: int) -> None:
        self._push(self.state.read(reg))

    def op_pop(self, reg: int) -> None:
        self.state.validate(reg)
        self.state.write(reg, self._pop())

    def op_prn(self, reg: int) -> None:
        self.console.emit(str(self.state.read(reg)))

    def op_pra(self, reg: int) -> None:
        self.console.emit(chr(self.state.read(reg)))

    def op_jmp(self, reg: int) -> int:
        return self.state.read(reg)

    def op_jeq(self, reg: int) -> int | None:
        return self._jump_if(self.state.get_flag(FLAG_EQ), reg)

    def op_jne(self, reg: int) -> int | None:
        return self._jump_if(not self.state.get_flag(FLAG_EQ), reg)

    def op_jgt(self, reg: int) -> int | None:
        return self._jump_if(self.state.get_flag(FLAG_GT), reg)

    def op_jlt(self, reg: int) -> int | None:
        return self._jump_if(self.state.get_flag(FLAG_LT), reg)

    def op_ldi(self, reg: int, immediate: int) -> None:
        self.state.write(reg, immediate)

    def op_ld(self, reg_a: int, reg_b: int) -> None:
        address = self.state.read(reg_b)
        self.state.validate(reg_a)
        self.state.write(reg_a, self._read(address))

    def op_st(self, reg_a: int, reg_b: int) -> None:
        self._write(self.state.read(reg_a), self.state.read(reg_b))

    def op_add(self, reg_a: int, reg_b: int) -> None:
        self.alu(AluOp.ADD, reg_a, reg_b)

    def op_sub(self, reg_a: int, reg_b: int) -> None:
        self.alu(AluOp.SUB, reg_a, reg_b)

    def op_mul(self, reg_a: int, reg_b: int) -> None:
        self.alu(AluOp.MUL, reg_a, reg_b)

    def op_div(self, reg_a: int, reg_b: int) -> None:
        self.alu(AluOp.DIV, reg_a, reg_b)

    def op_mod(self, reg_a: int, reg_b: int) -> None:
        self.alu(AluOp.MOD, reg_a, reg_b)

    def op_and(self, reg_a: int, reg_b: int) -> None:
        self.alu(AluOp.AND, reg_a, reg_b)

    def op_or(self, reg_a: int, reg_b: int) -> None:
        self.alu(AluOp.OR, reg_a, reg_b)

    def op_xor(self, reg_a: int, reg_b: int) -> None:
        self.alu(AluOp.XOR, reg_a, reg_b)

    def op_cmp(self, reg_a: int, reg_b: int) -> None:
        self.alu(AluOp.CMP, reg_a, reg_b)

    def op_inc(self, reg: int) -> None:
        self.alu(AluOp.INC, reg)

    def op_dec(self, reg: int) -> None:
        self.alu(AluOp.DEC, reg)

    def op_not(self, reg: int) -> None:
        self.alu(AluOp.NOT, reg)

    # ------------------------------------------------------------------
    # Interrupt controller

    def _service_interrupts(self) -> int | None:
        state = self.state
        if not state.interrupts_enabled:
            return None
        pending = state.interrupt_status & state.im
        if not pending:
            return None

        line = next(bit for bit in range(INTERRUPT_LINES) if pending & (1 << bit))
        state.interrupts_enabled = False
        state.interrupt_status &= ~(1 << line) & 0xFF

        self._push(state.pc)
        self._push(state.fl)
        for index in SAVED_REGISTERS:
            self._push(state.read(index))

        return_address = state.pc
        state.pc = self._read(INTERRUPT_VECTOR_BASE + line)
        if debug_enabled("irq"):
            debug_log("irq", "service line=%d from=%02x vector=%02x", line, return_address, state.pc)
        return line

    # ------------------------------------------------------------------
    # Stack helpers

    def _push(self, value: int) -> None:
        state = self.state
        state.sp = state.sp - 1
        self._write(state.sp, value)

    def _pop(self) -> int:
        state = self.state
        value = self._read(state.sp)
        state.sp = state.sp + 1
        return value

    # ------------------------------------------------------------------
    # Helpers

    def _jump_if(self, condition: bool, reg: int) -> int | None:
        target = self.state.read(reg)
        return target if condition else None

    def _decode(self, opcode: int, pc: int) -> Instruction:
        instruction = self.instruction_table[opcode]
        if instruction is None:
            raise UnknownInstructionError(opcode, pc)
        return instruction

    def _halt_on_fault(self, exc: MachineFault) -> None:
        self.halted = True
        self.fault = exc
        if debug_enabled("cpu"):
            debug_log("cpu", "fault pc=%02x ir=%02x: %s", self.state.pc, self.state.ir, exc)
        if self.strict:
            raise exc

    def _read(self, address: int) -> int:
        return self.memory.read(address % self.memory.size)

    def _write(self, address: int, value: int) -> None:
        self.memory.write(address % self.memory.size, value)
