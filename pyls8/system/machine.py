"""LS-8 machine assembly and host step loop."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from pyls8.bus import RAM
from pyls8.cpu import LS8, RegisterFile, StepResult
from pyls8.io import BufferConsole, Console, Keyboard
from pyls8.loader import ProgramImage, load_program_from_path
from pyls8.utils import TraceRecorder, debug_enabled, debug_log

TIMER_INTERRUPT = 0
KEYBOARD_INTERRUPT = 1
KEYBOARD_ADDRESS = 0xF4


@dataclass
class MachineConfig:
    """Runtime configuration for the LS-8 machine."""

    strict: bool = False
    enable_timer: bool = False
    timer_period: float = 1.0
    scrollback: int = 1000
    trace_capacity: int = 0
    clock: Callable[[], float] = time.monotonic


class IntervalTimer:
    """Raises the timer line once per ``period`` seconds of host time."""

    def __init__(self, period: float, clock: Callable[[], float] = time.monotonic) -> None:
        if period <= 0:
            raise ValueError("timer period must be positive")
        self.period = period
        self._clock = clock
        self._deadline = clock() + period

    def poll(self) -> bool:
        """Return ``True`` when the period elapsed since the last tick."""

        now = self._clock()
        if now < self._deadline:
            return False
        # Skip missed ticks instead of bursting them.
        while self._deadline <= now:
            self._deadline += self.period
        return True

    def restart(self) -> None:
        self._deadline = self._clock() + self.period


@dataclass
class Machine:
    """Aggregates the components of an LS-8 computer."""

    memory: RAM
    cpu: LS8
    console: Console
    keyboard: Keyboard
    timer: Optional[IntervalTimer] = None
    trace: Optional[TraceRecorder] = None
    program: Optional[ProgramImage] = field(default=None)

    @property
    def halted(self) -> bool:
        return self.cpu.halted

    def reset(self) -> None:
        """Reset CPU state; memory and the loaded program are kept."""

        self.cpu.reset()
        self.keyboard.reset()
        if self.timer is not None:
            self.timer.restart()
        if self.trace is not None:
            self.trace.clear()

    def load_program_file(self, path: Path, fmt: str = "auto") -> ProgramImage:
        """Clear memory, load ``path`` at address 0 and reset the CPU."""

        self.memory.clear()
        self.program = load_program_from_path(path, self.memory, fmt=fmt)
        self.reset()
        if debug_enabled("machine"):
            debug_log(
                "machine",
                "loaded name=%s format=%s bytes=%d",
                self.program.name,
                self.program.source_format,
                self.program.size,
            )
        return self.program

    def key_pressed(self, code: int) -> None:
        """Store ``code`` at the keyboard address and raise the keyboard line."""

        self.memory.write(KEYBOARD_ADDRESS, code)
        self.cpu.request_interrupt(KEYBOARD_INTERRUPT)

    def step(self) -> StepResult:
        """Poll interrupt sources, then advance the CPU by one step."""

        if self.timer is not None and not self.cpu.halted and self.timer.poll():
            self.cpu.request_interrupt(TIMER_INTERRUPT)

        if self.trace is None or self.cpu.halted:
            return self.cpu.step()

        before = self.cpu.state.clone()
        mnemonic, _ = self.cpu.disassemble(before.pc)
        opcode = self.memory.read(before.pc)
        result: StepResult | None = None
        try:
            result = self.cpu.step()
        finally:
            self._record_trace(before, opcode, mnemonic, result)
        return result

    def run(self, max_steps: int | None = None) -> int:
        """Step until halted or ``max_steps`` is reached; return the step count."""

        steps = 0
        while not self.cpu.halted:
            if max_steps is not None and steps >= max_steps:
                break
            self.step()
            steps += 1
        if debug_enabled("machine"):
            debug_log("machine", "run stopped steps=%d halted=%s", steps, self.cpu.halted)
        return steps

    def _record_trace(self, before: RegisterFile, opcode: int, mnemonic: str, result: StepResult | None) -> None:
        cpu = self.cpu
        if cpu.serviced_interrupt is not None and result is StepResult.CONTINUE:
            self.trace.record_step(
                before, None, halted=False, mnemonic="<irq>", note=f"irq{cpu.serviced_interrupt}"
            )
            return

        note = ""
        if cpu.fault is not None:
            note = "fault"
        elif cpu.halted:
            note = "halted"
        self.trace.record_step(before, opcode, halted=cpu.halted, mnemonic=mnemonic, note=note)


def create_machine(config: MachineConfig | None = None, console: Console | None = None) -> Machine:
    """Instantiate an LS-8 machine with the requested configuration."""

    config = config or MachineConfig()
    memory = RAM()
    if console is None:
        console = BufferConsole(config.scrollback)
    cpu = LS8(memory, console=console, strict=config.strict)

    timer = IntervalTimer(config.timer_period, config.clock) if config.enable_timer else None
    trace = TraceRecorder(config.trace_capacity) if config.trace_capacity > 0 else None

    machine = Machine(
        memory=memory,
        cpu=cpu,
        console=console,
        keyboard=Keyboard(),
        timer=timer,
        trace=trace,
    )
    machine.keyboard.add_listener(machine.key_pressed)
    return machine
