"""Pygame front-end for the LS-8 emulator."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

from pyls8.cpu import MachineFault
from pyls8.io import BufferConsole
from pyls8.loader import BinaryImageError, LS8FormatError
from pyls8.system import Machine, MachineConfig, create_machine
from pyls8.utils import debug_enabled, debug_log
from pyls8.video import MONOCHROME, Renderer

_FRAME_RATE = 60
_TRACE_CAPACITY = 512


@dataclass
class AppConfig:
    """Configuration for the LS-8 window front-end."""

    program_path: Optional[Path] = None
    program_format: str = "auto"
    scale: int = 2
    clock_hz: int = 600
    columns: int = 40
    rows: int = 20
    palette: Sequence[Tuple[int, int, int]] = MONOCHROME
    enable_timer: bool = True
    strict: bool = False


class LS8App:
    """Steps a machine at the configured clock rate and shows its output."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._running = False
        self._console = BufferConsole(max(config.rows * 4, 64))
        trace_capacity = _TRACE_CAPACITY if debug_enabled("trace") else 0
        self._machine = create_machine(
            MachineConfig(
                strict=config.strict,
                enable_timer=config.enable_timer,
                trace_capacity=trace_capacity,
            ),
            console=self._console,
        )
        self._renderer = Renderer(config.columns, config.rows, config.palette)
        self._status = "ready"
        self._perf_enabled = debug_enabled("perf")
        self._perf_frame = 0

    @property
    def machine(self) -> Machine:
        return self._machine

    @property
    def status(self) -> str:
        return self._status

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        machine = self._machine
        if self._config.program_path is not None:
            self._load_program(machine, self._config.program_path)

        pygame.init()
        pygame.display.set_caption("LS-8")
        frame = self._renderer.render(self._console.lines(), scale=self._config.scale)
        screen = pygame.display.set_mode((frame.width, frame.height))
        clock = pygame.time.Clock()
        self._running = True
        drawn_version = -1
        shown_status = ""

        while self._running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    self._enter_debug_shell(machine)
                    pygame.event.clear()
                elif event.type == pygame.KEYDOWN:
                    self._handle_key_event(pygame.key.name(event.key), getattr(event, "unicode", ""))

            frame_start = time.perf_counter()
            executed = self._step_cpu(machine)

            if self._console.version != drawn_version:
                drawn_version = self._console.version
                frame = self._renderer.render(self._console.lines(), scale=self._config.scale)
                screen.blit(frame.to_surface(), (0, 0))
                pygame.display.flip()
            if self._status != shown_status:
                shown_status = self._status
                pygame.display.set_caption(f"LS-8 [{shown_status}]")

            if self._perf_enabled:
                self._perf_frame += 1
                debug_log(
                    "perf",
                    "frame=%d steps=%d frame_ms=%.3f",
                    self._perf_frame,
                    executed,
                    (time.perf_counter() - frame_start) * 1000.0,
                )
            clock.tick(_FRAME_RATE)

        pygame.quit()

    def _handle_key_event(self, name: str, text: str = "") -> None:
        if len(text) == 1 and 0x20 < ord(text) < 0x7F:
            name = text
        code = self._machine.keyboard.press(name)
        if code is None and debug_enabled("input"):
            debug_log("input", "ignored=%s", name)

    def _steps_per_frame(self) -> int:
        return max(1, self._config.clock_hz // _FRAME_RATE)

    def _step_cpu(self, machine: Machine) -> int:
        if machine.halted:
            return 0
        try:
            executed = machine.run(self._steps_per_frame())
        except MachineFault as exc:
            self._status = f"fault: {exc}"
            self._running = False
            raise RuntimeError(f"Machine fault: {exc}") from exc

        if machine.cpu.fault is not None:
            self._status = f"fault: {machine.cpu.fault}"
            debug_log("machine", "fault pc=%02x %s", machine.cpu.state.pc, machine.cpu.fault)
            if machine.trace is not None:
                machine.trace.dump("trace", limit=32)
        elif machine.halted:
            self._status = "halted"
        else:
            self._status = "running"
        return executed

    def _load_program(self, machine: Machine, program_path: Path) -> None:
        try:
            machine.load_program_file(program_path, self._config.program_format)
        except FileNotFoundError as exc:
            raise RuntimeError(f"Program file not found: {program_path}") from exc
        except (LS8FormatError, BinaryImageError) as exc:
            raise RuntimeError(f"Failed to load program {program_path}: {exc}") from exc
        self._console.clear()
        self._status = "loaded"

    # ------------------------------------------------------------------
    # Debug shell

    def _enter_debug_shell(self, machine: Machine) -> None:
        print("\n=== LS-8 Debug Menu ===")
        print("Enter command: [c]pu, [m]em, [d]isassemble, [t]race, [q]uit, [Enter] resume")

        paused = True
        while paused and self._running:
            try:
                command = input("debug> ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                print("Resuming emulator.")
                break

            if command == "" or command == "resume":
                paused = False
            elif command in {"c", "cpu"}:
                self._dump_cpu(machine)
            elif command in {"t", "trace"}:
                self._dump_trace(machine)
            elif command.startswith("m"):
                arg = command[1:].strip()
                self._dump_memory(machine, arg if arg else None)
            elif command.startswith("d"):
                arg = command[1:].strip()
                self._disassemble(machine, arg if arg else None)
            elif command in {"q", "quit", "exit"}:
                print("Exiting emulator.")
                self._running = False
                paused = False
            else:
                print("Commands: [Enter]=resume, [c]pu, [m]em, [d]isassemble, [t]race, [q]uit")

    def _dump_cpu(self, machine: Machine) -> None:
        print(machine.cpu.state)
        fault = machine.cpu.fault
        print(f"halted={machine.halted} cycles={machine.cpu.cycle_count} fault={fault if fault else '-'}")

    def _dump_trace(self, machine: Machine, limit: int = 64) -> None:
        if machine.trace is None:
            print("Trace recorder is disabled. Set LS8_DEBUG=trace to enable it.")
            return
        lines = list(machine.trace.format_entries(limit))
        if not lines:
            print("Trace buffer is empty.")
            return
        print("Last trace entries:")
        for line in lines:
            print(f"  {line}")

    def _dump_memory(self, machine: Machine, arg: str | None = None) -> None:
        try:
            start, length = _parse_range(arg, default_start=0, default_length=0x40)
        except ValueError:
            print("Usage: m [start_hex] [length]")
            return
        if length <= 0:
            print("Length must be positive.")
            return

        memory = machine.memory
        end = start + length
        for addr in range(start, end, 16):
            chunk = [memory.read(addr + offset) for offset in range(16) if addr + offset < end]
            hex_part = " ".join(f"{value:02X}" for value in chunk)
            print(f"{addr % memory.size:02X}: {hex_part}")

    def _disassemble(self, machine: Machine, arg: str | None = None) -> None:
        try:
            address, count = _parse_range(arg, default_start=machine.cpu.state.pc, default_length=8)
        except ValueError:
            print("Usage: d [start_hex] [count]")
            return
        for _ in range(max(count, 0)):
            address %= machine.memory.size
            text, size = machine.cpu.disassemble(address)
            raw = " ".join(f"{machine.memory.read(address + offset):02X}" for offset in range(size))
            marker = ">" if address == machine.cpu.state.pc else " "
            print(f"{marker}{address:02X}: {raw:<8} {text}")
            address += size


def _parse_range(arg: str | None, *, default_start: int, default_length: int) -> tuple[int, int]:
    if not arg:
        return default_start, default_length
    parts = arg.split()
    start = int(parts[0], 16)
    length = int(parts[1], 0) if len(parts) > 1 else default_length
    return start, length
