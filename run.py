"""Command-line entry point for the LS-8 emulator.

Runs a program headless by default, printing its output to stdout. Pass
``--ui`` to open the pygame console window instead.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pyls8.cpu import MachineFault
from pyls8.io import StreamConsole
from pyls8.loader import FORMATS, BinaryImageError, LS8FormatError
from pyls8.system import MachineConfig, create_machine
from pyls8.ui.app import AppConfig, LS8App
from pyls8.video import PALETTES


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="LS-8 emulator (Python)",
    )
    parser.add_argument(
        "program",
        type=Path,
        help="Path to an .ls8 text program or a raw binary image",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default="auto",
        help="Program format; auto picks by file suffix (default: auto)",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Stop after this many steps when the program has not halted",
    )
    parser.add_argument(
        "--timer",
        action="store_true",
        help="Raise the timer interrupt (line 0) once per second",
    )
    parser.add_argument(
        "--trace",
        type=int,
        default=0,
        metavar="N",
        help="Keep the last N steps and print them to stderr when the run ends",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Raise machine faults instead of halting quietly",
    )
    parser.add_argument(
        "--ui",
        action="store_true",
        help="Open the pygame console window",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=2,
        help="Integer window scale factor (default: 2)",
    )
    parser.add_argument(
        "--clock-hz",
        type=int,
        default=600,
        help="Instructions per second in the window UI (default: 600)",
    )
    parser.add_argument(
        "--palette",
        choices=sorted(PALETTES),
        default="mono",
        help="Window colour scheme (default: mono)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.program.exists():
        parser.error(f"Program file not found: {args.program}")
    if args.max_steps is not None and args.max_steps < 0:
        parser.error("--max-steps must not be negative")
    if args.trace < 0:
        parser.error("--trace must not be negative")

    if args.ui:
        return _run_ui(parser, args)
    return _run_headless(parser, args)


def _run_ui(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.clock_hz <= 0:
        parser.error("--clock-hz must be positive")
    config = AppConfig(
        program_path=args.program,
        program_format=args.format,
        scale=args.scale,
        clock_hz=args.clock_hz,
        palette=PALETTES[args.palette],
        enable_timer=args.timer,
        strict=args.strict,
    )
    app = LS8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


def _run_headless(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    machine = create_machine(
        MachineConfig(
            strict=args.strict,
            enable_timer=args.timer,
            trace_capacity=args.trace,
        ),
        console=StreamConsole(),
    )
    try:
        machine.load_program_file(args.program, args.format)
    except (LS8FormatError, BinaryImageError) as exc:
        parser.exit(1, f"run.py: failed to load {args.program}: {exc}\n")

    try:
        machine.run(args.max_steps)
    except MachineFault as exc:
        _dump_trace(machine)
        parser.exit(1, f"run.py: machine fault: {exc}\n")

    _dump_trace(machine)
    if machine.cpu.fault is not None:
        parser.exit(1, f"run.py: machine fault: {machine.cpu.fault}\n")
    if not machine.halted:
        parser.exit(1, f"run.py: step limit reached without HLT (pc={machine.cpu.state.pc:#04x})\n")
    return 0


def _dump_trace(machine) -> None:
    if machine.trace is None:
        return
    for line in machine.trace.format_entries():
        print(line, file=sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
