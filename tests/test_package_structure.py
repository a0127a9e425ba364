"""Baseline tests ensuring the package layout loads correctly."""

import pyls8


def test_package_exports() -> None:
    for name in ("cpu", "bus", "io", "loader", "system", "video", "ui", "utils"):
        assert hasattr(pyls8, name), f"missing submodule: {name}"


def test_bus_exports() -> None:
    from pyls8 import bus

    for name in ("RAM", "Addressable", "AddressOutOfRangeError", "ADDRESS_SPACE"):
        assert hasattr(bus, name), f"bus missing symbol: {name}"


def test_cpu_exports() -> None:
    from pyls8 import cpu

    for name in ("LS8", "StepResult", "RegisterFile", "MachineFault", "UnknownInstructionError"):
        assert hasattr(cpu, name), f"cpu missing symbol: {name}"
