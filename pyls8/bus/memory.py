"""Memory for the LS-8 Python emulator.

The LS-8 sees a flat, byte-addressable store. ``RAM`` wraps every address
modulo its size, so address arithmetic elsewhere in the emulator never has to
range check; values are masked to eight bits on the way in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from pyls8.utils.debug import debug_enabled, debug_log

ADDRESS_SPACE = 0x100


class MemoryError(Exception):
    """Raised when the memory system is misconfigured or used incorrectly."""


class AddressOutOfRangeError(MemoryError):
    """Raised when a store is too small to back the CPU's address space."""


class Addressable:
    """Interface for byte stores the CPU can be wired to."""

    size: int

    def read(self, address: int) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def write(self, address: int, value: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass
class RAM(Addressable):
    """Flat byte store with modulo-``size`` address wrap."""

    size: int = ADDRESS_SPACE

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise MemoryError(f"memory size must be positive, got {self.size}")
        self._data = bytearray(self.size)

    def read(self, address: int) -> int:
        addr = address % self.size
        value = self._data[addr]
        if debug_enabled("bus"):
            debug_log("bus", "read addr=%02x val=%02x", addr, value)
        return value

    def write(self, address: int, value: int) -> None:
        addr = address % self.size
        if debug_enabled("bus"):
            debug_log("bus", "write addr=%02x val=%02x", addr, value & 0xFF)
        self._data[addr] = value & 0xFF

    def load_image(self, data: Iterable[int], start: int = 0) -> int:
        """Copy ``data`` into memory from ``start`` and return the byte count."""

        payload = bytes(value & 0xFF for value in data)
        if len(payload) > self.size:
            raise MemoryError(f"image of {len(payload)} bytes does not fit in {self.size} bytes of memory")
        for offset, value in enumerate(payload):
            self._data[(start + offset) % self.size] = value
        return len(payload)

    def snapshot(self) -> bytes:
        return bytes(self._data)

    def clear(self) -> None:
        self._data[:] = bytes(self.size)
