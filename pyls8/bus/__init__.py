"""Bus-related helpers for the LS-8 Python emulator."""

from .memory import ADDRESS_SPACE, RAM, Addressable, AddressOutOfRangeError, MemoryError

__all__ = [
    "ADDRESS_SPACE",
    "Addressable",
    "AddressOutOfRangeError",
    "RAM",
    "MemoryError",
]
