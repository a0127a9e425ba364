"""Console output and keyboard input for the LS-8 Python emulator."""

from .console import BufferConsole, Console, StreamConsole
from .keyboard import Keyboard, key_code

__all__ = [
    "BufferConsole",
    "Console",
    "StreamConsole",
    "Keyboard",
    "key_code",
]
