"""Output sinks for the PRN and PRA instructions.

The CPU hands each printed value to a console as one line of text. Consoles
are owned by the host, not by the CPU.
"""

from __future__ import annotations

import sys
from collections import deque
from typing import Deque, List, Optional, Protocol, TextIO


class Console(Protocol):
    """Line-oriented text sink."""

    def emit(self, text: str) -> None:  # pragma: no cover - interface
        ...


class StreamConsole:
    """Write each emitted line to a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def emit(self, text: str) -> None:
        # Resolve stdout lazily so redirections made after construction apply.
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(text + "\n")
        stream.flush()


class BufferConsole:
    """Keep the most recent lines in memory for tests and the window UI."""

    def __init__(self, capacity: int = 1000) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._lines: Deque[str] = deque(maxlen=capacity)
        self.version = 0

    def emit(self, text: str) -> None:
        self._lines.append(text)
        self.version += 1

    def lines(self) -> List[str]:
        return list(self._lines)

    def text(self) -> str:
        return "\n".join(self._lines)

    def clear(self) -> None:
        self._lines.clear()
        self.version += 1
