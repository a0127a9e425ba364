"""Keyboard handling for the LS-8 keyboard interrupt.

Host key names (as reported by pygame) are translated to the byte the program
reads from the keyboard address. Listeners receive the code of every press.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping

from pyls8.utils import debug_enabled, debug_log


SPECIAL_KEYS: Mapping[str, int] = {
    "space": 0x20,
    "return": 0x0D,
    "enter": 0x0D,
    "backspace": 0x08,
    "tab": 0x09,
    "delete": 0x7F,
}

IGNORED_KEYS = frozenset(
    {
        "left shift",
        "right shift",
        "left ctrl",
        "right ctrl",
        "left alt",
        "right alt",
        "left meta",
        "right meta",
        "caps lock",
    }
)


def key_code(key_name: str) -> int | None:
    """Return the byte for ``key_name`` or ``None`` when the key is unmapped."""

    name = key_name.lower()
    if name in IGNORED_KEYS:
        return None
    if name == " ":
        name = "space"
    if name in SPECIAL_KEYS:
        return SPECIAL_KEYS[name]
    if len(key_name) == 1 and ord(key_name) < 0x80:
        return ord(key_name)
    return None


@dataclass
class Keyboard:
    """Latches the last pressed key and notifies listeners."""

    last_code: int | None = None
    _listeners: list[Callable[[int], None]] = field(default_factory=list)

    def press(self, key_name: str) -> int | None:
        code = key_code(key_name)
        if code is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key_name)
            return None
        self.last_code = code
        if debug_enabled("input"):
            debug_log("input", "press key=%s code=%02x", key_name, code)
        self._notify_listeners(code)
        return code

    def reset(self) -> None:
        self.last_code = None

    def add_listener(self, listener: Callable[[int], None]) -> None:
        self._listeners.append(listener)

    def _notify_listeners(self, code: int) -> None:
        for listener in tuple(self._listeners):
            listener(code)
