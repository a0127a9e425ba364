"""Utility helpers for the LS-8 Python emulator."""

from .debug import debug_enabled, debug_log, refresh_categories
from .trace import TraceEntry, TraceRecorder

__all__ = [
    "debug_enabled",
    "debug_log",
    "refresh_categories",
    "TraceEntry",
    "TraceRecorder",
]
