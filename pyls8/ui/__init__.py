"""Window front-end for the LS-8 emulator."""

from .app import AppConfig, LS8App

__all__ = ["AppConfig", "LS8App"]
