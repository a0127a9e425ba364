"""Tests for the keyboard interrupt source."""

from __future__ import annotations

from pyls8.io import Keyboard, key_code


def test_key_codes() -> None:
    assert key_code("a") == ord("a")
    assert key_code("A") == ord("A")
    assert key_code("space") == 0x20
    assert key_code(" ") == 0x20
    assert key_code("return") == 0x0D
    assert key_code("left shift") is None
    assert key_code("f1") is None


def test_press_notifies_listeners() -> None:
    kb = Keyboard()
    received: list[int] = []
    kb.add_listener(received.append)

    assert kb.press("q") == ord("q")
    assert kb.press("left ctrl") is None

    assert received == [ord("q")]
    assert kb.last_code == ord("q")


def test_reset_clears_last_code() -> None:
    kb = Keyboard()
    kb.press("x")
    kb.reset()

    assert kb.last_code is None
