"""Tests for the LS-8 memory store."""

from __future__ import annotations

import pytest

from pyls8.bus import ADDRESS_SPACE, RAM, MemoryError


def test_read_after_write_returns_value() -> None:
    ram = RAM()
    for address in (0x00, 0x7F, 0xF4, 0xFF):
        ram.write(address, address ^ 0x5A)
        assert ram.read(address) == address ^ 0x5A
        assert ram.read(address) == ram.read(address)


def test_addresses_wrap_and_values_mask() -> None:
    ram = RAM()
    ram.write(ADDRESS_SPACE + 3, 0x1AB)

    assert ram.read(3) == 0xAB
    assert ram.read(-253) == 0xAB


def test_load_image_snapshot_and_clear() -> None:
    ram = RAM()

    assert ram.load_image(b"\x01\x02\x03", start=0x10) == 3
    assert ram.snapshot()[0x10:0x13] == b"\x01\x02\x03"

    ram.clear()
    assert ram.snapshot() == bytes(ADDRESS_SPACE)


def test_load_image_rejects_oversized_data() -> None:
    with pytest.raises(MemoryError):
        RAM().load_image(bytes(ADDRESS_SPACE + 1))


def test_size_must_be_positive() -> None:
    with pytest.raises(MemoryError):
        RAM(0)
