"""Unit tests for the LS-8 console renderer."""

from __future__ import annotations

import pytest

from pyls8.video import AMBER, MONOCHROME, Renderer, validate_palette
from pyls8.video.renderer import CELL_HEIGHT, CELL_WIDTH


def test_render_dimensions_follow_grid_and_scale() -> None:
    renderer = Renderer(columns=10, rows=4)

    result = renderer.render(["72"], scale=2)

    assert result.width == 10 * CELL_WIDTH * 2
    assert result.height == 4 * CELL_HEIGHT * 2
    assert result.palette == MONOCHROME


def test_long_lines_wrap() -> None:
    renderer = Renderer(columns=4, rows=3)

    result = renderer.render(["abcdefghij"])

    assert result.rows == ("abcd", "efgh", "ij  ")


def test_only_newest_rows_are_visible() -> None:
    renderer = Renderer(columns=4, rows=2)

    result = renderer.render(["1", "2", "3"])

    assert result.text() == "2\n3"


def test_short_output_is_padded_and_unprintables_replaced() -> None:
    renderer = Renderer(columns=3, rows=3)

    result = renderer.render(["\x07", ""])

    assert result.rows == (".  ", "   ", "   ")


def test_palette_validation() -> None:
    assert validate_palette(AMBER) == AMBER
    assert validate_palette([(256, 0, 0), (0, 0, 0)]) == ((0, 0, 0), (0, 0, 0))

    with pytest.raises(ValueError):
        validate_palette([(0, 0, 0)])
    with pytest.raises(ValueError):
        validate_palette([(0, 0), (0, 0, 0)])
    with pytest.raises(ValueError):
        Renderer(columns=0)
