"""Text console renderer for the LS-8 output window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Sequence, Tuple

RGBColor = Tuple[int, int, int]
Palette = Tuple[RGBColor, RGBColor]

MONOCHROME: Palette = ((0, 0, 0), (0xFF, 0xFF, 0xFF))
GREEN: Palette = ((0, 0x10, 0), (0x33, 0xFF, 0x66))
AMBER: Palette = ((0x10, 0x08, 0), (0xFF, 0xB0, 0x00))

PALETTES: Mapping[str, Palette] = {
    "mono": MONOCHROME,
    "green": GREEN,
    "amber": AMBER,
}

CELL_WIDTH = 8
CELL_HEIGHT = 16
_FONT_NAMES = "menlo,dejavusansmono,couriernew,consolas,monospace"


def validate_palette(palette: Sequence[Sequence[int]]) -> Palette:
    if len(palette) != 2:
        raise ValueError("palette must contain exactly two colours (background and foreground)")
    if any(len(color) != 3 for color in palette):
        raise ValueError("palette entries must be RGB tuples")
    return tuple(tuple(int(channel) & 0xFF for channel in color) for color in palette)  # type: ignore[return-value]


@dataclass
class RenderResult:
    """Screen contents laid out on the character grid."""

    rows: Tuple[str, ...]
    columns: int
    scale: int
    palette: Palette

    @property
    def width(self) -> int:
        return self.columns * CELL_WIDTH * self.scale

    @property
    def height(self) -> int:
        return len(self.rows) * CELL_HEIGHT * self.scale

    def text(self) -> str:
        return "\n".join(row.rstrip() for row in self.rows)

    def to_surface(self, font=None):
        """Draw the rows onto a new pygame surface."""

        import pygame  # type: ignore

        background, foreground = self.palette
        surface = pygame.Surface((self.width, self.height))
        surface.fill(background)
        if font is None:
            font = load_font(pygame, self.scale)
        line_height = CELL_HEIGHT * self.scale
        for index, row in enumerate(self.rows):
            if not row.strip():
                continue
            rendered = font.render(row, False, foreground, background)
            surface.blit(rendered, (0, index * line_height))
        return surface


class Renderer:
    """Wraps console lines to the grid and keeps the newest rows visible."""

    def __init__(self, columns: int = 40, rows: int = 20, palette: Sequence[Sequence[int]] = MONOCHROME) -> None:
        if columns <= 0 or rows <= 0:
            raise ValueError("columns and rows must be positive")
        self.columns = columns
        self.rows = rows
        self.palette = validate_palette(palette)

    def layout(self, lines: Iterable[str]) -> List[str]:
        wrapped: List[str] = []
        for line in lines:
            text = "".join(_printable(char) for char in line)
            if not text:
                wrapped.append("")
                continue
            for start in range(0, len(text), self.columns):
                wrapped.append(text[start : start + self.columns])
        visible = wrapped[-self.rows :]
        padding = [""] * (self.rows - len(visible))
        return [row.ljust(self.columns) for row in visible + padding]

    def render(self, lines: Iterable[str], *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        return RenderResult(tuple(self.layout(lines)), self.columns, scale, self.palette)


def load_font(pygame, scale: int):
    pygame.font.init()
    font_name = pygame.font.match_font(_FONT_NAMES)
    if not font_name:
        font_name = pygame.font.get_default_font()
    return pygame.font.Font(font_name, CELL_HEIGHT * scale - 2)


def _printable(char: str) -> str:
    code = ord(char)
    if code == 0x09:
        return " "
    if 0x20 <= code < 0x7F:
        return char
    return "."
