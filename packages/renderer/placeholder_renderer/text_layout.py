"""Centered text placement with a TrueType font or the built-in bitmap font."""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from .canvas import Canvas
from .errors import FontLoadError
from .models import Color, GeneratorSettings


_log = logging.getLogger("placeholder.renderer")

# Cell size (width, height) for bitmap size classes 1..5, tiny through giant.
BITMAP_CELLS: dict[int, tuple[int, int]] = {
    1: (5, 8),
    2: (6, 13),
    3: (7, 13),
    4: (8, 16),
    5: (9, 15),
}

LINE_HEIGHT = 1.25


@dataclass(frozen=True)
class TextRow:
    text: str
    x: int
    y: int
    width: int
    height: int


class TextLayout:
    name = "base"

    def draw(self, canvas: Canvas, text: str, color: Color) -> None:
        raise NotImplementedError


class OutlineTextLayout(TextLayout):
    """Draws multi-line text centered in the canvas box using a TrueType font."""

    name = "outline"

    def __init__(self, font_path: Path, font_size: int) -> None:
        self.font_path = Path(font_path)
        self.font_size = font_size
        try:
            self.font = ImageFont.truetype(str(self.font_path), font_size)
        except OSError as exc:
            raise FontLoadError(f"Could not load font {self.font_path}: {exc}") from exc

    @property
    def spacing(self) -> int:
        return max(0, round(self.font_size * (LINE_HEIGHT - 1)))

    def draw(self, canvas: Canvas, text: str, color: Color) -> None:
        canvas.draw.multiline_text(
            (canvas.width / 2, canvas.height / 2),
            text,
            font=self.font,
            fill=color.rgb,
            anchor="mm",
            align="center",
            spacing=self.spacing,
        )


@lru_cache(maxsize=1)
def _bitmap_font() -> ImageFont.ImageFont:
    return ImageFont.load_default_imagefont()


@lru_cache(maxsize=1)
def _native_cell() -> tuple[int, int]:
    font = _bitmap_font()
    boxes = [font.getbbox(ch) for ch in string.printable.strip()]
    return max(b[2] for b in boxes), max(b[3] for b in boxes)


@lru_cache(maxsize=2048)
def _glyph_mask(ch: str, cell: tuple[int, int]) -> Image.Image:
    glyph = Image.new("L", _native_cell(), 0)
    ImageDraw.Draw(glyph).text((0, 0), ch, font=_bitmap_font(), fill=255)
    return glyph.resize(cell, Image.Resampling.NEAREST)


class BitmapTextLayout(TextLayout):
    """Fixed-cell fallback font; every character occupies one cell of the size class."""

    name = "bitmap"

    def __init__(self, size_class: int = 5) -> None:
        if size_class not in BITMAP_CELLS:
            raise ValueError(f"Bitmap font size class must be 1..5, got {size_class}")
        self.size_class = size_class

    @property
    def char_width(self) -> int:
        return BITMAP_CELLS[self.size_class][0]

    @property
    def char_height(self) -> int:
        return BITMAP_CELLS[self.size_class][1]

    def layout(self, text: str, width: int, height: int) -> list[TextRow]:
        lines = text.split("\n")
        block_height = self.char_height * len(lines)
        top = int((height - block_height) / 2)
        rows = []
        for i, line in enumerate(lines):
            row_width = self.char_width * len(line)
            rows.append(
                TextRow(
                    text=line,
                    x=int((width - row_width) / 2),
                    y=top + i * self.char_height,
                    width=row_width,
                    height=self.char_height,
                )
            )
        return rows

    def draw(self, canvas: Canvas, text: str, color: Color) -> None:
        cell = (self.char_width, self.char_height)
        for row in self.layout(text, canvas.width, canvas.height):
            for i, ch in enumerate(row.text):
                if ch.isspace():
                    continue
                if ord(ch) > 0xFF:
                    ch = "?"
                canvas.image.paste(color.rgb, (row.x + i * self.char_width, row.y), _glyph_mask(ch, cell))


def select_text_layout(settings: GeneratorSettings) -> TextLayout:
    if settings.font_path is not None and Path(settings.font_path).is_file():
        return OutlineTextLayout(Path(settings.font_path), settings.font_size)
    if settings.font_path is not None:
        _log.debug(
            "font %s not found, using bitmap font",
            settings.font_path,
            extra={"event": "font_fallback"},
        )
    return BitmapTextLayout(settings.fallback_font_size)
