"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .errors import InvalidColor, InvalidSettings, InvalidSize


@dataclass(frozen=True)
class Size:
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidSize(f"Size must be positive, got {self.width}x{self.height}")

    @property
    def label(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise InvalidColor(f"Channel out of range: {channel}")

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)


@dataclass(frozen=True)
class Fixed:
    color: Color


@dataclass(frozen=True)
class Auto:
    """Pick the color at render time: random for backgrounds, contrast for text."""


ColorChoice = Union[Fixed, Auto]


@dataclass(frozen=True)
class GridConfig:
    color: Color | None = None
    spacing_x: int = 100
    spacing_y: int = 100

    def __post_init__(self) -> None:
        if self.spacing_x <= 0 or self.spacing_y <= 0:
            raise InvalidSettings(f"Grid spacing must be positive, got {self.spacing_x}x{self.spacing_y}")


@dataclass(frozen=True)
class GeneratorSettings:
    target_size: Size = Size(200, 200)
    text_color: ColorChoice = Fixed(Color(0x33, 0x33, 0x33))
    background_color: ColorChoice = Fixed(Color(0xEE, 0xEE, 0xEE))
    font_path: Path | None = None
    font_size: int = 12
    fallback_font_size: int = 5
    grid: GridConfig | None = None

    def __post_init__(self) -> None:
        if not 1 <= self.fallback_font_size <= 5:
            raise InvalidSettings(f"fallback_font_size must be between 1 and 5, got {self.fallback_font_size}")
        if self.font_size <= 0:
            raise InvalidSettings(f"font_size must be positive, got {self.font_size}")


@dataclass(frozen=True)
class RenderRequest:
    text: str | None
    output_path: Path | None
    size: Size
    background: Color
    foreground: Color
    grid: GridConfig | None = None
    grid_color: Color | None = None


@dataclass(frozen=True)
class GeneratedImage:
    size: Size
    background: Color
    foreground: Color
    png: bytes
    filename: str
    path: Path | None = None

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "image/png",
            "Content-Disposition": f'inline; filename="{self.filename}"',
        }
