"""Hex/size parsing, random colors and contrast selection."""

from __future__ import annotations

import random
import re
from typing import Callable

from .errors import InvalidColor, InvalidSize
from .models import BLACK, WHITE, Auto, Color, ColorChoice, Fixed, Size


_HEX_RE = re.compile(r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")
_SIZE_RE = re.compile(r"([0-9]+)x([0-9]+)")

# ITU-R BT.601 luma weights.
_LUMA = (0.299, 0.587, 0.114)


def normalize_hex(value: str) -> str:
    if not isinstance(value, str):
        raise InvalidColor(f"Hex color must be a string, got {type(value).__name__}")
    match = _HEX_RE.fullmatch(value)
    if match is None:
        raise InvalidColor(f"Invalid hex color: {value!r}")
    digits = match.group(1).upper()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return digits


def parse_hex(value: str) -> Color:
    digits = normalize_hex(value)
    return Color(*(int(digits[i : i + 2], 16) for i in (0, 2, 4)))


def parse_size(value: str) -> Size:
    if not isinstance(value, str):
        raise InvalidSize(f"Size must be a string, got {type(value).__name__}")
    match = _SIZE_RE.fullmatch(value)
    if match is None:
        raise InvalidSize(f"Invalid size {value!r}, expected <width>x<height>")
    return Size(int(match.group(1)), int(match.group(2)))


def random_color(rng: random.Random | None = None) -> Color:
    rng = rng or random.Random()
    return Color(rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255))


def luminance(color: Color) -> float:
    return sum(w * c for w, c in zip(_LUMA, color.rgb)) / 255


def contrast_color(background: Color) -> Color:
    return BLACK if luminance(background) >= 0.5 else WHITE


def resolve_color(choice: ColorChoice, fallback: Callable[[], Color]) -> Color:
    if isinstance(choice, Fixed):
        return choice.color
    if isinstance(choice, Auto):
        return fallback()
    raise TypeError(f"Unknown color choice: {choice!r}")


def choice_from_hex(value: str | None) -> ColorChoice:
    """Map a configured hex value to a color choice; empty or None means automatic."""
    if not value:
        return Auto()
    return Fixed(parse_hex(value))
