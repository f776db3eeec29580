"""Renderer package for placeholder image composition."""

from .canvas import Canvas
from .colors import contrast_color, parse_hex, parse_size, random_color
from .errors import (
    AllocationError,
    FontLoadError,
    InvalidColor,
    InvalidSettings,
    InvalidSize,
    OutputError,
    PlaceholderError,
)
from .generator import ImageGenerator, suggested_filename
from .models import Auto, Color, Fixed, GeneratedImage, GeneratorSettings, GridConfig, Size
from .text_layout import BitmapTextLayout, OutlineTextLayout, select_text_layout

__all__ = [
    "AllocationError",
    "Auto",
    "BitmapTextLayout",
    "Canvas",
    "Color",
    "Fixed",
    "FontLoadError",
    "GeneratedImage",
    "GeneratorSettings",
    "GridConfig",
    "ImageGenerator",
    "InvalidColor",
    "InvalidSettings",
    "InvalidSize",
    "OutlineTextLayout",
    "OutputError",
    "PlaceholderError",
    "Size",
    "contrast_color",
    "parse_hex",
    "parse_size",
    "random_color",
    "select_text_layout",
    "suggested_filename",
]
