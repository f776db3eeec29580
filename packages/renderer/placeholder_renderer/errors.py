"""Error types raised by the rendering pipeline."""

from __future__ import annotations


class PlaceholderError(Exception):
    """Base class for every failure surfaced by the renderer."""


class InvalidSize(PlaceholderError, ValueError):
    pass


class InvalidColor(PlaceholderError, ValueError):
    pass


class AllocationError(PlaceholderError, ValueError):
    pass


class FontLoadError(PlaceholderError, OSError):
    """Font file exists but the rasterizer could not load it."""


class OutputError(PlaceholderError, OSError):
    pass


class InvalidSettings(PlaceholderError, ValueError):
    """Generator or grid option outside its allowed range."""
