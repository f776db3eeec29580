"""True-color pixel buffer owned by a single render."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from PIL import Image, ImageDraw

from .errors import AllocationError, OutputError
from .models import Color


MAX_DIMENSION = 16384
MAX_PIXELS = 64 * 1024 * 1024


class Canvas:
    """Wraps an RGB Pillow image with the few drawing primitives the generator needs."""

    def __init__(self, image: Image.Image) -> None:
        self.image = image
        self._draw = ImageDraw.Draw(image)

    @classmethod
    def create(cls, width: int, height: int) -> "Canvas":
        if width < 1 or height < 1:
            raise AllocationError(f"Canvas dimensions must be positive, got {width}x{height}")
        if width > MAX_DIMENSION or height > MAX_DIMENSION:
            raise AllocationError(f"Canvas side exceeds {MAX_DIMENSION}px: {width}x{height}")
        if width * height > MAX_PIXELS:
            raise AllocationError(f"Canvas area exceeds {MAX_PIXELS} pixels: {width}x{height}")
        return cls(Image.new("RGB", (width, height)))

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def draw(self) -> ImageDraw.ImageDraw:
        return self._draw

    def fill(self, color: Color) -> None:
        self.image.paste(color.rgb, (0, 0, self.width, self.height))

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
        self._draw.line([(x0, y0), (x1, y1)], fill=color.rgb, width=1)

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        return self.image.getpixel((x, y))

    def encode_png(self) -> bytes:
        buf = BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()

    def save_png(self, path: Path) -> bytes:
        data = self.encode_png()
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise OutputError(f"Could not write {path}: {exc}") from exc
        return data

    def close(self) -> None:
        self.image.close()

    def __enter__(self) -> "Canvas":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
