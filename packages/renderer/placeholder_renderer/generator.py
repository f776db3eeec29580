"""Placeholder image composer: background, optional grid, centered text, PNG output."""

from __future__ import annotations

import base64
import logging
import random
import re
from pathlib import Path

from PIL import Image

from .canvas import Canvas
from .colors import contrast_color, parse_hex, parse_size, random_color, resolve_color
from .models import Auto, Color, ColorChoice, Fixed, GeneratedImage, GeneratorSettings, RenderRequest
from .text_layout import TextLayout, select_text_layout


_log = logging.getLogger("placeholder.renderer")

_UNSAFE_FILENAME = re.compile(r"[^a-z0-9]", re.IGNORECASE | re.ASCII)


def display_text(text: str | None, size_label: str) -> str | None:
    if text is None:
        return None
    if text == "":
        return size_label
    return f"{text}\n{size_label}"


def suggested_filename(text: str | None, size_label: str) -> str:
    if not text:
        return f"{size_label}.png"
    return f"{_UNSAFE_FILENAME.sub('_', text)}-{size_label}.png"


def _override_choice(value: str | None, configured: ColorChoice) -> ColorChoice:
    # None defers to the settings, an empty string forces the automatic policy.
    if value is None:
        return configured
    if value == "":
        return Auto()
    return Fixed(parse_hex(value))


class ImageGenerator:
    """Renders placeholder PNGs from long-lived, read-only settings."""

    def __init__(self, settings: GeneratorSettings | None = None, rng: random.Random | None = None) -> None:
        self.settings = settings or GeneratorSettings()
        self._rng = rng

    def resolve(
        self,
        text: str | None = "",
        output_path: str | Path | None = None,
        size: str | None = None,
        bg_hex: str | None = None,
        fg_hex: str | None = None,
    ) -> RenderRequest:
        resolved_size = parse_size(size) if size else self.settings.target_size

        background = resolve_color(
            _override_choice(bg_hex, self.settings.background_color),
            lambda: random_color(self._rng),
        )
        foreground = resolve_color(
            _override_choice(fg_hex, self.settings.text_color),
            lambda: contrast_color(background),
        )

        grid = self.settings.grid
        grid_color: Color | None = None
        if grid is not None:
            if grid.color is not None:
                grid_color = grid.color
            elif isinstance(self.settings.text_color, Fixed):
                grid_color = self.settings.text_color.color
            else:
                grid_color = foreground

        return RenderRequest(
            text=text,
            output_path=Path(output_path) if output_path else None,
            size=resolved_size,
            background=background,
            foreground=foreground,
            grid=grid,
            grid_color=grid_color,
        )

    def _draw_grid(self, canvas: Canvas, request: RenderRequest) -> None:
        grid = request.grid
        if grid is None or request.grid_color is None:
            return
        width, height = request.size.width, request.size.height
        for y in range(0, height, grid.spacing_y):
            canvas.draw_line(0, y, width, y, request.grid_color)
        for x in range(0, width, grid.spacing_x):
            canvas.draw_line(x, 0, x, height, request.grid_color)

    def _compose(self, request: RenderRequest, layout: TextLayout | None) -> Canvas:
        canvas = Canvas.create(request.size.width, request.size.height)
        try:
            canvas.fill(request.background)
            self._draw_grid(canvas, request)

            label = display_text(request.text, request.size.label)
            if label is not None and layout is not None:
                layout.draw(canvas, label, request.foreground)
        except Exception:
            canvas.close()
            raise
        return canvas

    def _layout_for(self, request: RenderRequest) -> TextLayout | None:
        if request.text is None:
            return None
        return select_text_layout(self.settings)

    def render(
        self,
        text: str | None = "",
        size: str | None = None,
        bg_hex: str | None = None,
        fg_hex: str | None = None,
    ) -> tuple[Image.Image, RenderRequest]:
        """Compose the image without encoding it; the caller owns the returned image."""
        request = self.resolve(text, None, size, bg_hex, fg_hex)
        canvas = self._compose(request, self._layout_for(request))
        return canvas.image, request

    def generate(
        self,
        text: str | None = "",
        output_path: str | Path | None = None,
        size: str | None = None,
        bg_hex: str | None = None,
        fg_hex: str | None = None,
    ) -> GeneratedImage:
        request = self.resolve(text, output_path, size, bg_hex, fg_hex)
        layout = self._layout_for(request)
        _log.debug(
            "rendering %s bg=%s fg=%s layout=%s",
            request.size.label,
            request.background.hex,
            request.foreground.hex,
            layout.name if layout is not None else "none",
            extra={"event": "render", "size": request.size.label},
        )

        with self._compose(request, layout) as canvas:
            if request.output_path is not None:
                png = canvas.save_png(request.output_path)
                _log.info(
                    "wrote %s",
                    request.output_path,
                    extra={"event": "image_written", "path": str(request.output_path)},
                )
            else:
                png = canvas.encode_png()

        return GeneratedImage(
            size=request.size,
            background=request.background,
            foreground=request.foreground,
            png=png,
            filename=suggested_filename(request.text, request.size.label),
            path=request.output_path,
        )

    def to_data_url(
        self,
        text: str | None = "",
        size: str | None = None,
        bg_hex: str | None = None,
        fg_hex: str | None = None,
    ) -> str:
        image = self.generate(text, None, size, bg_hex, fg_hex)
        b64 = base64.b64encode(image.png).decode("ascii")
        return f"data:image/png;base64,{b64}"
