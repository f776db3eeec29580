"""CLI entrypoints for placeholder image generation and config management."""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from dataclasses import asdict
from pathlib import Path

from placeholder_core import AppConfig, build_settings, config_path, configure_logging, load_config, save_config
from placeholder_core.config import build_grid
from placeholder_renderer import GeneratedImage, ImageGenerator, OutputError, PlaceholderError
from placeholder_renderer.models import GeneratorSettings


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _config_file(args: argparse.Namespace) -> Path:
    return Path(args.config).expanduser() if args.config else config_path()


def _settings(args: argparse.Namespace, cfg: AppConfig) -> GeneratorSettings:
    settings = build_settings(cfg)
    overrides: dict[str, object] = {}
    if args.font:
        overrides["font_path"] = Path(args.font).expanduser()
    if args.font_size is not None:
        overrides["font_size"] = args.font_size
    if args.fallback_font_size is not None:
        overrides["fallback_font_size"] = args.fallback_font_size
    grid_options = {"color": args.grid_color, "spacingX": args.grid_spacing_x, "spacingY": args.grid_spacing_y}
    if args.grid or any(v is not None for v in grid_options.values()):
        raw = dict(cfg.generator.grid or {})
        raw.update({k: v for k, v in grid_options.items() if v is not None})
        overrides["grid"] = build_grid(raw)
    return dataclasses.replace(settings, **overrides) if overrides else settings


def _render(args: argparse.Namespace, cfg: AppConfig) -> GeneratedImage:
    generator = ImageGenerator(_settings(args, cfg))
    text = None if args.no_text else args.text
    output = Path(args.output).expanduser() if args.output else None
    return generator.generate(text, output, args.size, args.bg, args.fg)


def _summary(image: GeneratedImage) -> dict[str, object]:
    return {
        "success": True,
        "size": image.size.label,
        "background": image.background.hex,
        "foreground": image.foreground.hex,
        "bytes": len(image.png),
        "filename": image.filename,
        "path": str(image.path) if image.path else None,
    }


def cmd_generate(args: argparse.Namespace) -> int:
    cfg = load_config(_config_file(args))
    image = _render(args, cfg)
    if args.stdout:
        sys.stdout.buffer.write(image.png)
        sys.stdout.buffer.flush()
        return 0

    if image.path is None:
        directory = Path(cfg.output.directory).expanduser() if cfg.output.directory else Path.cwd()
        target = directory / image.filename
        try:
            directory.mkdir(parents=True, exist_ok=True)
            target.write_bytes(image.png)
        except OSError as exc:
            raise OutputError(f"Could not write {target}: {exc}") from exc
        image = dataclasses.replace(image, path=target)

    _print_json(_summary(image))
    return 0


def cmd_headers(args: argparse.Namespace) -> int:
    args.output = None
    image = _render(args, load_config(_config_file(args)))
    _print_json({"headers": image.headers, "bytes": len(image.png)})
    return 0


def cmd_config_show(args: argparse.Namespace) -> int:
    path = _config_file(args)
    payload = asdict(load_config(path))
    payload["path"] = str(path)
    _print_json(payload)
    return 0


def cmd_config_init(args: argparse.Namespace) -> int:
    path = _config_file(args)
    if path.exists() and not args.force:
        print(f"error: {path} already exists (use --force to overwrite)", file=sys.stderr)
        return 1
    _print_json({"path": str(save_config(AppConfig(), path))})
    return 0


def _add_render_args(cmd: argparse.ArgumentParser) -> None:
    text_group = cmd.add_mutually_exclusive_group()
    text_group.add_argument("--text", default="", help="Label drawn above the size; empty draws only the size")
    text_group.add_argument("--no-text", action="store_true", help="Draw no text at all")
    cmd.add_argument("--size", default=None, help="Image size as <width>x<height>")
    cmd.add_argument("--bg", default=None, help="Background hex color; empty string picks a random color")
    cmd.add_argument("--fg", default=None, help="Text hex color; empty string picks a contrasting color")
    cmd.add_argument("--font", default=None, help="TrueType font file")
    cmd.add_argument("--font-size", type=_positive_int, default=None)
    cmd.add_argument("--fallback-font-size", type=int, choices=range(1, 6), default=None)
    cmd.add_argument("--grid", action="store_true", help="Draw a grid overlay")
    cmd.add_argument("--grid-color", default=None)
    cmd.add_argument("--grid-spacing-x", type=_positive_int, default=None)
    cmd.add_argument("--grid-spacing-y", type=_positive_int, default=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="placeholder", description="Placeholder image generator")
    parser.add_argument("--config", default=None, help="Path to config JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    gen_cmd = sub.add_parser("generate", help="Render a placeholder PNG")
    _add_render_args(gen_cmd)
    out_group = gen_cmd.add_mutually_exclusive_group()
    out_group.add_argument("--output", default=None, help="Write the PNG to this path")
    out_group.add_argument("--stdout", action="store_true", help="Write raw PNG bytes to stdout")
    gen_cmd.set_defaults(func=cmd_generate)

    headers_cmd = sub.add_parser("headers", help="Print direct-output response headers")
    _add_render_args(headers_cmd)
    headers_cmd.set_defaults(func=cmd_headers)

    config_cmd = sub.add_parser("config", help="Inspect or create the config file")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print effective config")
    show_cmd.set_defaults(func=cmd_config_show)
    init_cmd = config_sub.add_parser("init", help="Write default config")
    init_cmd.add_argument("--force", action="store_true")
    init_cmd.set_defaults(func=cmd_config_init)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    path = _config_file(args)
    cfg = load_config(path)
    configure_logging(
        level=cfg.logging.level,
        keep_files=cfg.logging.keep_files,
        console=args.verbose,
        file_logging=cfg.logging.file_logging,
        directory=path.parent,
    )
    try:
        return int(args.func(args))
    except PlaceholderError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
