"""Persistent generator settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from placeholder_renderer.colors import choice_from_hex, parse_hex, parse_size
from placeholder_renderer.models import GeneratorSettings, GridConfig


CONFIG_VERSION = 2

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_GENERATOR_KEYS = (
    "target_size",
    "text_color",
    "background_color",
    "font_path",
    "font_size",
    "fallback_font_size",
    "grid",
)


@dataclass
class GeneratorConfig:
    target_size: str = "200x200"
    text_color: str | None = "#333"
    background_color: str | None = "#EEE"
    font_path: str | None = None
    font_size: int = 12
    fallback_font_size: int = 5
    grid: dict[str, Any] | None = None


@dataclass
class OutputConfig:
    directory: str | None = None


@dataclass
class LoggingConfig:
    level: str = "INFO"
    keep_files: int = 7
    file_logging: bool = False


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_path() -> Path:
    override = os.environ.get("PLACEHOLDER_CONFIG", "").strip()
    if override:
        return Path(override).expanduser()
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "Placeholder" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Placeholder" / "config.json"
    return Path.home() / ".config" / "placeholder" / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in (raw or {}).items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_generator(cfg: AppConfig) -> None:
    gen = cfg.generator
    gen.font_size = max(1, int(gen.font_size))
    gen.fallback_font_size = max(1, min(5, int(gen.fallback_font_size)))
    if not isinstance(gen.grid, dict):
        # `true` enables the default grid, `false` or anything else disables it.
        gen.grid = {} if gen.grid is True else None
    if gen.grid is not None:
        for key in ("spacingX", "spacingY"):
            if key in gen.grid:
                gen.grid[key] = max(1, int(gen.grid[key]))


def _normalize_logging(cfg: AppConfig) -> None:
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in _LOG_LEVELS else "INFO"
    cfg.logging.keep_files = max(2, int(cfg.logging.keep_files))


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept generator settings at the top level.
        generator = dict(data.get("generator", {}) or {})
        for key in _GENERATOR_KEYS:
            if key in data:
                generator.setdefault(key, data.pop(key))
        data["generator"] = generator
        data.setdefault("output", {})
        data.setdefault("logging", {})
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        generator=_merge(GeneratorConfig, data.get("generator", {})),
        output=_merge(OutputConfig, data.get("output", {})),
        logging=_merge(LoggingConfig, data.get("logging", {})),
    )

    _normalize_generator(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path


def build_grid(raw: dict[str, Any] | None) -> GridConfig | None:
    if raw is None:
        return None
    color = raw.get("color")
    return GridConfig(
        color=parse_hex(color) if color else None,
        spacing_x=int(raw.get("spacingX", 100)),
        spacing_y=int(raw.get("spacingY", 100)),
    )


def build_settings(cfg: AppConfig) -> GeneratorSettings:
    gen = cfg.generator
    return GeneratorSettings(
        target_size=parse_size(gen.target_size),
        text_color=choice_from_hex(gen.text_color),
        background_color=choice_from_hex(gen.background_color),
        font_path=Path(gen.font_path).expanduser() if gen.font_path else None,
        font_size=gen.font_size,
        fallback_font_size=gen.fallback_font_size,
        grid=build_grid(gen.grid),
    )
