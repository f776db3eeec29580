"""Core services for persisted generator settings and logging."""

from .config import AppConfig, build_settings, config_path, load_config, save_config
from .logging_setup import configure_logging, get_logger

__all__ = [
    "AppConfig",
    "build_settings",
    "config_path",
    "configure_logging",
    "get_logger",
    "load_config",
    "save_config",
]
