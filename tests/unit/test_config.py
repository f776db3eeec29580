import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from placeholder_core.config import AppConfig, build_settings, config_path, load_config, save_config
from placeholder_renderer.errors import InvalidColor, InvalidSize
from placeholder_renderer.models import Auto, Color, Fixed, GridConfig, Size


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing.json"
            cfg = load_config(path)
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.generator.target_size, "200x200")
            self.assertEqual(cfg.generator.text_color, "#333")
            self.assertEqual(cfg.generator.background_color, "#EEE")
            self.assertIsNone(cfg.generator.grid)
            self.assertEqual(cfg.logging.level, "INFO")

    def test_load_default_when_unreadable(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "config.json"
            cfg = load_config(path)
            cfg.generator.target_size = "640x480"
            cfg.generator.background_color = None
            cfg.generator.grid = {"color": "#F00", "spacingX": 20}
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.generator.target_size, "640x480")
            self.assertIsNone(reloaded.generator.background_color)
            self.assertEqual(reloaded.generator.grid, {"color": "#F00", "spacingX": 20})

    def test_migrate_v1_shape(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            old = {"target_size": "300x100", "text_color": None, "grid": False}
            path.write_text(json.dumps(old), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.config_version, 2)
            self.assertEqual(cfg.generator.target_size, "300x100")
            self.assertIsNone(cfg.generator.text_color)
            self.assertIsNone(cfg.generator.grid)
            self.assertEqual(cfg.generator.background_color, "#EEE")

    def test_normalizes_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "config_version": 2,
                "generator": {"fallback_font_size": 9, "font_size": 0, "grid": True},
                "logging": {"level": "chatty", "keep_files": 0},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.generator.fallback_font_size, 5)
            self.assertEqual(cfg.generator.font_size, 1)
            self.assertEqual(cfg.generator.grid, {})
            self.assertEqual(cfg.logging.level, "INFO")
            self.assertEqual(cfg.logging.keep_files, 2)

    def test_config_path_env_override(self):
        with patch.dict(os.environ, {"PLACEHOLDER_CONFIG": "/tmp/custom-placeholder.json"}):
            self.assertEqual(config_path(), Path("/tmp/custom-placeholder.json"))


class BuildSettingsTests(unittest.TestCase):
    def test_defaults(self):
        settings = build_settings(AppConfig())
        self.assertEqual(settings.target_size, Size(200, 200))
        self.assertEqual(settings.text_color, Fixed(Color(0x33, 0x33, 0x33)))
        self.assertEqual(settings.background_color, Fixed(Color(0xEE, 0xEE, 0xEE)))
        self.assertIsNone(settings.font_path)
        self.assertEqual(settings.fallback_font_size, 5)
        self.assertIsNone(settings.grid)

    def test_null_colors_are_automatic(self):
        cfg = AppConfig()
        cfg.generator.text_color = None
        cfg.generator.background_color = None
        settings = build_settings(cfg)
        self.assertEqual(settings.text_color, Auto())
        self.assertEqual(settings.background_color, Auto())

    def test_grid_defaults(self):
        cfg = AppConfig()
        cfg.generator.grid = {"spacingY": 25}
        self.assertEqual(build_settings(cfg).grid, GridConfig(color=None, spacing_x=100, spacing_y=25))

    def test_invalid_values_propagate(self):
        cfg = AppConfig()
        cfg.generator.target_size = "big"
        with self.assertRaises(InvalidSize):
            build_settings(cfg)
        cfg = AppConfig()
        cfg.generator.grid = {"color": "purple"}
        with self.assertRaises(InvalidColor):
            build_settings(cfg)


if __name__ == "__main__":
    unittest.main()
