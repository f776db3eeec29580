import json
import logging
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from placeholder_core.logging_setup import JsonFormatter, configure_logging, get_logger, log_dir


class LoggingSetupTests(unittest.TestCase):
    def test_json_formatter_includes_event(self):
        record = logging.LogRecord("placeholder.renderer", logging.INFO, __file__, 1, "wrote %s", ("a.png",), None)
        record.event = "image_written"
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["msg"], "wrote a.png")
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["logger"], "placeholder.renderer")
        self.assertEqual(payload["event"], "image_written")

    def test_json_formatter_includes_size_and_path(self):
        record = logging.LogRecord("placeholder.renderer", logging.INFO, __file__, 1, "wrote", (), None)
        record.size = "10x20"
        record.path = "/tmp/out.png"
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["size"], "10x20")
        self.assertEqual(payload["path"], "/tmp/out.png")
        self.assertNotIn("event", payload)

    def test_log_dir_under_given_base(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = log_dir(Path(tmp))
            self.assertEqual(path, Path(tmp) / "logs")
            self.assertTrue(path.is_dir())

    def test_log_dir_follows_config_override(self):
        with tempfile.TemporaryDirectory() as tmp:
            config = Path(tmp) / "conf" / "config.json"
            with patch.dict(os.environ, {"PLACEHOLDER_CONFIG": str(config)}):
                path = log_dir()
            self.assertEqual(path, config.parent / "logs")
            self.assertTrue(path.is_dir())

    def test_component_logger_is_a_child(self):
        self.assertEqual(get_logger("renderer").name, "placeholder.renderer")
        self.assertEqual(get_logger().name, "placeholder")

    def test_configure_is_idempotent(self):
        logger = get_logger()
        saved = list(logger.handlers)
        for handler in saved:
            logger.removeHandler(handler)
        try:
            first = configure_logging(level="debug", console=False)
            count = len(first.handlers)
            second = configure_logging(console=True)
            self.assertIs(first, second)
            self.assertEqual(len(second.handlers), count)
            self.assertEqual(first.level, logging.DEBUG)
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
            for handler in saved:
                logger.addHandler(handler)

    def test_file_logging_writes_beside_given_directory(self):
        logger = get_logger()
        saved = list(logger.handlers)
        for handler in saved:
            logger.removeHandler(handler)
        with tempfile.TemporaryDirectory() as tmp:
            try:
                configure_logging(level="info", console=False, file_logging=True, directory=Path(tmp))
                get_logger("renderer").info("wrote", extra={"event": "image_written", "path": "a.png"})
                for handler in logger.handlers:
                    handler.flush()
                lines = (Path(tmp) / "logs" / "placeholder.log").read_text(encoding="utf-8").splitlines()
            finally:
                for handler in list(logger.handlers):
                    logger.removeHandler(handler)
                    handler.close()
                for handler in saved:
                    logger.addHandler(handler)
        payload = json.loads(lines[-1])
        self.assertEqual(payload["event"], "image_written")
        self.assertEqual(payload["path"], "a.png")


if __name__ == "__main__":
    unittest.main()
