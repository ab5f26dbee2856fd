import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from countdown_core.logging_setup import configure_logging, get_logger


class LoggingSetupTests(unittest.TestCase):
    def setUp(self):
        self.root = logging.getLogger("countdown")
        self.saved = list(self.root.handlers), self.root.level
        for handler in list(self.root.handlers):
            self.root.removeHandler(handler)

    def tearDown(self):
        for handler in list(self.root.handlers):
            handler.close()
            self.root.removeHandler(handler)
        handlers, level = self.saved
        for handler in handlers:
            self.root.addHandler(handler)
        self.root.setLevel(level)

    def test_child_loggers_share_the_countdown_root(self):
        self.assertIs(get_logger(), self.root)
        self.assertEqual(get_logger("canvas").name, "countdown.canvas")

    def test_writes_json_lines_with_event(self):
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logging(console=False, level="debug", directory=Path(tmp))
            self.assertEqual(logger.level, logging.DEBUG)
            get_logger("color").debug("fallback", extra={"event": "color_fallback"})
            for handler in logger.handlers:
                handler.flush()

            lines = (Path(tmp) / "countdown.log").read_text(encoding="utf-8").splitlines()
            records = [json.loads(line) for line in lines]
            self.assertEqual(records[0]["event"], "logging_configured")
            self.assertEqual(records[-1]["logger"], "countdown.color")
            self.assertEqual(records[-1]["event"], "color_fallback")
            self.assertEqual(records[-1]["level"], "DEBUG")

            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)

    def test_second_call_keeps_existing_handlers(self):
        with tempfile.TemporaryDirectory() as tmp:
            first = configure_logging(console=False, directory=Path(tmp))
            count = len(first.handlers)
            second = configure_logging(console=True, directory=Path(tmp))
            self.assertIs(first, second)
            self.assertEqual(len(second.handlers), count)
            for handler in list(second.handlers):
                handler.close()
                second.removeHandler(handler)


if __name__ == "__main__":
    unittest.main()
