import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from countdown_core.settings import AppSettings, load_settings, save_settings


class SettingsTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            settings = load_settings(Path(tmp) / "missing.json")
            self.assertIsInstance(settings, AppSettings)
            self.assertEqual(settings.render.workers, 1)
            self.assertEqual(settings.render.output_format, "gif")
            self.assertEqual(settings.logging.level, "INFO")

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "settings.json"
            settings = load_settings(path)
            settings.render.workers = 4
            settings.logging.console = False
            save_settings(settings, path)
            reloaded = load_settings(path)
            self.assertEqual(reloaded.render.workers, 4)
            self.assertFalse(reloaded.logging.console)

    def test_normalizes_out_of_range_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "settings.json"
            raw = {
                "render": {"workers": 500, "output_format": "BMP"},
                "logging": {"level": "chatty", "keep_files": 0},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            settings = load_settings(path)
            self.assertEqual(settings.render.workers, 32)
            self.assertEqual(settings.render.output_format, "gif")
            self.assertEqual(settings.logging.level, "INFO")
            self.assertEqual(settings.logging.keep_files, 2)

    def test_corrupt_file_returns_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "settings.json"
            path.write_text("not json", encoding="utf-8")
            self.assertEqual(load_settings(path), AppSettings())


if __name__ == "__main__":
    unittest.main()
