import io
import json
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from countdown_app.cli import build_parser

FIXTURE = ROOT / "tests" / "fixtures" / "countdown_template.json"


def _run(argv):
    args = build_parser().parse_args(argv)
    out = io.StringIO()
    with redirect_stdout(out):
        code = args.func(args)
    return code, json.loads(out.getvalue())


class CliParserTests(unittest.TestCase):
    def test_render_command(self):
        args = build_parser().parse_args(["render", "--template", "t.json", "--seconds", "5", "--frames", "6"])
        self.assertEqual(args.command, "render")
        self.assertEqual((args.days, args.seconds, args.frames), (0, 5, 6))

    def test_draw_text_command(self):
        args = build_parser().parse_args(
            ["draw-text", "--input", "a.png", "--text", "Hi", "--x", "1", "--y", "2", "--out", "b.png"]
        )
        self.assertEqual(args.command, "draw-text")
        self.assertEqual(args.color, "#000000")


class CliCommandTests(unittest.TestCase):
    def test_validate_fixture(self):
        code, payload = _run(["validate", "--template", str(FIXTURE)])
        self.assertEqual(code, 0)
        self.assertEqual(payload["labels"], ["caption", "title"])
        self.assertEqual(payload["digit_positions"]["seconds"], {"x": 250, "y": 40})

    def test_validate_reports_field(self):
        with tempfile.TemporaryDirectory() as tmp:
            raw = json.loads(FIXTURE.read_text(encoding="utf-8"))
            del raw["digits"]["positions"]["days"]
            path = Path(tmp) / "bad.json"
            path.write_text(json.dumps(raw), encoding="utf-8")
            code, payload = _run(["validate", "--template", str(path)])
        self.assertEqual(code, 2)
        self.assertFalse(payload["success"])
        self.assertEqual(payload["field"], "digits.positions.days")

    def test_render_writes_animation(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "countdown.gif"
            settings = Path(tmp) / "settings.json"
            code, payload = _run(
                [
                    "render",
                    "--template",
                    str(FIXTURE),
                    "--seconds",
                    "3",
                    "--frames",
                    "4",
                    "--out",
                    str(out),
                    "--settings",
                    str(settings),
                ]
            )
            self.assertEqual(code, 0)
            self.assertEqual(payload["output"], str(out))
            with Image.open(out) as decoded:
                self.assertEqual(decoded.n_frames, 4)

    def test_render_rejects_out_of_range_start(self):
        code, payload = _run(["render", "--template", str(FIXTURE), "--seconds", "150"])
        self.assertEqual(code, 2)
        self.assertEqual(payload["field"], "start.seconds")

    def test_create_then_draw_text(self):
        with tempfile.TemporaryDirectory() as tmp:
            blank = Path(tmp) / "blank.png"
            code, _ = _run(["create", "--width", "60", "--height", "20", "--out", str(blank)])
            self.assertEqual(code, 0)
            drawn = Path(tmp) / "drawn.png"
            code, payload = _run(
                ["draw-text", "--input", str(blank), "--text", "Hi", "--x", "2", "--y", "2", "--out", str(drawn)]
            )
            self.assertEqual(code, 0)
            with Image.open(blank) as a, Image.open(drawn) as b:
                self.assertNotEqual(a.tobytes(), b.tobytes())


if __name__ == "__main__":
    unittest.main()
