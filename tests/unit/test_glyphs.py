import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from countdown_core.errors import GlyphIndexError
from countdown_core.models import DigitStyle
from countdown_renderer.glyphs import build_glyph_table, glyph_text


class GlyphTextTests(unittest.TestCase):
    def test_zero_padded(self):
        self.assertEqual(glyph_text(7), "07")
        self.assertEqual(glyph_text(42), "42")

    def test_template(self):
        self.assertEqual(glyph_text(7, "Day %s"), "Day 07")


class GlyphTableTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.table = build_glyph_table(DigitStyle(color="#FF0000", width=48, height=30), "Day %s")

    def test_has_one_hundred_entries(self):
        self.assertEqual(len(self.table), 100)
        self.assertEqual(len(self.table.texts), 100)

    def test_template_text(self):
        self.assertEqual(self.table.texts[7], "Day 07")
        self.assertEqual(self.table.texts[99], "Day 99")

    def test_entries_are_reused(self):
        self.assertIs(self.table[5], self.table[5])

    def test_images_are_colourised(self):
        image = self.table[12]
        self.assertEqual(image.mode, "RGBA")
        self.assertGreaterEqual(image.width, 48)
        self.assertGreaterEqual(image.height, 30)
        r, g, b, _ = image.getpixel(image.getchannel("A").getbbox()[:2])
        self.assertEqual((r, g, b), (255, 0, 0))

    def test_out_of_range_lookup_fails(self):
        with self.assertRaises(GlyphIndexError):
            self.table[100]
        with self.assertRaises(IndexError):
            self.table[-1]

    def test_uniform_box_for_plain_digits(self):
        table = build_glyph_table(DigitStyle(width=120, height=60))
        self.assertEqual({image.size for image in table.images}, {(120, 60)})
        self.assertEqual(table.texts[0], "00")


if __name__ == "__main__":
    unittest.main()
