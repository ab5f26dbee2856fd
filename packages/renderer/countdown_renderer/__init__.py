"""Renderer package for countdown animation composition."""

from .assembler import FRAME_DELAY, AnimationAsset, assemble
from .canvas import CanvasMode, CountdownCanvas, open_canvas
from .compositor import bake_background, render_frame, render_frames
from .glyphs import GlyphTable, build_glyph_table, glyph_text

__all__ = [
    "FRAME_DELAY",
    "AnimationAsset",
    "CanvasMode",
    "CountdownCanvas",
    "GlyphTable",
    "assemble",
    "bake_background",
    "build_glyph_table",
    "glyph_text",
    "open_canvas",
    "render_frame",
    "render_frames",
]
