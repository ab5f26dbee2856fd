"""Pillow-backed imaging primitives: canvases, text masks, compositing, paging."""

from __future__ import annotations

import re
from io import BytesIO
from pathlib import Path
from typing import Iterable, Sequence

from PIL import Image, ImageDraw, ImageFont

from countdown_core.color import decode_rgb
from countdown_core.logging_setup import get_logger
from countdown_core.models import Alignment, TextRenderOptions

_log = get_logger("imaging")

DEFAULT_FONT_SIZE = 12
# Pango-style "<family> [weight] <size>[px]", e.g. "sans 12" or "Dancing Script 400 48px".
_FONT_SIZE_RE = re.compile(r"^(?P<family>.*?)\s*(?P<size>\d+(?:\.\d+)?)(?:px)?\s*$")
_FONT_WEIGHT_RE = re.compile(r"\s+\d{3}$")

Layer = tuple[Image.Image, int, int]


def load_file(path: str | Path) -> Image.Image:
    with Image.open(path) as src:
        src.load()
        mode = "RGBA" if src.mode in ("RGBA", "LA", "PA") or "transparency" in src.info else "RGB"
        return src.convert(mode)


def solid_canvas(width: int, height: int, rgb: tuple[int, int, int]) -> Image.Image:
    return Image.new("RGB", (width, height), rgb)


def _split_font(font: str | None) -> tuple[str, int]:
    if not font:
        return "", DEFAULT_FONT_SIZE
    match = _FONT_SIZE_RE.match(font.strip())
    if match is None:
        return font.strip(), DEFAULT_FONT_SIZE
    family = _FONT_WEIGHT_RE.sub("", match.group("family").strip())
    return family, max(1, int(round(float(match.group("size")))))


def load_font(font: str | None = None, font_file: str | None = None):
    family, size = _split_font(font)
    if font_file:
        return ImageFont.truetype(font_file, size)
    if family:
        try:
            return ImageFont.truetype(f"{family}.ttf", size)
        except OSError:
            _log.debug("font family %r not found, using default face", family)
    return ImageFont.load_default(size)


def text_mask(text: str, font: str | None = None, font_file: str | None = None) -> Image.Image:
    """Single-band alpha mask of ``text`` cropped to its natural size."""
    face = load_font(font, font_file)
    left, top, right, bottom = face.getbbox(text)
    mask = Image.new("L", (max(1, right - left), max(1, bottom - top)), 0)
    if text:
        ImageDraw.Draw(mask).text((-left, -top), text, font=face, fill=255)
    return mask


def colorize(mask: Image.Image, rgb: tuple[int, int, int]) -> Image.Image:
    layer = Image.new("RGBA", mask.size, rgb + (255,))
    layer.putalpha(mask)
    return layer


def pad(image: Image.Image, top: int, bottom: int, width: int | None = None, height: int | None = None) -> Image.Image:
    width = image.width if width is None else width
    height = image.height + top + bottom if height is None else height
    out = Image.new(image.mode, (width, height), 0)
    out.paste(image, (0, top))
    return out


def _anchor_offset(alignment: Alignment, free_x: int, free_y: int) -> tuple[int, int]:
    name = alignment.value
    if name.endswith("west"):
        x = 0
    elif name.endswith("east"):
        x = free_x
    else:
        x = free_x // 2
    if name.startswith("north"):
        y = 0
    elif name.startswith("south"):
        y = free_y
    else:
        y = free_y // 2
    return x, y


def align_in_box(image: Image.Image, alignment: Alignment, width: int, height: int) -> Image.Image:
    width = max(width, image.width)
    height = max(height, image.height)
    if (width, height) == image.size:
        return image
    out = Image.new(image.mode, (width, height), 0)
    out.paste(image, _anchor_offset(alignment, width - image.width, height - image.height))
    return out


def colored_text(text: str, options: TextRenderOptions) -> Image.Image:
    """Render ``text`` as an RGBA layer: mask, pad, box alignment, then colour."""
    mask = text_mask(text, options.font, options.font_file)

    if options.padding_top > 0 or options.padding_bottom > 0:
        mask = pad(mask, options.padding_top, options.padding_bottom)

    if options.width > 0 or options.height > 0:
        out_width = options.width if options.width > 0 else mask.width
        out_height = options.height if options.height > 0 else mask.height
        if out_width < mask.width:
            _log.warning(
                "width %d is smaller than text %r width %d, widened to text width",
                out_width,
                text,
                mask.width,
                extra={"event": "glyph_box_widened"},
            )
            out_width = mask.width
        if out_height < mask.height:
            _log.warning(
                "height %d is smaller than text %r height %d, widened to text height",
                out_height,
                text,
                mask.height,
                extra={"event": "glyph_box_widened"},
            )
            out_height = mask.height
        mask = align_in_box(mask, options.alignment, out_width, out_height)

    return colorize(mask, decode_rgb(options.color))


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA", "PA")


def composite_over(layers: Sequence[Layer]) -> Image.Image:
    """Blend ``layers`` in order with "over"; the first layer is the base."""
    if not layers:
        raise ValueError("At least one layer is required")
    base, _, _ = layers[0]
    out = base.convert("RGBA")
    for image, x, y in layers[1:]:
        sheet = Image.new("RGBA", out.size, (0, 0, 0, 0))
        sheet.paste(image.convert("RGBA"), (x, y))
        out = Image.alpha_composite(out, sheet)
    return out if _has_alpha(base) else out.convert("RGB")


def join_vertical(pages: Sequence[Image.Image]) -> Image.Image:
    if not pages:
        raise ValueError("At least one page is required")
    width, page_height = pages[0].size
    mode = pages[0].mode
    strip = Image.new(mode, (width, page_height * len(pages)))
    for idx, page in enumerate(pages):
        if page.size != (width, page_height):
            raise ValueError(f"Page {idx} size {page.size} does not match {(width, page_height)}")
        strip.paste(page.convert(mode), (0, idx * page_height))
    strip.info["page-height"] = page_height
    return strip


def split_pages(strip: Image.Image) -> list[Image.Image]:
    page_height = int(strip.info.get("page-height", strip.height))
    if page_height <= 0 or strip.height % page_height != 0:
        raise ValueError(f"Strip height {strip.height} is not a multiple of page height {page_height}")
    return [strip.crop((0, top, strip.width, top + page_height)) for top in range(0, strip.height, page_height)]


def set_frame_delays(image: Image.Image, delays: Iterable[int]) -> None:
    image.info["duration"] = [int(d) for d in delays]
    image.info["loop"] = 0


def encode_to_buffer(image: Image.Image, format: str = "GIF") -> bytes:
    buf = BytesIO()
    if "page-height" in image.info:
        pages = split_pages(image)
        delays = image.info.get("duration") or [0] * len(pages)
        pages[0].save(
            buf,
            format=format,
            save_all=True,
            append_images=pages[1:],
            duration=list(delays),
            loop=int(image.info.get("loop", 0)),
        )
    else:
        image.save(buf, format=format)
    return buf.getvalue()


def format_for_path(path: str | Path, default: str = "GIF") -> str:
    suffix = Path(path).suffix.lower()
    return Image.registered_extensions().get(suffix, default)


def encode_to_file(image: Image.Image, path: str | Path, format: str | None = None) -> Path:
    path = Path(path)
    data = encode_to_buffer(image, format or format_for_path(path))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path
