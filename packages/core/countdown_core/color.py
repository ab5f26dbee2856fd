"""Hexadecimal colour decoding.

Accepted forms are ``#RGB``, ``#ARGB``, ``#RRGGBB`` and ``#AARRGGBB``. Decoding
is lenient: anything else decodes to transparent black instead of raising.
Strict ``#`` checks belong to the template parser, not here.
"""

from __future__ import annotations

import string

from .logging_setup import get_logger

_log = get_logger("color")

TRANSPARENT_BLACK: tuple[int, int, int, int] = (0, 0, 0, 0)


def decode_argb(value: str) -> tuple[int, int, int, int]:
    """Return ``(alpha, red, green, blue)`` bytes for a hex colour string."""
    if not isinstance(value, str) or len(value) not in (4, 5, 7, 9) or value[0] != "#":
        _log.debug("colour %r not decodable, using transparent black", value, extra={"event": "color_fallback"})
        return TRANSPARENT_BLACK

    digits = value[1:]
    # int(..., 16) also takes signs and whitespace, so check the digits first.
    if not all(ch in string.hexdigits for ch in digits):
        _log.debug("colour %r has non-hex digits, using transparent black", value, extra={"event": "color_fallback"})
        return TRANSPARENT_BLACK

    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) == 6:
        digits = "FF" + digits

    alpha, red, green, blue = (int(digits[i : i + 2], 16) for i in (0, 2, 4, 6))
    return alpha, red, green, blue


def decode_rgb(value: str) -> tuple[int, int, int]:
    _, red, green, blue = decode_argb(value)
    return red, green, blue
