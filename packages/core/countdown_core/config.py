"""Countdown template schema parsing and validation.

Raw option mappings (decoded JSON or caller dicts) are turned into the frozen
models in :mod:`countdown_core.models`. Parsing is fail-fast: the first invalid
field raises :class:`ConfigurationError` naming it, and nothing past it is
examined. Fields are checked in this order:

* creation options: ``width``, ``height``, ``bgColor``
* template: creation options, ``labels``, ``digits``
* label: ``text``, ``paddingTop``, ``paddingBottom``, ``position``, ``color``,
  ``textAlignment``, ``font``, ``fontFile``
* position: ``x``, ``y``, ``width``, ``height``
* digits: ``positions`` (``days``, ``hours``, ``minutes``, ``seconds``),
  ``style``, ``textTemplate``
* digit style: ``color``, ``width``, ``height``, ``textAlignment``, ``font``,
  ``fontFile``, ``paddingTop``, ``paddingBottom``
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigurationError, DurationError
from .models import (
    DEFAULT_BG_COLOR,
    DEFAULT_TEXT_COLOR,
    GLYPH_COUNT,
    TIME_UNITS,
    Alignment,
    CountdownTemplate,
    CreationOptions,
    DigitLayout,
    DigitPosition,
    DigitStyle,
    Duration,
    LabelSpec,
    Position2D,
    TextOptions,
)


_MISSING = object()


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _mapping(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{path} must be an object", path)
    return value


def _required(raw: Mapping[str, Any], key: str, path: str) -> Any:
    if key not in raw:
        name = _join(path, key)
        raise ConfigurationError(f"Missing {name} attribute", name)
    return raw[key]


def _as_int(value: Any, name: str) -> int:
    # bool is an int subclass but never a valid coordinate or size.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number", name)
    return int(value)


def _number(raw: Mapping[str, Any], key: str, path: str, default: Any = _MISSING) -> int:
    name = _join(path, key)
    if key not in raw:
        if default is _MISSING:
            raise ConfigurationError(f"Missing {name} attribute", name)
        return default
    return _as_int(raw[key], name)


def _non_negative(raw: Mapping[str, Any], key: str, path: str) -> int:
    value = _number(raw, key, path, default=0)
    if value < 0:
        name = _join(path, key)
        raise ConfigurationError(f"{name} must be a non-negative number", name)
    return value


def _string(raw: Mapping[str, Any], key: str, path: str, default: Any = None) -> Any:
    if key not in raw:
        return default
    value = raw[key]
    if not isinstance(value, str):
        name = _join(path, key)
        raise ConfigurationError(f"{name} must be a string", name)
    return value


def _hex_color(raw: Mapping[str, Any], key: str, path: str, default: str) -> str:
    value = _string(raw, key, path, default=default)
    if not value.startswith("#"):
        name = _join(path, key)
        raise ConfigurationError(f"{name} must be a hexadecimal string starting with '#'", name)
    return value


def _alignment(raw: Mapping[str, Any], key: str, path: str) -> Alignment:
    value = _string(raw, key, path)
    if value is None:
        return Alignment.CENTRE
    alignment = Alignment.lookup(value)
    if alignment is None:
        name = _join(path, key)
        choices = ", ".join(a.value for a in Alignment)
        raise ConfigurationError(f"{name} must be one of: {choices}", name)
    return alignment


def parse_creation_options(raw: Any, path: str = "") -> CreationOptions:
    raw = _mapping(raw, path or "options")
    width = _number(raw, "width", path)
    height = _number(raw, "height", path)
    for key, value in (("width", width), ("height", height)):
        if value <= 0:
            name = _join(path, key)
            raise ConfigurationError(f"{name} must be a positive number", name)
    bg_color = _hex_color(raw, "bgColor", path, DEFAULT_BG_COLOR)
    return CreationOptions(width=width, height=height, bg_color=bg_color)


def parse_position(raw: Any, path: str = "position") -> Position2D:
    raw = _mapping(raw, path)
    return Position2D(
        x=_number(raw, "x", path),
        y=_number(raw, "y", path),
        width=_non_negative(raw, "width", path),
        height=_non_negative(raw, "height", path),
    )


def parse_label(raw: Any, path: str = "label", require_text: bool = True) -> LabelSpec:
    raw = _mapping(raw, path)
    if require_text:
        _required(raw, "text", path)
    text = _string(raw, "text", path, default="")
    padding_top = _non_negative(raw, "paddingTop", path)
    padding_bottom = _non_negative(raw, "paddingBottom", path)
    position = parse_position(_required(raw, "position", path), _join(path, "position"))
    return LabelSpec(
        text=text,
        position=position,
        padding_top=padding_top,
        padding_bottom=padding_bottom,
        color=_string(raw, "color", path),
        text_alignment=_alignment(raw, "textAlignment", path),
        font=_string(raw, "font", path),
        font_file=_string(raw, "fontFile", path),
    )


def parse_digit_style(raw: Any, path: str = "digits.style") -> DigitStyle:
    raw = _mapping(raw, path)
    return DigitStyle(
        color=_hex_color(raw, "color", path, DEFAULT_TEXT_COLOR),
        width=_non_negative(raw, "width", path),
        height=_non_negative(raw, "height", path),
        text_alignment=_alignment(raw, "textAlignment", path),
        font=_string(raw, "font", path),
        font_file=_string(raw, "fontFile", path),
        padding_top=_non_negative(raw, "paddingTop", path),
        padding_bottom=_non_negative(raw, "paddingBottom", path),
    )


def _text_template(raw: Mapping[str, Any], path: str) -> str | None:
    template = _string(raw, "textTemplate", path)
    if not template:
        return None
    try:
        template % "00"
    except (TypeError, ValueError) as exc:
        name = _join(path, "textTemplate")
        raise ConfigurationError(f"{name} must contain a single %s placeholder", name) from exc
    return template


def parse_digits(raw: Any, path: str = "digits") -> DigitLayout:
    raw = _mapping(raw, path)
    positions_path = _join(path, "positions")
    positions_raw = _mapping(_required(raw, "positions", path), positions_path)

    positions = []
    for unit in TIME_UNITS:
        unit_path = _join(positions_path, unit.key)
        entry = _mapping(_required(positions_raw, unit.key, positions_path), unit_path)
        position = parse_position(_required(entry, "position", unit_path), _join(unit_path, "position"))
        positions.append(DigitPosition(position=position))

    style = DigitStyle()
    if "style" in raw:
        style = parse_digit_style(raw["style"], _join(path, "style"))

    return DigitLayout(positions=tuple(positions), style=style, text_template=_text_template(raw, path))


def parse_template(raw: Any) -> CountdownTemplate:
    """Validate a full countdown template mapping."""
    creation = parse_creation_options(raw)

    labels_raw = _mapping(_required(raw, "labels", ""), "labels")
    labels = {}
    for key, value in labels_raw.items():
        labels[str(key)] = parse_label(value, _join("labels", str(key)))

    digits = parse_digits(_required(raw, "digits", ""))
    return CountdownTemplate(
        width=creation.width,
        height=creation.height,
        bg_color=creation.bg_color,
        labels=labels,
        digits=digits,
    )


def parse_duration(raw: Any, path: str = "start") -> Duration:
    """Validate a start duration; every unit must index the 00..99 glyph table."""
    if isinstance(raw, Duration):
        raw = raw._asdict()
    if not isinstance(raw, Mapping):
        raise DurationError(f"{path} must be an object", path)

    values = []
    for unit in TIME_UNITS:
        name = _join(path, unit.key)
        if unit.key not in raw:
            raise DurationError(f"Missing {name} attribute", name)
        value = raw[unit.key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise DurationError(f"{name} must be an integer", name)
        if not 0 <= value < GLYPH_COUNT:
            raise DurationError(f"{name} must be between 0 and {GLYPH_COUNT - 1}", name)
        values.append(value)
    return Duration(*values)


def parse_text_options(raw: Any) -> TextOptions:
    if raw is None:
        return TextOptions()
    raw = _mapping(raw, "options")
    return TextOptions(
        font=_string(raw, "font", ""),
        font_file=_string(raw, "fontFile", ""),
        color=_hex_color(raw, "color", "", DEFAULT_TEXT_COLOR),
    )


def load_template(path: Path) -> CountdownTemplate:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"template {path} is not valid JSON: {exc}") from exc
    return parse_template(raw)
