"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .logging_setup import config_root


SETTINGS_VERSION = 1
OUTPUT_FORMATS = ("gif", "webp")
MAX_WORKERS = 32


@dataclass
class RenderSettings:
    workers: int = 1
    output_format: str = "gif"


@dataclass
class LoggingSettings:
    level: str = "INFO"
    keep_files: int = 7
    console: bool = True


@dataclass
class AppSettings:
    settings_version: int = SETTINGS_VERSION
    render: RenderSettings = field(default_factory=RenderSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


def settings_path() -> Path:
    return config_root() / "settings.json"


def _merge(dataclass_type, raw: Any):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_render(settings: AppSettings) -> None:
    try:
        workers = int(settings.render.workers)
    except (TypeError, ValueError):
        workers = 1
    settings.render.workers = max(1, min(MAX_WORKERS, workers))
    fmt = str(settings.render.output_format).lower()
    settings.render.output_format = fmt if fmt in OUTPUT_FORMATS else "gif"


def _normalize_logging(settings: AppSettings) -> None:
    level = str(settings.logging.level).upper()
    settings.logging.level = level if isinstance(logging.getLevelName(level), int) else "INFO"
    try:
        settings.logging.keep_files = max(2, int(settings.logging.keep_files))
    except (TypeError, ValueError):
        settings.logging.keep_files = 7
    settings.logging.console = bool(settings.logging.console)


def load_settings(path: Path | None = None) -> AppSettings:
    path = path or settings_path()
    if not path.exists():
        return AppSettings()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        return AppSettings()
    if not isinstance(raw, dict):
        return AppSettings()

    settings = AppSettings(
        settings_version=SETTINGS_VERSION,
        render=_merge(RenderSettings, raw.get("render", {})),
        logging=_merge(LoggingSettings, raw.get("logging", {})),
    )

    _normalize_render(settings)
    _normalize_logging(settings)
    return settings


def save_settings(settings: AppSettings, path: Path | None = None) -> Path:
    settings.settings_version = SETTINGS_VERSION
    path = path or settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(settings), indent=2, sort_keys=True), encoding="utf-8")
    return path
