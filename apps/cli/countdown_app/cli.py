"""CLI entrypoints for countdown rendering, template validation, and text drawing."""

from __future__ import annotations

import argparse
import json
from importlib import metadata
from pathlib import Path

from countdown_core import ConfigurationError, Duration, TimeUnit, load_settings, load_template
from countdown_core.logging_setup import configure_logging, get_logger
from countdown_renderer import CountdownCanvas


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _installed_version() -> str:
    try:
        return metadata.version("countdown-animator")
    except Exception:
        return "0.1.0"


def _config_error(exc: ConfigurationError) -> int:
    get_logger("cli").error("configuration error: %s", exc, extra={"event": "configuration_error"})
    _print_json({"success": False, "field": exc.field, "error": str(exc)})
    return 2


def cmd_render(args: argparse.Namespace) -> int:
    settings = load_settings(Path(args.settings) if args.settings else None)
    workers = args.workers or settings.render.workers
    out = Path(args.out or f"countdown.{settings.render.output_format}")

    try:
        template = load_template(Path(args.template))
        canvas = CountdownCanvas.create_countdown(
            template,
            workers=workers,
            output_format=settings.render.output_format,
        )
        start = Duration(args.days, args.hours, args.minutes, args.seconds)
        written = canvas.render_countdown(start, frames=args.frames, out_path=out)
    except ConfigurationError as exc:
        return _config_error(exc)

    _print_json(
        {
            "success": True,
            "output": str(written),
            "frames": max(1, args.frames),
            "page_height": template.height,
            "start": start._asdict(),
        }
    )
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    try:
        template = load_template(Path(args.template))
    except ConfigurationError as exc:
        return _config_error(exc)

    _print_json(
        {
            "success": True,
            "width": template.width,
            "height": template.height,
            "bg_color": template.bg_color,
            "labels": [name for name, _ in template.ordered_labels()],
            "digit_positions": {
                unit.key: {"x": template.digits.position_for(unit).x, "y": template.digits.position_for(unit).y}
                for unit in TimeUnit
            },
            "text_template": template.digits.text_template,
        }
    )
    return 0


def cmd_create(args: argparse.Namespace) -> int:
    try:
        canvas = CountdownCanvas.create({"width": args.width, "height": args.height, "bgColor": args.bg_color})
    except ConfigurationError as exc:
        return _config_error(exc)
    written = canvas.save(Path(args.out))
    _print_json({"success": True, "output": str(written), "width": args.width, "height": args.height})
    return 0


def cmd_draw_text(args: argparse.Namespace) -> int:
    options = {"color": args.color}
    if args.font:
        options["font"] = args.font
    if args.font_file:
        options["fontFile"] = args.font_file

    canvas = CountdownCanvas.from_file(Path(args.input))
    try:
        canvas.draw_text(args.text, args.x, args.y, options)
    except ConfigurationError as exc:
        return _config_error(exc)
    written = canvas.save(Path(args.out))
    _print_json({"success": True, "output": str(written)})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="countdown", description="Countdown animation renderer and tools")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_installed_version()}")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render a countdown animation from a template")
    render_cmd.add_argument("--template", required=True, help="Path to countdown template JSON")
    render_cmd.add_argument("--days", type=int, default=0)
    render_cmd.add_argument("--hours", type=int, default=0)
    render_cmd.add_argument("--minutes", type=int, default=0)
    render_cmd.add_argument("--seconds", type=int, default=0)
    render_cmd.add_argument("--frames", type=int, default=1)
    render_cmd.add_argument("--out", default=None, help="Output file (defaults to countdown.<format>)")
    render_cmd.add_argument("--workers", type=int, default=None, help="Frame composition threads")
    render_cmd.add_argument("--settings", default=None, help="Optional settings JSON path")
    render_cmd.set_defaults(func=cmd_render)

    validate_cmd = sub.add_parser("validate", help="Validate a countdown template")
    validate_cmd.add_argument("--template", required=True, help="Path to countdown template JSON")
    validate_cmd.set_defaults(func=cmd_validate)

    create_cmd = sub.add_parser("create", help="Create a blank canvas image")
    create_cmd.add_argument("--width", type=int, required=True)
    create_cmd.add_argument("--height", type=int, required=True)
    create_cmd.add_argument("--bg-color", default="#FFFFFF")
    create_cmd.add_argument("--out", required=True)
    create_cmd.set_defaults(func=cmd_create)

    text_cmd = sub.add_parser("draw-text", help="Draw text onto an existing image")
    text_cmd.add_argument("--input", required=True)
    text_cmd.add_argument("--text", required=True)
    text_cmd.add_argument("--x", type=int, required=True)
    text_cmd.add_argument("--y", type=int, required=True)
    text_cmd.add_argument("--color", default="#000000")
    text_cmd.add_argument("--font", default=None, help='Font description, e.g. "sans 24"')
    text_cmd.add_argument("--font-file", default=None)
    text_cmd.add_argument("--out", required=True)
    text_cmd.set_defaults(func=cmd_draw_text)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings(Path(args.settings) if getattr(args, "settings", None) else None)
    configure_logging(
        keep_files=settings.logging.keep_files,
        console=settings.logging.console,
        level=settings.logging.level,
    )
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
