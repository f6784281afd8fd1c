"""Command line entry point for ScriptCheck.

Usage (from repo root, or via the installed ``script-check`` script):
    python -m analyzer.cli analyze ./sample.png --font arial
    python -m analyzer.cli analyze ./sample.png --compare ./reference.jpg --json
    python -m analyzer.cli fonts
    python -m analyzer.cli config --font helvetica
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from core.fonts import list_fonts
from file_handler import FileHandler
from settings import (
    get_font_preference,
    get_log_level,
    get_upload_dir,
    reset_settings,
    set_font_preference,
    set_upload_dir,
    settings_path,
)

from .pipeline import run_analysis
from .report import render_report

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="script-check",
        description="Compare a handwriting sample against a font or another image.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress (INFO)")
    sub = p.add_subparsers(dest="command", required=True)

    a = sub.add_parser("analyze", help="Analyze a handwriting sample")
    a.add_argument("sample", help="Image path or http(s) URL of the handwriting sample")
    target = a.add_mutually_exclusive_group()
    target.add_argument(
        "--font",
        default=None,
        help="Font to compare against (default: saved preference)",
    )
    target.add_argument(
        "--compare",
        default=None,
        metavar="IMAGE",
        help="Compare against another image instead of a font",
    )
    a.add_argument("--json", action="store_true", help="Print the record as JSON")
    a.add_argument("--output", default=None, help="Also write the JSON record to this file")
    a.add_argument("--uploads", default=None, help="Directory samples are copied into")

    sub.add_parser("fonts", help="List comparison fonts")

    c = sub.add_parser("config", help="Show or change saved settings")
    c.add_argument("--font", default=None, help="Save the default comparison font")
    c.add_argument("--uploads", default=None, help="Save the uploads directory")
    c.add_argument("--reset", action="store_true", help="Clear all saved settings")
    return p


def _cmd_analyze(args) -> int:
    fh = FileHandler(Path(args.uploads) if args.uploads else get_upload_dir())
    comparison_type = "image" if args.compare else "font"
    run = run_analysis(
        args.sample,
        comparison_type=comparison_type,
        font=args.font,
        comparison=args.compare,
        file_handler=fh,
    )
    payload = run.to_dict()
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        with out.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        logger.info("Wrote %s", out)
    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        sys.stdout.write(render_report(run))
    return 0


def _cmd_fonts(args) -> int:
    current = get_font_preference()
    for font in list_fonts():
        mark = "*" if font.key == current else " "
        print(f"{mark} {font.key:<10} {font.name}")
    return 0


def _cmd_config(args) -> int:
    if args.reset:
        reset_settings()
    if args.font:
        set_font_preference(args.font)
    if args.uploads:
        set_upload_dir(args.uploads)
    print(f"settings: {settings_path()}")
    print(f"font:     {get_font_preference()}")
    print(f"uploads:  {get_upload_dir()}")
    return 0


_COMMANDS = {
    "analyze": _cmd_analyze,
    "fonts": _cmd_fonts,
    "config": _cmd_config,
}


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    level = "INFO" if args.verbose else get_log_level()
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return _COMMANDS[args.command](args)
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
