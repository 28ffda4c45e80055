"""
Command-line cover renderer.

Usage:
    coverforge <preset.json> [output_dir] [--background PATH] [--logo PATH]
               [--title-font PATH] [--body-font PATH] [--viewport WxH]
               [--save-preset PATH]

--save-preset accepts a file path or a directory; a directory gets
cover-preset.json inside it.

Output is written as JSON to stdout:
    {"output_image": "...", "preview_image": "..." | null, "preset_file": "..." | null}

All progress/debug messages go to stderr.
"""

from __future__ import annotations

import json
import logging
import os
import sys

from .constants import (
    DEFAULT_BACKGROUND_PATH,
    DEFAULT_BODY_FONT_PATH,
    DEFAULT_LOGO_PATH,
    DEFAULT_TITLE_FONT_PATH,
    EXPORT_FILENAME,
    PRESET_FILENAME,
)
from .errors import InvalidPresetError
from .presets import Fields, load_preset
from .session import CoverSession

log = logging.getLogger("coverforge")

_OPTIONS = {
    "--background": "background",
    "--logo": "logo",
    "--title-font": "title_font",
    "--body-font": "body_font",
    "--viewport": "viewport",
    "--save-preset": "save_preset",
}


def _fatal(msg: str) -> None:
    """Print an error to stderr and exit with code 1."""
    print(f"[coverforge] ERROR: {msg}", file=sys.stderr)
    sys.exit(1)


def _parse_viewport(value: str) -> tuple[int, int]:
    try:
        w, h = value.lower().split("x", 1)
        return int(w), int(h)
    except ValueError:
        _fatal(f"Invalid viewport {value!r}, expected WIDTHxHEIGHT")


def parse_args(argv: list[str]) -> dict:
    opts = {
        "preset": None,
        "output_dir": None,
        "background": DEFAULT_BACKGROUND_PATH,
        "logo": DEFAULT_LOGO_PATH,
        "title_font": DEFAULT_TITLE_FONT_PATH,
        "body_font": DEFAULT_BODY_FONT_PATH,
        "viewport": None,
        "save_preset": None,
    }
    positional = []
    args = iter(argv)
    for arg in args:
        if arg in _OPTIONS:
            value = next(args, None)
            if value is None:
                _fatal(f"Missing value for {arg}")
            opts[_OPTIONS[arg]] = value
        else:
            positional.append(arg)

    if not 1 <= len(positional) <= 2:
        _fatal(f"Usage: coverforge <preset.json> [output_dir] [{' '.join(_OPTIONS)}]")
    opts["preset"] = positional[0]
    opts["output_dir"] = positional[1] if len(positional) == 2 else None
    if opts["viewport"] is not None:
        opts["viewport"] = _parse_viewport(opts["viewport"])
    return opts


def run(opts: dict) -> dict:
    """Render the cover described by *opts*; returns the output paths."""
    try:
        fields = Fields().merged(load_preset(opts["preset"]))
    except InvalidPresetError as exc:
        _fatal(str(exc))

    output_dir = opts["output_dir"] or os.path.dirname(os.path.abspath(opts["preset"]))
    os.makedirs(output_dir, exist_ok=True)

    session = CoverSession(fields=fields)
    if opts["viewport"] is not None:
        session.resize(*opts["viewport"])
    session.load_fonts(opts["title_font"], opts["body_font"])
    session.load_background(opts["background"])
    session.load_logo(opts["logo"])

    preview_image = None
    if opts["viewport"] is not None:
        stem, ext = os.path.splitext(EXPORT_FILENAME)
        preview_image = session.live.to_png(os.path.join(output_dir, f"{stem}-preview{ext}"))

    output_image = session.export_png(os.path.join(output_dir, EXPORT_FILENAME))
    if output_image is None:
        _fatal("Failed to export at native resolution")

    preset_file = None
    if opts["save_preset"]:
        preset_path = opts["save_preset"]
        if os.path.isdir(preset_path):
            preset_path = os.path.join(preset_path, PRESET_FILENAME)
        preset_file = session.save_preset(preset_path)
    return {"output_image": output_image, "preview_image": preview_image, "preset_file": preset_file}


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(stream=sys.stderr, level=logging.INFO, format="[%(name)s] %(message)s")
    opts = parse_args(sys.argv[1:] if argv is None else argv)
    result = run(opts)
    print(json.dumps(result))


if __name__ == "__main__":
    main()
