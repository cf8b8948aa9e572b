"""Command-line interface for tricolor.

With no arguments, reads input.png and writes red_image.png,
black_image.png and result.png in the current directory.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from tricolor.core.dither import Window
from tricolor.core.processor import Settings, StageError

ERROR_CODES = {
    "load": "LOAD_FAILED",
    "dither": "DITHER_FAILED",
    "save": "SAVE_FAILED",
}


def _build_parser() -> argparse.ArgumentParser:
    defaults = Settings()
    parser = argparse.ArgumentParser(
        prog="tricolor-dither",
        description="Dither an image to black/white/red and split it into ink planes.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=str(defaults.input_path),
        help=f"Input image path (default: {defaults.input_path}).",
    )
    parser.add_argument(
        "--red-output",
        default=str(defaults.red_path),
        help=f"Red-only plane output path (default: {defaults.red_path}).",
    )
    parser.add_argument(
        "--black-output",
        default=str(defaults.black_path),
        help=f"Black-only plane output path (default: {defaults.black_path}).",
    )
    parser.add_argument(
        "--result-output",
        default=str(defaults.result_path),
        help=f"Combined tri-color output path (default: {defaults.result_path}).",
    )
    parser.add_argument(
        "--window",
        type=int,
        nargs=4,
        metavar=("X", "Y", "W", "H"),
        help="Render only this region of the source. Parts outside the image "
        "are filled with a checkerboard.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON (pipe-friendly).",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error (with --json).",
    )
    return parser


def _json_error(message: str, code: str, stage: str | None = None) -> None:
    """Print JSON error to stderr and exit with code 1."""
    err = {"status": "error", "error": message, "code": code}
    if stage:
        err["stage"] = stage
    print(json.dumps(err), file=sys.stderr)
    sys.exit(1)


def _settings_from_args(args: argparse.Namespace) -> Settings:
    return Settings(
        input_path=Path(args.input),
        red_path=Path(args.red_output),
        black_path=Path(args.black_output),
        result_path=Path(args.result_output),
        window=Window(*args.window) if args.window else None,
    )


def _run(args: argparse.Namespace) -> None:
    """Run the pipeline and report the outcome."""
    from tricolor.core.processor import run

    settings = _settings_from_args(args)
    is_json = args.json
    verbose = not (is_json or args.quiet)

    def on_progress(row: int, total: int) -> None:
        if verbose:
            end = "\n" if row == total else ""
            print(f"\rDithering row {row}/{total}...", end=end, file=sys.stderr)

    def on_saved(path: Path) -> None:
        if verbose:
            print(f"Saved {path}", file=sys.stderr)

    try:
        result = run(settings, on_progress=on_progress, on_saved=on_saved)
    except StageError as e:
        if is_json:
            if args.debug:
                import traceback
                traceback.print_exception(e.cause, file=sys.stderr)
            code = ERROR_CODES[e.stage]
            if isinstance(e.cause, FileNotFoundError):
                code = "FILE_NOT_FOUND"
            _json_error(str(e.cause), code, stage=e.stage)
        else:
            print(f"\nError during {e.stage}: {e.cause}", file=sys.stderr)
            sys.exit(1)

    if verbose:
        print("Done.", file=sys.stderr)
    elif is_json:
        output = {
            "status": "success",
            "input": str(settings.input_path),
            "outputs": {
                "red_only": str(settings.red_path),
                "black_only": str(settings.black_path),
                "combined": str(settings.result_path),
            },
            "metadata": {
                "input_format": result.info.format,
                "input_mode": result.info.mode,
                "input_width": result.info.width,
                "input_height": result.info.height,
                "output_width": result.planes.width,
                "output_height": result.planes.height,
            },
        }
        print(json.dumps(output, indent=2))


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _run(args)
