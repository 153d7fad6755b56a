"""CLI entry point: capture one frame of a video to an image file."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import __version__
from .config import ThumbnailConfig, load_env_file
from .engine import ThumbnailGenerator
from .errors import ThumbnailError
from .probe import describe_image
from .request import OutputFormat, ThumbnailRequest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Capture a video frame with cvlc")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("source", type=Path, help="Video file to snapshot")
    parser.add_argument("output", type=Path, help="Where to write the image (no extension is added)")
    parser.add_argument(
        "-t", "--time", type=int, default=0, help="Second of the video to capture (default: 0)"
    )
    parser.add_argument(
        "-f",
        "--format",
        default="jpeg",
        choices=[f.name.lower() for f in OutputFormat],
        help="Image format (default: jpeg)",
    )
    parser.add_argument(
        "--work-dir", type=Path, default=None, help="Directory for the temporary snapshot"
    )
    parser.add_argument("--cvlc", type=Path, default=None, help="Path to the cvlc binary")
    parser.add_argument(
        "--disable-hw-codec", action="store_true", help="Force CPU decoding (--avcodec-hw none)"
    )
    parser.add_argument(
        "--timeout", type=float, default=None, help="Kill cvlc after this many seconds"
    )
    parser.add_argument(
        "--verify", action="store_true", help="Check the written image decodes as the requested format"
    )
    parser.add_argument(
        "--show-log", action="store_true", help="Print cvlc stdout/stderr when the capture fails"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _config_from_args(args: argparse.Namespace) -> ThumbnailConfig:
    config = ThumbnailConfig.from_env()
    overrides = {}
    if args.work_dir is not None:
        overrides["work_dir"] = args.work_dir
    if args.cvlc is not None:
        overrides["binary_path"] = args.cvlc
    if args.disable_hw_codec:
        overrides["disable_hw_codec"] = True
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    return dataclasses.replace(config, **overrides)


def main(argv: Sequence[str] | None = None) -> int:
    # Load .env if present (ignored if values already in env)
    load_env_file()

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be > 0")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    request = ThumbnailRequest(source=args.source, output_format=args.format, timestamp=args.time)
    try:
        generator = ThumbnailGenerator(_config_from_args(args))
        generator.generate_to(request, args.output)
    except ThumbnailError as exc:
        print(f"error: {exc}", file=sys.stderr)
        if args.show_log:
            stdout, stderr = request.command_log()
            print("--- cvlc stdout ---", file=sys.stderr)
            print(stdout.decode("utf-8", errors="replace"), file=sys.stderr)
            print("--- cvlc stderr ---", file=sys.stderr)
            print(stderr.decode("utf-8", errors="replace"), file=sys.stderr)
        return 1

    if request.cleanup_error is not None:
        print(f"warning: {request.cleanup_error}", file=sys.stderr)

    if args.verify:
        try:
            info = describe_image(args.output.read_bytes())
        except ValueError as exc:
            print(f"error: {args.output}: {exc}", file=sys.stderr)
            return 1
        if not info.matches(request.output_format):
            print(
                f"error: {args.output} is {info.format}, expected {request.output_format.name}",
                file=sys.stderr,
            )
            return 1
        print(f"{args.output} ({info.format} {info.width}x{info.height})")
    else:
        print(args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
