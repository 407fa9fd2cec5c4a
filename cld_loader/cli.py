"""Command-line entry point for Cloudinary URL optimization."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Sequence

from .config import DEFAULT_DEVICE_SIZES, DEFAULT_IMAGE_SIZES, ImageConfig
from .content import rewrite_html
from .loader import build_srcset, for_width, format_srcset, optimize

logger = logging.getLogger("cld_loader.cli")


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return argv
    first = argv[0]
    if first in commands or first.startswith("-"):
        return argv
    return ("optimize", *argv)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def _size_list(value: str) -> List[int]:
    try:
        return [_positive_int(part) for part in value.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid size list {value!r}") from exc


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _add_size_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--device-sizes",
        type=_size_list,
        default=list(DEFAULT_DEVICE_SIZES),
        help="Comma-separated viewport widths used for srcset generation",
    )
    parser.add_argument(
        "--image-sizes",
        type=_size_list,
        default=list(DEFAULT_IMAGE_SIZES),
        help="Comma-separated fixed image widths used for srcset generation",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Rewrite Cloudinary image URLs into canonical f_auto/q_auto delivery form.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    optimize_parser = subparsers.add_parser(
        "optimize", help="Apply f_auto/q_auto without a width constraint"
    )
    optimize_parser.add_argument("urls", nargs="+", help="One or more image URLs")
    _add_common_arguments(optimize_parser)

    width_parser = subparsers.add_parser(
        "width", help="Produce width-bound responsive variants"
    )
    width_parser.add_argument("urls", nargs="+", help="One or more image URLs")
    width_parser.add_argument(
        "--width",
        type=_positive_int,
        required=True,
        help="Target width in pixels",
    )
    width_parser.add_argument(
        "--quality",
        type=_positive_int,
        default=None,
        help="Requested quality; accepted for loader parity, output always uses q_auto",
    )
    _add_common_arguments(width_parser)

    srcset_parser = subparsers.add_parser("srcset", help="Print an srcset attribute value")
    srcset_parser.add_argument("url", help="Image URL")
    srcset_parser.add_argument(
        "--width",
        type=_positive_int,
        default=None,
        help="Fixed display width; emits 1x/2x candidates instead of w descriptors",
    )
    _add_size_arguments(srcset_parser)
    _add_common_arguments(srcset_parser)

    html_parser = subparsers.add_parser("html", help="Rewrite Cloudinary images in an HTML file")
    html_parser.add_argument("path", type=Path, help="HTML file to rewrite")
    html_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the rewritten HTML here instead of STDOUT",
    )
    html_parser.add_argument(
        "--width",
        type=_positive_int,
        default=None,
        help="Bind every rewritten <img> to this width",
    )
    _add_size_arguments(html_parser)
    _add_common_arguments(html_parser)

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def _write_lines(lines: Iterable[str]) -> None:
    for line in lines:
        sys.stdout.write(line + "\n")
    sys.stdout.flush()


def _image_config(args: argparse.Namespace) -> ImageConfig:
    return ImageConfig(device_sizes=args.device_sizes, image_sizes=args.image_sizes)


def _report_quality(quality: int | None, config: ImageConfig) -> None:
    if quality is None:
        return
    logger.debug(
        "Requested quality %d (nearest allowed %s); URLs carry q_auto",
        quality,
        config.closest_quality(quality),
    )


def _run_html(args: argparse.Namespace) -> None:
    try:
        html = args.path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to read %s: %s", args.path, exc)
        raise SystemExit(1) from exc

    result = rewrite_html(html, _image_config(args), width=args.width)
    for image in result.images:
        logger.debug("%s -> %s", image.original_src, image.optimized_src)

    if args.output is None:
        sys.stdout.write(result.html)
        sys.stdout.flush()
        return
    try:
        args.output.write_text(result.html, encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to write %s: %s", args.output, exc)
        raise SystemExit(1) from exc
    logger.info("Wrote %s (%d image(s) rewritten)", args.output, len(result.images))


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    if args.command == "optimize":
        _write_lines(optimize(url) for url in args.urls)
    elif args.command == "width":
        _report_quality(args.quality, ImageConfig())
        _write_lines(for_width(url, args.width, args.quality) for url in args.urls)
    elif args.command == "srcset":
        entries = build_srcset(args.url, _image_config(args), width=args.width)
        _write_lines([format_srcset(entries)])
    else:
        _run_html(args)


if __name__ == "__main__":
    main()
