from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from ..exceptions import PngCompareError, UsageError
from ..services.comparison import run_comparison
from . import ArgumentParser, configure_logging

logger = logging.getLogger("png_compare.cli")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="png-compare",
        description="Compute the SSIM similarity of two images and write difference images",
    )
    parser.add_argument("image1", type=Path, help="First image")
    parser.add_argument("image2", type=Path, help="Second image")
    parser.add_argument("output_dir", type=Path, help="Directory to store the result directory in")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        print(f"Usage: {parser.prog} <image1.png> <image2.png> <output_dir>", file=sys.stderr)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    configure_logging(args.verbose)
    try:
        result = run_comparison(args.image1, args.image2, args.output_dir)
    except PngCompareError as exc:
        logger.error("%s", exc)
        return 1
    print(f"Similarity: {result.score:.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
