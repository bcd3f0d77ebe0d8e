from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from ..aggregate.options import ScoreFilter, parse_diff_flags
from ..exceptions import InvalidFilterOptionError, PngCompareError, UsageError
from ..services.aggregation import run_aggregation
from . import ArgumentParser, configure_logging

logger = logging.getLogger("png_compare.cli")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="png-aggregate",
        description="Filters results created by png-compare based on similarity score",
    )
    parser.add_argument("-i", "--input", type=Path, help="Directory containing image comparison results")
    parser.add_argument("-o", "--output", type=Path, help="Directory to store aggregate results in")
    parser.add_argument(
        "-s",
        "--score-filter",
        default=ScoreFilter.LESS.value,
        help="Only include outputs with a score below (less) or above (more) the threshold",
    )
    parser.add_argument(
        "-d",
        "--diff-flags",
        default="rgb,hsv,mask",
        help="Comma separated list of diff image types to include (valid types: rgb,hsv,mask)",
    )
    parser.add_argument("-t", "--threshold", type=float, default=100.0, help="Score threshold to compare against")
    parser.add_argument(
        "--exclude-inputs",
        action="store_true",
        help="Exclude source input images (only computed diff images are included in the result)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Print copy actions without actually copying")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    command = list(sys.argv) if argv is None else [parser.prog, *argv]
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        print(f"error: {exc}", file=sys.stderr)
        parser.print_help()
        return 1

    if args.input is None or args.output is None:
        parser.print_help()
        return 0

    configure_logging(args.verbose)
    try:
        score_filter = ScoreFilter.parse(args.score_filter)
    except InvalidFilterOptionError as exc:
        logger.error("%s", exc)
        parser.print_help()
        return 1
    diff_flags = parse_diff_flags(args.diff_flags)

    try:
        run_aggregation(
            args.input,
            args.output,
            score_filter=score_filter,
            threshold=args.threshold,
            diff_flags=diff_flags,
            exclude_inputs=args.exclude_inputs,
            dry_run=args.dry_run,
            command=command,
        )
    except PngCompareError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
