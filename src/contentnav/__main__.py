"""Command-line entry point: validate the content tree and print the report."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from contentnav.config import CONTENTNAV_CONTENT_DIR, CONTENTNAV_REQUIRE_COMPLETE_ORDERING
from contentnav.pipeline import BuildOptions, build_navigation_sync

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contentnav",
        description="Validate the article tree and build its navigation model.",
    )
    parser.add_argument(
        "--content-dir",
        type=Path,
        default=CONTENTNAV_CONTENT_DIR,
        help="Directory holding articles/ and the JSON5 files (default: %(default)s)",
    )
    parser.add_argument(
        "--summary", type=Path, help="Write the JSON validation summary to this path"
    )
    parser.add_argument(
        "--output", type=Path, help="Write the navigation model as JSON to this path"
    )
    parser.add_argument(
        "--strict-ordering",
        action="store_true",
        default=CONTENTNAV_REQUIRE_COMPLETE_ORDERING,
        help="Warn about nodes missing from ordering.json5",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    result = build_navigation_sync(
        BuildOptions(content_dir=args.content_dir, require_complete_ordering=args.strict_ordering)
    )
    if args.verbose:
        result.reporter.log(logger)
    print(result.reporter.render())

    if args.summary:
        path = result.reporter.write_summary(args.summary)
        logger.info("Summary saved to: %s", path)
    if args.output and result.model is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(result.model.model_dump_json(indent=2) + "\n", encoding="utf-8")
        logger.info("Navigation model saved to: %s", args.output)

    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
