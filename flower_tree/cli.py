"""Command line entry point.

Reads flower records, holds out a validation slice, fits a tree and prints
the report::

    flower-tree 0 10 3 < iris.data
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Sequence

from flower_tree.core import settings, FlowerTreeError
from flower_tree.dtree import NumpyRandomSource, TreeConfig
from flower_tree.dtree import format_report, read_records, load_records, run_experiment


logger = logging.getLogger(__name__)


def cmd_args(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Arguments for running the main application"""
    parser.add_argument("validation_start", type=int, help="First record of the validation set")
    parser.add_argument(
        "validation_end", type=int, help="One past the last record of the validation set"
    )
    parser.add_argument("max_depth", type=int, help="Maximum depth of the tree")
    parser.add_argument(
        "root_label", nargs="?", default="", help="Position label of the root node"
    )
    parser.add_argument("--input", "-i", help="Read records from this file instead of stdin")
    parser.add_argument(
        "--seed", type=int, default=settings.RANDOM_SEED,
        help="Seed for leaf tie-breaks. Random if not given",
    )
    parser.add_argument(
        "--skip-malformed", action="store_true", help="Skip malformed input lines"
    )
    parser.add_argument("--save", help="Save the fitted tree into this directory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Emit debug log messages")
    return parser


def logging_cfg(verbose: bool) -> None:
    level = logging.DEBUG if verbose else settings.LOG_LEVEL.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = cmd_args(argparse.ArgumentParser("flower-tree"))
    args = parser.parse_args(argv)
    logging_cfg(args.verbose)

    try:
        config = TreeConfig(max_depth=args.max_depth, root_label=args.root_label)
    except ValueError as e:
        parser.error(str(e))

    try:
        if args.input:
            records = load_records(args.input, skip_malformed=args.skip_malformed)
        else:
            records = read_records(sys.stdin, skip_malformed=args.skip_malformed)

        result = run_experiment(
            records,
            args.validation_start,
            args.validation_end,
            config=config,
            random_source=NumpyRandomSource(args.seed),
        )
    except (FlowerTreeError, OSError) as e:
        logger.debug("Experiment failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(format_report(result))

    if args.save:
        path = result.tree.save(args.save)
        logger.info(f"Saved tree to {path}")
    return 0


def run() -> None:
    sys.exit(main())


__all__: List[str] = ["main", "run", "cmd_args"]
