"""
Command-line entry point for the Terminal File Explorer.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError
from rich.console import Console

from .errors import CommandError
from .models.config import ExplorerConfig
from .models.criteria import FilterCriteria
from .session.loop import ExplorerSession
from .session.parser import parse_date_range, parse_kind, parse_size_range
from .tools.lister import DirectoryLister


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="explorer",
        description="Browse a directory as an aligned table, filter it and open files",
    )
    parser.add_argument("path", nargs="?", default=".", help="Directory to start in (default: current)")
    parser.add_argument("--once", action="store_true", help="Print one listing and exit")
    parser.add_argument("--search", help="Only list names containing this text (case-insensitive)")
    parser.add_argument("--type", dest="kind", help="Only list files (f) or directories (d)")
    parser.add_argument("--size", help="Size range such as 10K-1M, or a single upper bound")
    parser.add_argument("--date", help="Modification date range such as 2024-01-01..2024-03-31")
    parser.add_argument("--no-color", action="store_true", help="Do not style directory names")
    parser.add_argument("--no-clear", action="store_true", help="Do not clear the screen between listings")
    parser.add_argument(
        "--no-follow-symlinks",
        action="store_true",
        help="List symbolic links as 'Other' instead of by their target type",
    )
    parser.add_argument("--log-level", default="WARNING", help="Diagnostic log level (default: WARNING)")
    return parser


def build_config(args: argparse.Namespace) -> ExplorerConfig:
    return ExplorerConfig(
        color=not args.no_color,
        clear_screen=not args.no_clear,
        follow_symlinks=not args.no_follow_symlinks,
        log_level=args.log_level,
    )


def build_criteria(args: argparse.Namespace) -> FilterCriteria:
    """Initial criteria from the filter options, parsed like session commands."""
    updates = {}
    if args.size:
        updates['min_size'], updates['max_size'] = parse_size_range(args.size)
    if args.kind:
        updates['kind'] = parse_kind(args.kind)
    if args.date:
        updates['min_modified_at'], updates['max_modified_at'] = parse_date_range(args.date)
    if args.search:
        updates['search_term'] = args.search
    return FilterCriteria(**updates)


def configure_logging(config: ExplorerConfig) -> None:
    logging.basicConfig(level=config.get_log_level(), format=LOG_FORMAT, stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
        criteria = build_criteria(args)
    except (CommandError, ValidationError) as e:
        parser.error(str(e))

    configure_logging(config)

    console = Console(highlight=False, no_color=not config.color)
    error_console = Console(stderr=True, highlight=False)

    if args.once:
        lister = DirectoryLister(config, console, error_console)
        result = lister.render(args.path, criteria)
        return 0 if result.ok else 1

    session = ExplorerSession(args.path, config, criteria, console, error_console)
    session.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
