#!/usr/bin/env python3
"""
Look up player names in the published pickleball rankings.

Fetches the current doubles (or singles) rankings page, matches each name
and prints the players ordered by rating.

Usage:
    # Names on the command line (comma, pipe or newline separated)
    python scripts/resolve_rankings.py "Francisco Castillo, Big Show"

    # Singles rankings, names from a file, JSON output
    python scripts/resolve_rankings.py --mode singles --file names.txt --json

    # Names from stdin
    cat names.txt | python scripts/resolve_rankings.py -
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dinkrank.config import settings
from dinkrank.errors import RankingsError
from dinkrank.scrape.source import MODES
from dinkrank.services.rankings import DocumentSource, render_markdown, resolve_names

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Look up player ratings in the pickleball rankings")
    parser.add_argument("names", nargs="*",
                        help="Player names; use '-' to read them from stdin")
    parser.add_argument("--mode", type=str.lower, choices=MODES, default="doubles",
                        help="Which rankings table to use")
    parser.add_argument("--file", type=Path,
                        help="Read names from a file (one per line, or comma separated)")
    parser.add_argument("--json", action="store_true",
                        help="Print JSON instead of a markdown table")
    return parser


def collect_names(args: argparse.Namespace) -> str:
    """Join every name source into one pasted-list string."""
    chunks = []
    for value in args.names:
        if value == "-":
            chunks.append(sys.stdin.read())
        else:
            chunks.append(value)
    if args.file:
        chunks.append(args.file.read_text(encoding="utf-8"))
    return "\n".join(chunks)


def run(argv: Optional[list[str]] = None, source: Optional[DocumentSource] = None) -> int:
    """
    Run the lookup and print the result.

    Returns:
        Process exit code (0 on success, 1 on any lookup error)
    """
    args = build_parser().parse_args(argv)

    try:
        result = resolve_names(collect_names(args), args.mode, source=source)
    except RankingsError as e:
        logger.error("Lookup failed: %s", e.message)
        if args.json:
            print(json.dumps({"error": e.code}))
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(render_markdown(result))
    return 0


def main():
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    sys.exit(run())


if __name__ == "__main__":
    main()
