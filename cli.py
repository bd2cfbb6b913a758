#!/usr/bin/env python3
"""
Command line search.

    tubemeta "daft punk" --type=all --limit=5 --hl=en --gl=US

Prints the SearchResult as indented JSON on stdout.
"""

import argparse
import json
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from error_handler import ScraperError
from log_events import classify_error_type, evt
from logging_setup import configure_logging

USAGE = 'Usage: tubemeta "<search query>" [--type=video|playlist|channel|all] [--limit=10] [--hl=fr] [--gl=FR]'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tubemeta", description="Search YouTube without the Data API")
    parser.add_argument("terms", nargs="*", help="search terms, joined with spaces")
    parser.add_argument("--type", dest="kind", default=None,
                        help="video, playlist, channel or all (default: video)")
    parser.add_argument("--limit", default=None, help="max results (default: 10)")
    parser.add_argument("--hl", default=None, help="interface language (default: fr)")
    parser.add_argument("--gl", default=None, help="region (default: FR)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    configure_logging(log_level=os.getenv("LOG_LEVEL", "WARNING"), use_json=True)

    args = build_parser().parse_args(argv)
    query = " ".join(args.terms).strip()
    if not query:
        print(USAGE, file=sys.stderr)
        return 1

    # Imported late so logging is configured first
    from youtube_search import search_youtube

    try:
        result = search_youtube(query, limit=args.limit, kind=args.kind, hl=args.hl, gl=args.gl)
    except ScraperError as e:
        evt("cli_failed", outcome="error", error_type=classify_error_type(e), detail=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
