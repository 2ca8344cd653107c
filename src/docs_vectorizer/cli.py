"""Command-line entry point.

    docs-vectorizer ingest [--root docs/guides]
    docs-vectorizer pull-request 123
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from docs_vectorizer.config import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docs-vectorizer",
        description="Embed a GitHub repository's documentation into a vector store",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: %(default)s)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser("ingest", help="Ingest the whole documentation tree")
    ingest.add_argument(
        "--root",
        default=None,
        help=f"Repository path to walk (default: {settings.docs_root})",
    )

    pr = sub.add_parser("pull-request", help="Re-ingest docs changed by a pull request")
    pr.add_argument("number", type=int, help="Pull request number")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "ingest":
        from docs_vectorizer.ingestion.pipeline import IngestionPipeline

        IngestionPipeline.from_settings().run(args.root)
    else:
        from docs_vectorizer.github.pull_requests import PullRequestScanner

        PullRequestScanner.from_settings().scan_pull_request(args.number)
    return 0
