#!/usr/bin/env python3
"""CLI tool to fetch headlines and inspect sources without the web server."""

import sys
import asyncio
import argparse
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from newsagg.config.logging import configure_logging
from newsagg.config.settings import settings
from newsagg.ingestion.interfaces import Category
from newsagg.pipeline.aggregator import NewsAggregator


def print_header(title):
    print(f"\n{'='*60}")
    print(f" {title}")
    print('='*60)


async def cmd_headlines(args):
    """Print the latest headlines."""
    async with NewsAggregator() as aggregator:
        articles = await aggregator.aggregate(
            category=Category(args.category),
            source=args.source,
            limit=args.limit,
        )

    print_header(f"HEADLINES ({args.category.upper()})")
    if not articles:
        print("\nNo articles available.")
        return

    for article in articles:
        print(f"\n[{article.source}] {article.title}")
        print(f"  {article.pub_date or 'undated'}")
        print(f"  {article.link}")
        if args.images:
            print(f"  image: {article.image or '-'}")


def cmd_sources(args):
    """List configured sources."""
    aggregator = NewsAggregator()

    print_header("NEWS SOURCES")
    for source in aggregator.sources:
        trusted = "trusted" if source.trusted else "unverified"
        print(f"  {source.name:20} {source.category.value:12} {trusted}")
        print(f"  {'':20} {source.url}")


def build_parser():
    parser = argparse.ArgumentParser(description="UK news aggregator CLI")
    parser.add_argument("--log-level", default="WARNING", help="Log level")
    subparsers = parser.add_subparsers(dest="command")

    # headlines
    p = subparsers.add_parser("headlines", help="Fetch the latest headlines")
    p.add_argument("--category", "-c", default="general",
                   choices=[c.value for c in Category], help="News category")
    p.add_argument("--source", "-s", help="Filter by source name")
    p.add_argument("--limit", type=int, default=settings.default_limit,
                   help=f"Max results (1-{settings.max_limit})")
    p.add_argument("--images", action="store_true", help="Show resolved image URLs")

    # sources
    subparsers.add_parser("sources", help="List configured sources")

    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(level=args.log_level)

    if args.command == "headlines":
        if not 1 <= args.limit <= settings.max_limit:
            parser.error(f"--limit must be between 1 and {settings.max_limit}")
        asyncio.run(cmd_headlines(args))
    elif args.command == "sources":
        cmd_sources(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
