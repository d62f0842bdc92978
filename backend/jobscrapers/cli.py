#!/usr/bin/env python3
"""
Command-line runner for the job board scrapers.

Usage:
    python -m jobscrapers.cli [source ...]

Examples:
    python -m jobscrapers.cli --list              # List all sources
    python -m jobscrapers.cli kora ndangira       # Scrape two sources
    python -m jobscrapers.cli --parallel --json   # Scrape everything, print JSON
"""

import asyncio
import argparse
import logging
import json
import re
import sys
from pathlib import Path
from typing import Optional

from .config import get_source_summary
from .manager import ScraperManager
from .settings import settings


# Custom formatter to strip ANSI color codes from file logs
class ColorStripFormatter(logging.Formatter):
    """Formatter that strips ANSI color codes from log messages."""
    ansi_escape = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')

    def format(self, record):
        message = super().format(record)
        return self.ansi_escape.sub('', message)


def configure_logging(level: Optional[str] = None, log_file: Optional[Path] = None):
    """
    Configure root logging: colored console output, plain file output.

    Console output goes to stderr so --json output on stdout stays clean.
    """
    level = (level or settings.log_level).upper()
    log_file = log_file or settings.log_file

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(settings.log_format))
    handlers = [console_handler]

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(ColorStripFormatter(settings.log_format))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, level),
        handlers=handlers,
        force=True  # Override any existing configuration
    )

    # Playwright's asyncio internals are noisy at DEBUG
    logging.getLogger('asyncio').setLevel(logging.WARNING)


def list_sources():
    """Print all configured sources."""
    print(f"\n{'='*60}")
    print("Available Sources")
    print(f"{'='*60}\n")

    for source in get_source_summary():
        status = "✅" if source['enabled'] else "⏳"
        print(f"{status} {source['key']:16} - {source['name']} ({source['display_name']})")
        print(f"                   URL: {source['url']}  max pages: {source['max_pages']}")
        print()


async def run(args) -> int:
    manager = ScraperManager()
    if args.sources:
        jobs = await manager.scrape_from_sources(args.sources, parallel=args.parallel)
    else:
        await manager.scrape_all(parallel=args.parallel)
        jobs = manager.all_jobs()

    if args.json:
        print(json.dumps([job.to_dict() for job in jobs], indent=2, ensure_ascii=False))
        return 0

    for i, job in enumerate(jobs, 1):
        print(f"{i}. {job.title}")
        print(f"   Company: {job.company}")
        if job.location:
            print(f"   Location: {job.location}")
        if job.deadline:
            print(f"   Deadline: {job.deadline}")
        print(f"   Source: {job.source}")
        print(f"   URL: {job.url}")
        print()

    summary = manager.get_results_summary()
    print(f"✓ {summary['unique_jobs']} unique jobs from {summary['successful']}/{summary['total_sources']} sources")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Scrape Rwandan job boards')
    parser.add_argument('sources', nargs='*', help='Source keys or names (default: all enabled)')
    parser.add_argument('--list', action='store_true', help='List all sources')
    parser.add_argument('--parallel', action='store_true', default=None, help='Scrape sources concurrently')
    parser.add_argument('--json', action='store_true', help='Print postings as JSON')
    parser.add_argument('--log-level', type=str, default=None, help='Override LOG_LEVEL')

    args = parser.parse_args(argv)

    if args.list:
        list_sources()
        return 0

    configure_logging(args.log_level)
    return asyncio.run(run(args))


if __name__ == '__main__':
    sys.exit(main())
