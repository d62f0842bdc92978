"""
Headless-browser scraper system for Rwandan job boards.

This package provides:
- A Playwright browser session with guaranteed release
- A shared navigation & pagination engine (BaseScraper)
- One extraction adapter per job board
- A manager that fans out across sources
"""

from .base import BaseScraper, JobPosting, ScrapeResult, SourceConfig
from .config import SOURCES, get_source_config, get_enabled_sources
from .manager import ScraperManager

__all__ = [
    'BaseScraper',
    'JobPosting',
    'ScrapeResult',
    'SourceConfig',
    'SOURCES',
    'get_source_config',
    'get_enabled_sources',
    'ScraperManager',
]
