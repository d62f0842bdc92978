"""
Scraper Manager - orchestrates all job board scrapers.

Provides a unified interface for running scrapers, either individually
or all at once. Sources share nothing, so they can run in parallel; a
failing source only ever contributes an empty list.
"""

import asyncio
from typing import Dict, List, Optional, Type, Callable, Any
from datetime import datetime, timezone
import logging

from .base import BaseScraper, JobPosting, ScrapeResult
from .config import SOURCES, get_source_config, get_enabled_sources
from .settings import settings
from .utils.extractors import parse_deadline

from .sites.jobwebrwanda import JobwebRwandaScraper
from .sites.jobinrwanda import JobinRwandaScraper
from .sites.kora import KoraScraper
from .sites.ndangira import NdangiraScraper
from .sites.greatrwandajobs import GreatRwandaJobsScraper

logger = logging.getLogger(__name__)


# Registry of implemented scrapers
SCRAPER_REGISTRY: Dict[str, Type[BaseScraper]] = {
    'jobwebrwanda': JobwebRwandaScraper,
    'jobinrwanda': JobinRwandaScraper,
    'kora': KoraScraper,
    'ndangira': NdangiraScraper,
    'greatrwandajobs': GreatRwandaJobsScraper,
}


def remove_duplicates(jobs: List[JobPosting]) -> List[JobPosting]:
    """Drop postings whose (title, company) was already seen, case-insensitively."""
    seen = set()
    unique = []
    for job in jobs:
        key = (job.title.lower().strip(), job.company.lower().strip())
        if key in seen:
            continue
        seen.add(key)
        unique.append(job)
    return unique


def sort_by_deadline(jobs: List[JobPosting]) -> List[JobPosting]:
    """
    Order postings for presentation.

    Postings with a parseable deadline come first, earliest first; the rest
    follow alphabetically by title.
    """
    dated = []
    undated = []
    for job in jobs:
        deadline = parse_deadline(job.deadline)
        if deadline is not None:
            dated.append((deadline, job))
        else:
            undated.append(job)

    dated.sort(key=lambda pair: pair[0])
    undated.sort(key=lambda job: job.title.lower())
    return [job for _, job in dated] + undated


class ScraperManager:
    """
    Manages and orchestrates all job board scrapers.

    Usage:
        manager = ScraperManager()

        # Run single scraper
        result = await manager.scrape_site('kora')

        # Run all enabled scrapers
        results = await manager.scrape_all(parallel=True)

        # Combined, de-duplicated postings
        jobs = manager.all_jobs()
    """

    def __init__(self, session_factory: Optional[Callable[..., Any]] = None, configs: Optional[Dict] = None):
        """
        Initialize the scraper manager.

        Args:
            session_factory: Browser session factory handed to every scraper
            configs: Optional per-source SourceConfig overrides keyed by source key
        """
        self.session_factory = session_factory
        self.configs = configs or {}
        self.results: Dict[str, ScrapeResult] = {}

    def get_scraper(self, source_key: str) -> Optional[BaseScraper]:
        """
        Get a scraper instance for a source.

        Args:
            source_key: Source key (e.g., 'kora')

        Returns:
            Scraper instance or None if not implemented
        """
        if source_key not in SCRAPER_REGISTRY:
            logger.warning(f"Scraper not implemented for source: {source_key}")
            return None

        scraper_class = SCRAPER_REGISTRY[source_key]
        return scraper_class(
            config=self.configs.get(source_key),
            session_factory=self.session_factory,
        )

    async def scrape_site(self, source_key: str) -> ScrapeResult:
        """
        Run scraper for a single source.

        Args:
            source_key: Source key

        Returns:
            ScrapeResult with the postings and statistics
        """
        config = get_source_config(source_key)
        logger.info(f"Starting scraper for {config.name}...")

        scraper = self.get_scraper(source_key)
        if not scraper:
            result = ScrapeResult(
                source=config.name,
                started_at=datetime.now(timezone.utc),
                completed_at=datetime.now(timezone.utc),
                error_details=[{'error': f'Scraper not implemented for {source_key}'}],
            )
            self.results[source_key] = result
            return result

        try:
            await scraper.scrape()
            result = scraper.result
            logger.info(f"✓ {config.name}: Found {result.found} jobs")
        except Exception as e:
            # scrape() is not supposed to raise; keep the fan-out alive regardless
            logger.error(f"✗ {config.name}: {e}")
            result = ScrapeResult(
                source=config.name,
                started_at=datetime.now(timezone.utc),
                completed_at=datetime.now(timezone.utc),
                error_details=[{'error': str(e)}],
            )

        self.results[source_key] = result
        return result

    async def scrape_all(
        self,
        source_keys: List[str] = None,
        parallel: Optional[bool] = None,
    ) -> Dict[str, ScrapeResult]:
        """
        Run scrapers for multiple sources.

        Args:
            source_keys: List of source keys to scrape (defaults to all enabled)
            parallel: Whether to run scrapers concurrently (settings default)

        Returns:
            Dictionary mapping source key to ScrapeResult
        """
        if source_keys is None:
            enabled = get_enabled_sources()
            source_keys = [k for k in enabled.keys() if k in SCRAPER_REGISTRY]
        if parallel is None:
            parallel = settings.scraper_parallel

        logger.info(f"Starting job scraping from {len(source_keys)} sources: {source_keys}")

        if parallel:
            await asyncio.gather(*(self.scrape_site(key) for key in source_keys))
        else:
            for key in source_keys:
                await self.scrape_site(key)

        self.log_summary(source_keys)
        return {key: self.results[key] for key in source_keys}

    async def scrape_from_sources(self, source_names: List[str], parallel: Optional[bool] = None) -> List[JobPosting]:
        """
        Scrape the sources whose key or name matches any of source_names.

        A name matches when it equals the key or when one of the name and the
        source identifier contains the other (e.g. 'kora' matches 'kora.rw').

        Returns:
            Combined, de-duplicated and sorted postings
        """
        selected = [
            key for key, config in SOURCES.items()
            if key in SCRAPER_REGISTRY and any(
                name == key or name in config.name or config.name in name
                for name in source_names
            )
        ]

        if not selected:
            logger.warning('No matching scrapers found for the specified sources')
            return []

        results = await self.scrape_all(selected, parallel=parallel)
        jobs = self.combine(results.values())
        logger.info(f"Total unique jobs from selected sources: {len(jobs)}")
        return jobs

    def all_jobs(self) -> List[JobPosting]:
        """Combined postings from every result collected so far."""
        return self.combine(self.results.values())

    @staticmethod
    def combine(results) -> List[JobPosting]:
        jobs: List[JobPosting] = []
        for result in results:
            jobs.extend(result.jobs)
        return sort_by_deadline(remove_duplicates(jobs))

    def log_summary(self, source_keys: List[str]):
        logger.info("=== Scraping Summary ===")
        for key in source_keys:
            result = self.results[key]
            if result.success:
                logger.info(f"{result.source}: {result.found} jobs")
            else:
                errors = '; '.join(d['error'] for d in result.error_details)
                logger.info(f"{result.source}: {result.found} jobs (errors: {errors})")
        logger.info(f"Total unique jobs: {len(self.all_jobs())}")

    def list_scrapers(self) -> List[Dict]:
        """
        List all configured sources and their implementation status.

        Returns:
            List of source info dictionaries
        """
        scrapers = []
        for key, config in SOURCES.items():
            scrapers.append({
                'key': key,
                'name': config.name,
                'display_name': config.display_name,
                'enabled': config.enabled,
                'implemented': key in SCRAPER_REGISTRY,
                'url': config.listing_url,
            })
        return scrapers

    def get_available_scrapers(self) -> List[str]:
        """Get the source identifiers of implemented scrapers."""
        return [SOURCES[key].name for key in SCRAPER_REGISTRY]

    def get_results_summary(self) -> Dict:
        """
        Get summary of all scrape results.

        Returns:
            Summary dictionary with totals
        """
        if not self.results:
            return {
                'total_sources': 0,
                'successful': 0,
                'failed': 0,
                'total_found': 0,
                'unique_jobs': 0,
            }

        successful = sum(1 for r in self.results.values() if r.success)

        return {
            'total_sources': len(self.results),
            'successful': successful,
            'failed': len(self.results) - successful,
            'total_found': sum(r.found for r in self.results.values()),
            'unique_jobs': len(self.all_jobs()),
            'sources': {k: v.to_dict() for k, v in self.results.items()},
        }


# Convenience functions for standalone usage

async def scrape_site(source_key: str) -> List[JobPosting]:
    """
    Scrape a single source.

    Returns:
        The source's postings (empty on failure)
    """
    manager = ScraperManager()
    result = await manager.scrape_site(source_key)
    return result.jobs


async def scrape_all(parallel: Optional[bool] = None) -> List[JobPosting]:
    """
    Scrape all enabled sources.

    Returns:
        Combined, de-duplicated and sorted postings
    """
    manager = ScraperManager()
    await manager.scrape_all(parallel=parallel)
    return manager.all_jobs()
