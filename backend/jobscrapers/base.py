"""
Base classes for the job board scraper system.

This module defines the record types shared by all sources and the
abstract base class that drives one browser session through a source's
listing pages:

    Init -> Extract -> Paginate -> ... -> Done

Subclasses implement extract_job() for their site's markup and may
override find_job_elements() or crawl_pages() when the site needs a
different traversal.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Optional, Any, Callable
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from urllib.parse import urljoin
import asyncio
import logging

from bs4 import BeautifulSoup, Tag

from .crawlers.browser import BrowserSession
from .pagination import (
    DEFAULT_NEXT_SELECTORS,
    control_href,
    css_attr_escape,
    find_next_control,
    find_numbered_link,
)
from .utils.extractors import clean_text, first_link, first_text, truncate
from .utils.resilience import retry_operation, safe_click, wait_for_selector

logger = logging.getLogger(__name__)


# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for colorized logging."""
    RESET = '\033[0m'

    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'

    @staticmethod
    def green(text):
        return f"{Colors.GREEN}{text}{Colors.RESET}"

    @staticmethod
    def yellow(text):
        return f"{Colors.YELLOW}{text}{Colors.RESET}"

    @staticmethod
    def red(text):
        return f"{Colors.RED}{text}{Colors.RESET}"


@dataclass
class SourceConfig:
    """Configuration for a job board source."""
    name: str                           # Source identifier stamped on postings (e.g., 'kora.rw')
    display_name: str                   # Human readable name
    base_url: str                       # Site root
    listing_url: str                    # First listing page
    navigation_timeout_ms: int = 30000  # Default timeout for navigations and actions
    max_retries: int = 3                # Attempts for the initial navigation
    retry_delay: float = 1.0            # Base delay between navigation attempts
    max_pages: int = 5                  # Upper bound on listing pages extracted
    inter_page_delay: float = 2.0       # Wait after each page transition
    pagination_delay: float = 3.0       # Wait after each click/activation
    settle_delay: float = 3.0           # Wait after the first load when no marker is used
    marker_selector: Optional[str] = None   # Listings marker; None means "use settle_delay"
    marker_timeout_ms: int = 5000
    job_selectors: List[str] = field(default_factory=list)  # Candidate job elements
    next_selectors: List[str] = field(default_factory=lambda: list(DEFAULT_NEXT_SELECTORS))
    page_link_selector: Optional[str] = None   # Numbered pagination links
    page_number_pattern: str = r'page=(\d+)'   # Extracts the page index from a URL
    min_title_length: int = 3
    default_company: str = 'Not specified'
    default_location: Optional[str] = None
    enabled: bool = True                # Whether to include in scrape_all()


@dataclass(frozen=True)
class JobPosting:
    """Normalized job posting produced by an adapter."""
    title: str
    company: str
    url: str
    source: str
    location: Optional[str] = None
    deadline: Optional[str] = None
    snippet: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ScrapeResult:
    """Summary of one scrape() run against one source."""
    source: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    pages_visited: int = 0
    element_errors: int = 0
    error_details: List[Dict] = field(default_factory=list)
    jobs: List[JobPosting] = field(default_factory=list)

    @property
    def found(self) -> int:
        return len(self.jobs)

    @property
    def success(self) -> bool:
        return not self.error_details

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.completed_at and self.started_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> Dict:
        return {
            'source': self.source,
            'started_at': self.started_at.isoformat(),
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
            'duration_seconds': self.duration_seconds,
            'found': self.found,
            'pages_visited': self.pages_visited,
            'element_errors': self.element_errors,
            'error_details': self.error_details[:10],  # Limit error details
            'success': self.success,
        }


class BaseScraper(ABC):
    """
    Abstract base class for all job board scrapers.

    Subclasses must implement:
    - extract_job(): Map one candidate element to a JobPosting (or None)

    Optional overrides:
    - find_job_elements(): Candidate discovery (defaults to config.job_selectors)
    - crawl_pages(): Traversal after the listing page is ready
    """

    # Field cascades shared by card-style sources; sites override as needed
    TITLE_SELECTORS = ['h1', 'h2', 'h3', 'h4', '.title', '[class*="title"]', 'a[href*="job"]']
    COMPANY_SELECTORS = ['.company', '[class*="company"]', '.employer', '[class*="employer"]']
    LOCATION_SELECTORS = ['.location', '[class*="location"]', '.place', '[class*="place"]']
    DEADLINE_SELECTORS = ['.deadline', '[class*="deadline"]', '.date', '[class*="date"]']
    SNIPPET_SELECTORS = ['.description', '[class*="description"]', '.summary', '[class*="summary"]', 'p']

    def __init__(self, config: SourceConfig, session_factory: Optional[Callable[..., Any]] = None):
        """
        Initialize the scraper.

        Args:
            config: Source configuration
            session_factory: Callable taking timeout_ms and returning an async
                context manager that yields a browser session. Defaults to
                BrowserSession.
        """
        self.config = config
        self.session_factory = session_factory or BrowserSession
        self.result = ScrapeResult(source=config.name, started_at=datetime.now(timezone.utc))
        self.logger = logging.getLogger(f"scraper.{config.name}")

    @abstractmethod
    def extract_job(self, element: Tag, page_url: str) -> Optional[JobPosting]:
        """
        Map one candidate element to a posting.

        Args:
            element: Candidate job element
            page_url: Address of the page the element came from

        Returns:
            JobPosting, or None when the element is not a job
        """
        pass

    async def scrape(self) -> List[JobPosting]:
        """
        Main entry point - scrape this source and return its postings.

        Never raises: an unreachable site, a browser that cannot start or
        any other failure escaping the run yields an empty list.
        """
        self.result = ScrapeResult(source=self.config.name, started_at=datetime.now(timezone.utc))
        self.logger.info(f"Starting scrape for {self.config.display_name}")

        try:
            async with self.session_factory(timeout_ms=self.config.navigation_timeout_ms) as session:
                jobs = await self.crawl(session)
        except Exception as e:
            self.result.error_details.append({'error': str(e)})
            self.result.completed_at = datetime.now(timezone.utc)
            self.logger.error(f"{Colors.red('[ERR]')} Error scraping {self.config.name}: {e}")
            return []

        self.result.jobs = jobs
        self.result.completed_at = datetime.now(timezone.utc)
        duration = self.result.duration_seconds or 0
        self.logger.info(
            f"{Colors.green('[OK]')} Scraped {len(jobs)} jobs from {self.config.name} in {duration:.1f}s "
            f"({self.result.pages_visited} page(s), {self.result.element_errors} element errors)"
        )
        return jobs

    async def crawl(self, session) -> List[JobPosting]:
        """Run the page state machine on an open session."""
        self.logger.info(f"Navigating to {self.config.listing_url}...")
        await retry_operation(
            lambda: session.goto(self.config.listing_url),
            retries=self.config.max_retries,
            delay=self.config.retry_delay,
            logger=self.logger,
        )

        if not await self.wait_for_listings(session):
            return []

        return await self.crawl_pages(session)

    async def wait_for_listings(self, session) -> bool:
        """Wait for the listings marker, or the settle delay when none is configured."""
        if self.config.marker_selector:
            loaded = await wait_for_selector(
                session, self.config.marker_selector, self.config.marker_timeout_ms
            )
            if not loaded:
                self.logger.warning(f"No job listings found on {self.config.name}")
            return loaded

        await asyncio.sleep(self.config.settle_delay)
        return True

    async def crawl_pages(self, session) -> List[JobPosting]:
        """
        Extract the current page, then follow pagination until there is no
        next page or max_pages pages have been extracted.

        An error on page k ends the loop; postings from earlier pages are kept.
        """
        jobs: List[JobPosting] = []
        page_number = 1

        while True:
            try:
                self.logger.info(f"Scraping page {page_number}...")
                soup = await session.soup()
                page_jobs = self.extract_jobs(soup, session.url)
                jobs.extend(page_jobs)
                self.result.pages_visited += 1
                self.logger.info(f"   ➤ page {page_number}: {len(page_jobs)} job(s)")

                if page_number >= self.config.max_pages:
                    self.logger.info(f"Reached page limit ({self.config.max_pages})")
                    break

                if not await self.go_to_next_page(session, soup):
                    self.logger.info("No more pages found")
                    break

                page_number += 1
                await asyncio.sleep(self.config.inter_page_delay)

            except Exception as e:
                self.record_page_error(page_number, e)
                break

        return jobs

    def record_page_error(self, page_number: int, error: Exception):
        self.result.error_details.append({'page': page_number, 'error': str(error)})
        self.logger.warning(
            f"   {Colors.yellow('[WARN]')} page {page_number} failed, keeping "
            f"results so far: {error}"
        )

    def find_job_elements(self, soup: BeautifulSoup) -> List[Tag]:
        """All elements matching any job selector, in document order."""
        if not self.config.job_selectors:
            return []
        return soup.select(', '.join(self.config.job_selectors))

    def extract_jobs(self, soup: BeautifulSoup, page_url: str) -> List[JobPosting]:
        """Run extract_job() over every candidate; a malformed element is skipped."""
        jobs = []
        for element in self.find_job_elements(soup):
            try:
                job = self.extract_job(element, page_url)
            except Exception as e:
                self.result.element_errors += 1
                self.logger.warning(f"Error extracting job data: {e}")
                continue
            if job is not None:
                jobs.append(job)
        return jobs

    def extract_card(self, element: Tag, page_url: str) -> Optional[JobPosting]:
        """Field cascade for sites where each candidate is a self-contained card."""
        return self.make_posting(
            title=first_text(element, self.TITLE_SELECTORS),
            page_url=page_url,
            url=first_link(element, page_url),
            company=first_text(element, self.COMPANY_SELECTORS),
            location=first_text(element, self.LOCATION_SELECTORS),
            deadline=first_text(element, self.DEADLINE_SELECTORS),
            snippet=first_text(element, self.SNIPPET_SELECTORS),
        )

    def make_posting(
        self,
        title: Optional[str],
        page_url: str,
        url: Optional[str] = None,
        company: Optional[str] = None,
        location: Optional[str] = None,
        deadline: Optional[str] = None,
        snippet: Optional[str] = None,
    ) -> Optional[JobPosting]:
        """
        Build a JobPosting with this source's defaults applied.

        Returns None when the title is shorter than min_title_length or no
        URL is available.
        """
        title = clean_text(title)
        if len(title) < self.config.min_title_length:
            return None

        url = url or page_url
        if not url:
            return None

        return JobPosting(
            title=title,
            company=clean_text(company) or self.config.default_company,
            url=url,
            source=self.config.name,
            location=clean_text(location) or self.config.default_location,
            deadline=clean_text(deadline) or None,
            snippet=truncate(clean_text(snippet)) or None,
        )

    async def go_to_next_page(self, session, soup: BeautifulSoup) -> bool:
        """
        Advance to the next listing page.

        Tries an explicit "next" control first, then numbered pagination.
        Returns False when neither leads anywhere.
        """
        if self.config.next_selectors:
            control = find_next_control(soup, self.config.next_selectors)
            if control is not None and await self.activate(session, control):
                return True

        if self.config.page_link_selector:
            href = find_numbered_link(
                soup,
                self.config.page_link_selector,
                self.config.page_number_pattern,
                session.url,
            )
            if href:
                return await self.follow_link(session, href)

        return False

    async def activate(self, session, control: Tag) -> bool:
        """Activate a next-page control found in the parsed page."""
        href = control_href(control)
        if href:
            if urljoin(session.url, href) == session.url:
                # Points at the page we are on
                return False
            return await self.follow_link(session, href)

        if control.get('id'):
            selector = f'#{control["id"]}'
        else:
            selector = ', '.join(self.config.next_selectors)

        clicked = await safe_click(session, selector)
        if clicked:
            await asyncio.sleep(self.config.pagination_delay)
        return clicked

    async def follow_link(self, session, href: str) -> bool:
        """Click the anchor with this href; navigate to it directly if the click fails."""
        selector = f'a[href="{css_attr_escape(href)}"]'
        if not await safe_click(session, selector):
            target = urljoin(session.url, href)
            self.logger.debug(f"Click failed, navigating to {target}")
            await session.goto(target)
        await asyncio.sleep(self.config.pagination_delay)
        return True
