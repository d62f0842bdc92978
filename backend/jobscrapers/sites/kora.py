"""
Kora job portal scraper.

Kora is the government recruitment portal. The landing page shows no
listings until the search form is submitted, and results are grouped by
category rather than paginated:

1. Submit the search form (if present)
2. Collect category links from the results page
3. Visit up to max_pages categories, extracting each
4. With no categories, extract whatever the landing page shows

Postings default to company "Government of Rwanda" and location "Rwanda".
"""

import asyncio
from typing import List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from ..base import BaseScraper, JobPosting
from ..config import get_source_config
from ..pagination import control_href
from ..utils.extractors import element_text
from ..utils.resilience import safe_click

SEARCH_BUTTON_SELECTOR = 'button[type="submit"]'
CATEGORY_SELECTOR = 'a[href*="job"], .job-category, [class*="category"]'


class KoraScraper(BaseScraper):
    """Scraper for jobportal.kora.rw."""

    COMPANY_SELECTORS = BaseScraper.COMPANY_SELECTORS + ['.organization', '[class*="organization"]']
    DEADLINE_SELECTORS = BaseScraper.DEADLINE_SELECTORS + ['.expires', '[class*="expires"]']

    def __init__(self, config=None, session_factory=None):
        super().__init__(config or get_source_config('kora'), session_factory)

    def extract_job(self, element: Tag, page_url: str) -> Optional[JobPosting]:
        return self.extract_card(element, page_url)

    def find_category_links(self, soup: BeautifulSoup, page_url: str) -> List[Tuple[str, str]]:
        """Return (label, absolute url) pairs for category links, first occurrence only."""
        categories = []
        seen = set()
        for element in soup.select(CATEGORY_SELECTOR):
            label = element_text(element)
            href = control_href(element)
            if not label or not href:
                continue
            target = urljoin(page_url, href)
            if target in seen:
                continue
            seen.add(target)
            categories.append((label, target))
        return categories

    async def crawl_pages(self, session) -> List[JobPosting]:
        if await safe_click(session, SEARCH_BUTTON_SELECTOR):
            await asyncio.sleep(self.config.pagination_delay)
        else:
            self.logger.warning("Could not perform search, continuing with current page")

        soup = await session.soup()
        categories = self.find_category_links(soup, session.url)
        if not categories:
            return await super().crawl_pages(session)

        self.logger.info(f"Found {len(categories)} job categories/listings")

        jobs: List[JobPosting] = []
        for index, (label, target) in enumerate(categories[:self.config.max_pages], 1):
            try:
                self.logger.info(f"Scraping category {index}: {label}")
                await session.goto(target)
                await asyncio.sleep(self.config.settle_delay)

                soup = await session.soup()
                page_jobs = self.extract_jobs(soup, session.url)
                jobs.extend(page_jobs)
                self.result.pages_visited += 1
                self.logger.info(f"   ➤ {label}: {len(page_jobs)} job(s)")

                await asyncio.sleep(self.config.inter_page_delay)
            except Exception as e:
                self.record_page_error(index, e)
                break

        return jobs
