"""
Great Rwanda Jobs scraper.

The job board lives under /jobs/. Cards use a mix of job/position/
opportunity class names; pagination is either ?page=N or /page/N/
depending on the section, so both are accepted.
"""

from typing import Optional

from bs4 import Tag

from ..base import BaseScraper, JobPosting
from ..config import get_source_config


class GreatRwandaJobsScraper(BaseScraper):
    """Scraper for greatrwandajobs.com."""

    COMPANY_SELECTORS = BaseScraper.COMPANY_SELECTORS + ['.organization', '[class*="organization"]']
    LOCATION_SELECTORS = BaseScraper.LOCATION_SELECTORS + ['.city', '[class*="city"]']
    DEADLINE_SELECTORS = BaseScraper.DEADLINE_SELECTORS + ['.expires', '[class*="expires"]']
    SNIPPET_SELECTORS = [
        '.description', '[class*="description"]',
        '.summary', '[class*="summary"]',
        '.excerpt', '[class*="excerpt"]',
        'p',
    ]

    def __init__(self, config=None, session_factory=None):
        super().__init__(config or get_source_config('greatrwandajobs'), session_factory)

    def extract_job(self, element: Tag, page_url: str) -> Optional[JobPosting]:
        return self.extract_card(element, page_url)
