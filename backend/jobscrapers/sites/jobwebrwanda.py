"""
Jobweb Rwanda scraper.

Listing cards carry their own title, company and deadline elements, so
each candidate is read as a self-contained card. Pagination is a single
"next" control; the site has no numbered links worth following.
"""

from typing import Optional

from bs4 import Tag

from ..base import BaseScraper, JobPosting
from ..config import get_source_config


class JobwebRwandaScraper(BaseScraper):
    """Scraper for jobwebrwanda.com."""

    def __init__(self, config=None, session_factory=None):
        super().__init__(config or get_source_config('jobwebrwanda'), session_factory)

    def extract_job(self, element: Tag, page_url: str) -> Optional[JobPosting]:
        return self.extract_card(element, page_url)
