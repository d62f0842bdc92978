"""
Job in Rwanda scraper.

Most listings are bare anchors to /job/... pages rather than cards, so an
anchor candidate supplies its own title and URL while the remaining fields
are read from the closest listing container (or the anchor's parent).

Pagination is numbered (?page=N).
"""

from typing import Optional

from bs4 import Tag

from ..base import BaseScraper, JobPosting
from ..config import get_source_config
from ..utils.extractors import closest, element_text, first_link, first_text

CONTAINER_SELECTOR = '.job-container, .job-listing, .post, article'


class JobinRwandaScraper(BaseScraper):
    """Scraper for jobinrwanda.com."""

    TITLE_SELECTORS = ['h1', 'h2', 'h3', 'h4', '.title', '[class*="title"]', 'a']

    def __init__(self, config=None, session_factory=None):
        super().__init__(config or get_source_config('jobinrwanda'), session_factory)

    def extract_job(self, element: Tag, page_url: str) -> Optional[JobPosting]:
        if element.name == 'a':
            title = element_text(element)
        else:
            title = first_text(element, self.TITLE_SELECTORS)

        # Cheap reject before looking at the surrounding markup
        if not title or len(title) < self.config.min_title_length:
            return None

        container = closest(element, CONTAINER_SELECTOR) or element.parent

        return self.make_posting(
            title=title,
            page_url=page_url,
            url=first_link(element, page_url),
            company=first_text(container, self.COMPANY_SELECTORS),
            location=first_text(container, self.LOCATION_SELECTORS),
            deadline=first_text(container, self.DEADLINE_SELECTORS),
            snippet=first_text(container, self.SNIPPET_SELECTORS),
        )
