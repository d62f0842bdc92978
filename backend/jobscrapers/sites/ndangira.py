"""
Ndangira scraper.

ndangira.net is a blog: posts have no company, location or deadline
markup. The company is inferred from the post title ("... at <Org>",
"<Org> is hiring") and the deadline from title + excerpt text.

Pagination follows WordPress /page/N/ links.
"""

from typing import Optional

from bs4 import Tag

from ..base import BaseScraper, JobPosting
from ..config import get_source_config
from ..utils.extractors import (
    closest,
    element_text,
    extract_deadline,
    first_link,
    first_text,
    infer_company,
)

POST_CONTAINER_SELECTOR = 'article, .post, [class*="post"], .entry, [class*="entry"]'


class NdangiraScraper(BaseScraper):
    """Scraper for ndangira.net."""

    TITLE_SELECTORS = [
        'h1', 'h2', 'h3', 'h4', '.title', '[class*="title"]',
        'a[href*="job"]', 'a[href*="recruitment"]',
    ]
    # Excerpt lookup for a bare heading link
    EXCERPT_SELECTORS = ['p', '.excerpt', '[class*="excerpt"]', '.summary', '[class*="summary"]']
    # Post containers may only have a generic content block
    SNIPPET_SELECTORS = EXCERPT_SELECTORS + ['.content', '[class*="content"]']

    def __init__(self, config=None, session_factory=None):
        super().__init__(config or get_source_config('ndangira'), session_factory)

    def extract_job(self, element: Tag, page_url: str) -> Optional[JobPosting]:
        if element.name == 'a':
            # h2 a / h3 a
            title = element_text(element)
            url = first_link(element, page_url)
            container = closest(element, POST_CONTAINER_SELECTOR)
            snippet = first_text(container, self.EXCERPT_SELECTORS)
        else:
            title = first_text(element, self.TITLE_SELECTORS)
            url = first_link(element, page_url)
            snippet = first_text(element, self.SNIPPET_SELECTORS)

        if not title or len(title) < self.config.min_title_length:
            return None

        return self.make_posting(
            title=title,
            page_url=page_url,
            url=url,
            company=infer_company(title),
            deadline=extract_deadline(f"{title} {snippet or ''}"),
            snippet=snippet,
        )
