"""
Pagination helpers.

These functions inspect a parsed listing page and decide where "next"
leads. They never touch the browser; BaseScraper activates what they find.
"""

import re
import logging
from typing import Optional, List
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .utils.extractors import is_navigable

logger = logging.getLogger(__name__)

DEFAULT_NEXT_SELECTORS = ['a[rel="next"]', '.next', '[class*="next"]']

# Anchor text such as "Next", "Next »", "next page"
NEXT_TEXT_PATTERN = re.compile(r'^\s*next\b', re.IGNORECASE)


def css_attr_escape(value: str) -> str:
    """Escape a value for use inside a double-quoted CSS attribute selector."""
    return value.replace('\\', '\\\\').replace('"', '\\"')


def is_disabled(element: Tag) -> bool:
    """True for controls marked disabled (last-page "next" buttons)."""
    for candidate in (element, element.parent):
        if not isinstance(candidate, Tag):
            continue
        if 'disabled' in (candidate.get('class') or []):
            return True
        if candidate.get('aria-disabled') == 'true' or candidate.has_attr('disabled'):
            return True
    return False


def control_href(element: Tag) -> Optional[str]:
    """
    Return the navigable href of a control, or of the first anchor inside it.

    Fragment-only, javascript:, mailto: and tel: links are not navigable.
    """
    if element.name == 'a' and element.get('href'):
        anchor = element
    else:
        anchor = element.find('a', href=True)
    if anchor is None or not is_navigable(anchor['href']):
        return None
    return anchor['href'].strip()


def is_next_text_link(element: Tag) -> bool:
    """Anchor reading "Next..." whose href points at another listing page."""
    if element.name != 'a':
        return False
    href = (element.get('href') or '').lower()
    return 'page' in href and bool(NEXT_TEXT_PATTERN.match(element.get_text(' ', strip=True)))


def find_next_control(soup: BeautifulSoup, selectors: List[str]) -> Optional[Tag]:
    """
    Find the first "next page" control in document order.

    An element qualifies if it matches any of the selectors, or is an anchor
    whose text starts with "Next" and whose href contains "page". Job links
    such as "Next Generation Programme Officer" therefore never qualify by
    text alone. Disabled controls are skipped.
    """
    selector = ', '.join(selectors)
    for element in soup.find_all(True):
        matched = (bool(selector) and element.css.match(selector)) or is_next_text_link(element)
        if matched and not is_disabled(element):
            return element
    return None


def parse_page_number(url: str, pattern: str) -> Optional[int]:
    """
    Extract a page index from a URL.

    Examples:
        parse_page_number('https://x.rw/jobs?page=3', r'page=(\\d+)') -> 3
        parse_page_number('https://x.rw/page/2/', r'page/(\\d+)') -> 2
    """
    match = re.search(pattern, url or '')
    if match:
        return int(match.group(1))
    return None


def find_numbered_link(
    soup: BeautifulSoup,
    link_selector: str,
    pattern: str,
    current_url: str,
) -> Optional[str]:
    """
    Find the numbered pagination link for the page after the current one.

    The current index comes from current_url (1 when absent). Only a link
    whose index is exactly current + 1 is returned. If several links carry
    that index but point to different addresses, the result is ambiguous
    and None is returned.

    Returns:
        The raw href of the matching link, or None
    """
    current = parse_page_number(current_url, pattern)
    if current is None:
        current = 1

    targets = {}
    for link in soup.select(link_selector):
        href = (link.get('href') or '').strip()
        if not href:
            continue
        resolved = urljoin(current_url, href)
        if parse_page_number(resolved, pattern) == current + 1:
            targets.setdefault(resolved, href)

    if len(targets) == 1:
        return next(iter(targets.values()))
    if len(targets) > 1:
        logger.debug(f"Ambiguous links for page {current + 1}: {sorted(targets)}")
    return None
