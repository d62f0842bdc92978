"""
Data extraction utilities for scrapers.

DOM helpers walk a candidate element through a prioritized selector
cascade; text helpers pull deadlines and company names out of free text
with regex patterns. In both cases the first match wins.
"""

import re
from datetime import datetime
from typing import Optional, List
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

SNIPPET_MAX_LENGTH = 200

NON_NAVIGABLE_SCHEMES = ('javascript:', 'mailto:', 'tel:')

MONTHS = (
    'January|February|March|April|May|June|July|August|'
    'September|October|November|December'
)

# Date literals, in priority order
DATE_PATTERNS = [
    # 15/03/2025, 15-03-2025
    re.compile(r'\b(\d{1,2}[-/]\d{1,2}[-/]\d{4})\b'),
    # 2025-03-15
    re.compile(r'\b(\d{4}[-/]\d{1,2}[-/]\d{1,2})\b'),
    # March 15, 2025
    re.compile(rf'\b((?:{MONTHS})\s+\d{{1,2}},?\s+\d{{4}})\b', re.IGNORECASE),
    # 15 March 2025
    re.compile(rf'\b(\d{{1,2}}\s+(?:{MONTHS})\s+\d{{4}})\b', re.IGNORECASE),
]

# Deadline phrases are tried before bare date literals
DEADLINE_PATTERNS = [
    re.compile(r'deadline[:\s]+([^.]+)', re.IGNORECASE),
    re.compile(r'apply\s+by[:\s]+([^.]+)', re.IGNORECASE),
    re.compile(r'closes[:\s]+([^.]+)', re.IGNORECASE),
] + DATE_PATTERNS

COMPANY_PATTERNS = [
    # Finance Manager at Bank of Kigali
    re.compile(r'\bat\s+([^(]+)', re.IGNORECASE),
    # Bank Kigali is hiring
    re.compile(r'(\w+\s+\w+)\s+is\s+hiring', re.IGNORECASE),
    # RwandAir Ltd recruitment
    re.compile(r'(\w+\s+\w+)\s+recruitment', re.IGNORECASE),
    # Save Children jobs
    re.compile(r'(\w+\s+\w+)\s+jobs', re.IGNORECASE),
]

# strptime formats tried against a matched date literal
DATE_FORMATS = [
    '%d/%m/%Y', '%d-%m-%Y', '%m/%d/%Y', '%m-%d-%Y',
    '%Y-%m-%d', '%Y/%m/%d',
    '%B %d, %Y', '%B %d %Y',
    '%d %B %Y',
]


def clean_text(text: Optional[str]) -> str:
    """Collapse runs of whitespace and trim. None becomes ''."""
    if not text:
        return ''
    return re.sub(r'\s+', ' ', text).strip()


def truncate(text: Optional[str], max_length: int = SNIPPET_MAX_LENGTH) -> str:
    """Cut text to at most max_length characters."""
    if not text:
        return ''
    return text[:max_length]


def element_text(element: Tag) -> str:
    return clean_text(element.get_text(' ', strip=True))


def first_text(element: Optional[Tag], selectors: List[str], min_length: int = 1) -> Optional[str]:
    """
    Return the first text found by a prioritized selector cascade.

    Selectors are tried in order; within one selector, matches are tried in
    document order. Text shorter than min_length is skipped.

    Args:
        element: Scope to search in (None yields None)
        selectors: CSS selectors, highest priority first
        min_length: Minimum accepted text length

    Returns:
        Cleaned text or None
    """
    if element is None:
        return None
    for selector in selectors:
        for match in element.select(selector):
            text = element_text(match)
            if len(text) >= min_length:
                return text
    return None


def is_navigable(href: Optional[str]) -> bool:
    """False for empty, fragment-only, javascript:, mailto: and tel: links."""
    href = (href or '').strip()
    if not href or href.startswith('#'):
        return False
    return not href.lower().startswith(NON_NAVIGABLE_SCHEMES)


def first_link(element: Tag, page_url: str) -> Optional[str]:
    """Absolute URL of the element itself (if an anchor) or its first navigable anchor."""
    anchors = [element] if element.name == 'a' else []
    anchors.extend(element.find_all('a', href=True))
    for anchor in anchors:
        href = anchor.get('href')
        if is_navigable(href):
            return urljoin(page_url, href.strip())
    return None


def closest(element: Tag, selector: str) -> Optional[Tag]:
    """Nearest ancestor matching selector, like DOM Element.closest() minus self."""
    for parent in element.parents:
        if isinstance(parent, BeautifulSoup):
            break
        if parent.css.match(selector):
            return parent
    return None


def extract_date(text: str) -> Optional[str]:
    """
    Extract a date literal from text.

    Handles formats like:
        15/03/2025, 15-03-2025
        2025-03-15
        March 15, 2025
        15 March 2025
    """
    if not text:
        return None
    for pattern in DATE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def extract_deadline(text: str) -> Optional[str]:
    """
    Extract an application deadline from free text.

    Phrases ("Deadline: ...", "Apply by ...", "Closes ...") are tried before
    bare date literals. The first pattern that matches wins; no attempt is
    made to reconcile several candidates.
    """
    if not text:
        return None
    for pattern in DEADLINE_PATTERNS:
        match = pattern.search(text)
        if match:
            value = clean_text(match.group(1))
            if value:
                return value
    return None


def infer_company(text: str) -> Optional[str]:
    """
    Infer an organisation name from a blog-style post title.

    Examples:
        "Finance Manager at Bank of Kigali" -> "Bank of Kigali"
        "Bank Kigali is hiring"             -> "Bank Kigali"
    """
    if not text:
        return None
    for pattern in COMPANY_PATTERNS:
        match = pattern.search(text)
        if match:
            company = clean_text(match.group(1)).strip(' -–|:,')
            if company:
                return company
    return None


def parse_deadline(text: Optional[str]) -> Optional[datetime]:
    """
    Best-effort conversion of a deadline string to a datetime.

    Used for ordering only. Day-first is assumed for numeric dates.
    Returns None when nothing parses.
    """
    if not text:
        return None
    cleaned = re.sub(r'^\s*deadline[:\s]*', '', text, flags=re.IGNORECASE)
    literal = extract_date(cleaned)
    if not literal:
        return None

    literal = re.sub(r'\s+', ' ', literal)
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(literal, fmt)
        except ValueError:
            continue
    return None
