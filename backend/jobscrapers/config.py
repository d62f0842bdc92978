"""
Source configurations for the five Rwandan job boards.

Each source has a SourceConfig that defines:
- Listing URL and navigation timeouts
- Candidate job element selectors
- Pagination scheme and page limits
- Defaults for fields the site does not expose
"""

from .base import SourceConfig


# ============================================================
# SOURCE CONFIGURATIONS
# ============================================================

SOURCES = {
    # ========== MARKER-GATED ==========
    # Extraction starts once a job element is present

    'jobwebrwanda': SourceConfig(
        name='jobwebrwanda.com',
        display_name='Jobweb Rwanda',
        base_url='https://jobwebrwanda.com/',
        listing_url='https://jobwebrwanda.com/',
        marker_selector='.job-listing, .job-item, [class*="job"]',
        job_selectors=['.job-listing', '.job-item', '[class*="job"]', '.post', 'article'],
        max_pages=5,
    ),

    'jobinrwanda': SourceConfig(
        name='jobinrwanda.com',
        display_name='Job in Rwanda',
        base_url='https://www.jobinrwanda.com/',
        listing_url='https://www.jobinrwanda.com/',
        marker_selector='a[href*="job"], .job, [class*="job"]',
        job_selectors=['a[href*="job"]', '.job-item', '[class*="job"]'],
        page_link_selector='a[href*="page="]',
        page_number_pattern=r'page=(\d+)',
        max_pages=10,
    ),

    # ========== SETTLE-DELAY ==========
    # These render slowly or have no reliable marker

    'kora': SourceConfig(
        name='kora.rw',
        display_name='Kora Job Portal',
        base_url='https://jobportal.kora.rw/',
        listing_url='https://jobportal.kora.rw/',
        job_selectors=[
            '.job-listing', '.job-item', '[class*="job"]',
            '.opportunity', '[class*="opportunity"]',
            '.position', '[class*="position"]',
        ],
        next_selectors=[],      # No pagination; categories are traversed instead
        max_pages=10,           # Category pages visited
        pagination_delay=5.0,   # After submitting the search form
        default_company='Government of Rwanda',
        default_location='Rwanda',
    ),

    'ndangira': SourceConfig(
        name='ndangira.net',
        display_name='Ndangira',
        base_url='https://www.ndangira.net/',
        listing_url='https://www.ndangira.net/',
        job_selectors=['article', '.post', '[class*="post"]', '.entry', '[class*="entry"]', 'h2 a', 'h3 a'],
        page_link_selector='a[href*="page/"]',
        page_number_pattern=r'page/(\d+)',
        max_pages=5,
        min_title_length=5,
        default_company='Various Organizations',
        default_location='Rwanda',
    ),

    'greatrwandajobs': SourceConfig(
        name='greatrwandajobs.com',
        display_name='Great Rwanda Jobs',
        base_url='https://www.greatrwandajobs.com/',
        listing_url='https://www.greatrwandajobs.com/jobs/',
        job_selectors=[
            '.job-listing', '.job-item', '[class*="job"]',
            '.position', '[class*="position"]',
            '.opportunity', '[class*="opportunity"]',
        ],
        page_link_selector='a[href*="page="], a[href*="/page/"]',
        page_number_pattern=r'page[=/](\d+)',
        max_pages=10,
    ),
}


# ============================================================
# HELPER FUNCTIONS
# ============================================================

def get_source_config(source_key: str) -> SourceConfig:
    """
    Get configuration for a source by its key.

    Args:
        source_key: Source key (e.g., 'kora', 'ndangira')

    Returns:
        SourceConfig for the source

    Raises:
        ValueError: If source_key is not found
    """
    if source_key not in SOURCES:
        valid_keys = ', '.join(sorted(SOURCES.keys()))
        raise ValueError(f"Unknown source: '{source_key}'. Valid sources: {valid_keys}")
    return SOURCES[source_key]


def get_enabled_sources() -> dict:
    """Get all enabled sources."""
    return {k: v for k, v in SOURCES.items() if v.enabled}


def list_sources() -> list:
    """List all source keys."""
    return list(SOURCES.keys())


def get_source_summary() -> list:
    """Get a summary of all sources for display."""
    summary = []
    for key, config in SOURCES.items():
        summary.append({
            'key': key,
            'name': config.name,
            'display_name': config.display_name,
            'enabled': config.enabled,
            'max_pages': config.max_pages,
            'url': config.listing_url,
        })
    return summary
