"""Shared utilities for scrapers."""

from .extractors import (
    clean_text,
    truncate,
    first_text,
    first_link,
    is_navigable,
    closest,
    extract_date,
    extract_deadline,
    infer_company,
    parse_deadline,
)
from .resilience import (
    retry_operation,
    wait_for_selector,
    safe_click,
)

__all__ = [
    'clean_text',
    'truncate',
    'first_text',
    'first_link',
    'is_navigable',
    'closest',
    'extract_date',
    'extract_deadline',
    'infer_company',
    'parse_deadline',
    'retry_operation',
    'wait_for_selector',
    'safe_click',
]
