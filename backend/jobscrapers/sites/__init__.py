"""Per-source scraper implementations."""

from .jobwebrwanda import JobwebRwandaScraper
from .jobinrwanda import JobinRwandaScraper
from .kora import KoraScraper
from .ndangira import NdangiraScraper
from .greatrwandajobs import GreatRwandaJobsScraper

__all__ = [
    'JobwebRwandaScraper',
    'JobinRwandaScraper',
    'KoraScraper',
    'NdangiraScraper',
    'GreatRwandaJobsScraper',
]
