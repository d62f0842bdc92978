"""Browser session used by every scraper."""

from .browser import BrowserSession, create_session

__all__ = ['BrowserSession', 'create_session']
