"""
Pytest configuration and fixtures for the job scraper tests.

Scrapers never talk to a real browser here: FakeSession serves fixture
HTML from a dict keyed by URL and implements the same capabilities as
BrowserSession (url, goto, wait_for_selector, soup, click, close).
"""

import dataclasses
from urllib.parse import urljoin

import pytest
from bs4 import BeautifulSoup

from jobscrapers.config import get_source_config


class FakeSession:
    """In-memory stand-in for BrowserSession."""

    def __init__(self, pages, timeout_ms=30000):
        self.pages = pages
        self.timeout_ms = timeout_ms
        self.url = ''
        self.requested = []     # every goto() attempt
        self.visited = []       # successful navigations
        self.clicks = []
        self.close_count = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        self.close_count += 1

    async def goto(self, url):
        self.requested.append(url)
        if url not in self.pages:
            raise ConnectionError(f"net::ERR_NAME_NOT_RESOLVED at {url}")
        self.url = url
        self.visited.append(url)

    async def soup(self):
        page = self.pages[self.url]
        if isinstance(page, Exception):
            raise page
        return BeautifulSoup(page, 'html.parser')

    async def wait_for_selector(self, selector, timeout_ms=None):
        soup = await self.soup()
        if soup.select_one(selector) is None:
            raise TimeoutError(f"Timeout {timeout_ms}ms exceeded waiting for {selector}")

    async def click(self, selector, timeout_ms=None):
        soup = await self.soup()
        element = soup.select_one(selector)
        if element is None:
            raise TimeoutError(f"Timeout {timeout_ms}ms exceeded waiting for {selector}")
        self.clicks.append(selector)
        href = element.get('href')
        if href:
            await self.goto(urljoin(self.url, href))


class UnclickableSession(FakeSession):
    """FakeSession on which every click times out."""

    async def click(self, selector, timeout_ms=None):
        raise TimeoutError(f"Timeout {timeout_ms}ms exceeded waiting for {selector}")

class FakeSessionFactory:
    """Session factory handing out FakeSessions; optionally fails to launch."""

    def __init__(self, pages, launch_error=None, session_class=FakeSession):
        self.pages = pages
        self.launch_error = launch_error
        self.session_class = session_class
        self.sessions = []

    def __call__(self, timeout_ms=30000):
        if self.launch_error is not None:
            raise self.launch_error
        session = self.session_class(self.pages, timeout_ms=timeout_ms)
        self.sessions.append(session)
        return session


@pytest.fixture
def session_factory():
    """Build a FakeSessionFactory: session_factory(pages, launch_error=None, session_class=FakeSession)."""
    return FakeSessionFactory


@pytest.fixture
def unclickable_session():
    """Session class whose clicks always fail."""
    return UnclickableSession

@pytest.fixture
def fast_config():
    """Return a source's config with every delay set to zero."""
    def build(source_key, **overrides):
        params = {
            'retry_delay': 0,
            'inter_page_delay': 0,
            'pagination_delay': 0,
            'settle_delay': 0,
        }
        params.update(overrides)
        return dataclasses.replace(get_source_config(source_key), **params)
    return build
