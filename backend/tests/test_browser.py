"""
Tests for BrowserSession resource handling.

Playwright is replaced with in-memory fakes so no browser is launched.
"""

import asyncio

import pytest

from jobscrapers.crawlers import browser
from jobscrapers.crawlers.browser import BrowserSession, create_session


class FakeResponse:
    def __init__(self, status):
        self.status = status


class FakePage:
    def __init__(self, status=200):
        self.url = 'about:blank'
        self.status = status
        self.close_count = 0
        self.timeouts = {}

    def set_default_timeout(self, timeout):
        self.timeouts['default'] = timeout

    def set_default_navigation_timeout(self, timeout):
        self.timeouts['navigation'] = timeout

    async def goto(self, url, wait_until=None):
        self.url = url
        return FakeResponse(self.status)

    async def content(self):
        return '<html><body><h1>Jobs</h1></body></html>'

    async def close(self):
        self.close_count += 1


class FakeContext:
    def __init__(self, page):
        self.page = page
        self.close_count = 0

    async def new_page(self):
        return self.page

    async def close(self):
        self.close_count += 1


class FakeBrowser:
    def __init__(self, page):
        self.context = FakeContext(page)
        self.context_options = None
        self.close_count = 0

    async def new_context(self, **kwargs):
        self.context_options = kwargs
        return self.context

    async def close(self):
        self.close_count += 1


class FakeChromium:
    def __init__(self, browser_instance, launch_error=None):
        self.browser = browser_instance
        self.launch_error = launch_error
        self.launch_options = None

    async def launch(self, **kwargs):
        self.launch_options = kwargs
        if self.launch_error is not None:
            raise self.launch_error
        return self.browser


class FakePlaywright:
    def __init__(self, chromium):
        self.chromium = chromium
        self.stop_count = 0

    async def stop(self):
        self.stop_count += 1


class FakeStarter:
    def __init__(self, playwright):
        self.playwright = playwright

    async def start(self):
        return self.playwright


@pytest.fixture
def fake_playwright(monkeypatch):
    """Install fake Playwright objects; returns (playwright, browser, page)."""
    def install(launch_error=None, status=200):
        page = FakePage(status=status)
        fake_browser = FakeBrowser(page)
        playwright = FakePlaywright(FakeChromium(fake_browser, launch_error))
        monkeypatch.setattr(browser, 'async_playwright', lambda: FakeStarter(playwright))
        return playwright, fake_browser, page
    return install


class TestBrowserSession:
    """Test session start-up and release."""

    def test_start_configures_page(self, fake_playwright):
        playwright, fake_browser, page = fake_playwright()

        session = asyncio.run(create_session(timeout_ms=15000, user_agent='TestAgent/1.0'))

        assert page.timeouts == {'default': 15000, 'navigation': 15000}
        assert fake_browser.context_options['user_agent'] == 'TestAgent/1.0'
        assert playwright.chromium.launch_options['headless'] is True
        assert session.url == 'about:blank'

    def test_close_is_idempotent(self, fake_playwright):
        playwright, fake_browser, page = fake_playwright()

        async def run():
            session = await create_session()
            await session.close()
            await session.close()

        asyncio.run(run())

        assert page.close_count == 1
        assert fake_browser.context.close_count == 1
        assert fake_browser.close_count == 1
        assert playwright.stop_count == 1

    def test_launch_failure_releases_playwright(self, fake_playwright):
        playwright, fake_browser, _ = fake_playwright(launch_error=RuntimeError("Executable doesn't exist"))

        with pytest.raises(RuntimeError):
            asyncio.run(create_session())

        assert playwright.stop_count == 1
        assert fake_browser.close_count == 0

    def test_context_manager_closes_on_error(self, fake_playwright):
        playwright, fake_browser, page = fake_playwright()

        async def run():
            async with BrowserSession() as session:
                await session.goto('https://jobportal.kora.rw/')
                raise ValueError("extraction failed")

        with pytest.raises(ValueError):
            asyncio.run(run())

        assert page.close_count == 1
        assert fake_browser.close_count == 1
        assert playwright.stop_count == 1

    def test_goto_http_error(self, fake_playwright):
        fake_playwright(status=503)

        async def run():
            async with BrowserSession() as session:
                await session.goto('https://www.ndangira.net/')

        with pytest.raises(Exception, match="HTTP 503"):
            asyncio.run(run())

    def test_soup(self, fake_playwright):
        fake_playwright()

        async def run():
            async with BrowserSession() as session:
                soup = await session.soup()
                return soup.h1.get_text()

        assert asyncio.run(run()) == 'Jobs'
