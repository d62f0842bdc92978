"""
Headless browser session for JavaScript-rendered job boards.

Uses Playwright Chromium with a realistic desktop identity. One session
owns one browser process, one context and one page; it is released on
every exit path through the async context manager protocol.
"""

import asyncio
import logging
from typing import Optional

from bs4 import BeautifulSoup
from playwright.async_api import async_playwright, Browser, BrowserContext, Page

from ..settings import settings

logger = logging.getLogger(__name__)

LAUNCH_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-accelerated-2d-canvas',
    '--disable-blink-features=AutomationControlled',
    '--no-first-run',
    '--no-zygote',
    '--disable-gpu',
]


class BrowserSession:
    """
    Isolated Playwright browser with a single page.

    Capabilities used by scrapers:
    - url: current page address
    - goto(): navigate
    - wait_for_selector(): wait for a DOM marker (raises on timeout)
    - soup(): rendered DOM as BeautifulSoup
    - click(): activate an element
    - close(): release the browser (idempotent)

    Usage:
        async with BrowserSession(timeout_ms=30000) as session:
            await session.goto(url)
            soup = await session.soup()
    """

    def __init__(
        self,
        timeout_ms: int = 30000,
        headless: Optional[bool] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize the session (the browser starts on start()/__aenter__).

        Args:
            timeout_ms: Default timeout for navigations and actions
            headless: Run browser in headless mode (settings default)
            user_agent: Client identity string (settings default)
        """
        self.timeout_ms = timeout_ms
        self.headless = settings.scraper_headless if headless is None else headless
        self.user_agent = user_agent or settings.scraper_user_agent
        self._playwright = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None
        self._closed = False

    @property
    def url(self) -> str:
        return self._page.url if self._page else ''

    async def start(self) -> 'BrowserSession':
        """
        Launch the browser and open the page.

        Raises:
            Exception: The underlying launch error, after partial resources
                have been released
        """
        try:
            self._playwright = await async_playwright().start()

            logger.debug("Launching Chromium browser...")
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless,
                args=LAUNCH_ARGS,
                handle_sigint=False,
                handle_sigterm=False,
                handle_sighup=False,
            )

            self._context = await self._browser.new_context(
                viewport={
                    'width': settings.scraper_viewport_width,
                    'height': settings.scraper_viewport_height,
                },
                user_agent=self.user_agent,
                locale=settings.scraper_locale,
                ignore_https_errors=True,
                extra_http_headers={
                    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8',
                    'Accept-Language': 'en-US,en;q=0.9',
                },
            )

            self._page = await self._context.new_page()
            self._page.set_default_timeout(self.timeout_ms)
            self._page.set_default_navigation_timeout(self.timeout_ms)
            logger.debug("Browser initialization successful")

        except Exception as e:
            logger.error(f"Failed to initialize browser: {e}")
            await self.close()
            raise

        return self

    async def goto(self, url: str):
        """
        Navigate to url and wait for the DOM to be parsed.

        Raises:
            Exception: On navigation failure or an HTTP error status
        """
        response = await self._page.goto(url, wait_until='domcontentloaded')
        if response and response.status >= 400:
            raise Exception(f"HTTP {response.status} for {url}")

    async def wait_for_selector(self, selector: str, timeout_ms: Optional[int] = None):
        """Wait until selector is attached to the DOM. Raises on timeout."""
        await self._page.wait_for_selector(
            selector,
            timeout=timeout_ms if timeout_ms is not None else self.timeout_ms,
            state='attached',
        )

    async def soup(self) -> BeautifulSoup:
        """Return the rendered page parsed with BeautifulSoup."""
        html = await self._page.content()
        return BeautifulSoup(html, 'html.parser')

    async def click(self, selector: str, timeout_ms: Optional[int] = None):
        """Click the first element matching selector. Raises on failure."""
        await self._page.click(
            selector,
            timeout=timeout_ms if timeout_ms is not None else self.timeout_ms,
        )

    async def close(self):
        """Release browser resources with timeouts to prevent hanging."""
        if self._closed:
            return
        self._closed = True

        cleanup_timeout = 2.0  # seconds per cleanup operation

        for name, closer in (
            ('page', self._page.close if self._page else None),
            ('context', self._context.close if self._context else None),
            ('browser', self._browser.close if self._browser else None),
            ('playwright', self._playwright.stop if self._playwright else None),
        ):
            if closer is None:
                continue
            try:
                await asyncio.wait_for(closer(), timeout=cleanup_timeout)
            except asyncio.TimeoutError:
                logger.warning(f"Closing {name} timed out, forcing cleanup")
            except Exception as e:
                logger.warning(f"Error closing {name}: {e}")

        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None

    async def __aenter__(self):
        """Async context manager entry."""
        return await self.start()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


async def create_session(timeout_ms: int = 30000, **kwargs) -> BrowserSession:
    """
    Launch a browser session configured with timeout_ms.

    The caller owns the returned session and must close() it.
    """
    session = BrowserSession(timeout_ms=timeout_ms, **kwargs)
    return await session.start()
