"""
In-process Playwright driver for the blog frontend.

One browser per client. The default page belongs to the primary actor;
isolated_page() opens a page in a fresh context (own cookies and local
storage) for a second actor, so two sessions can exist side by side.
Every context gets the frontend's base_url, so pages can goto("/").

Usage:
    async with PlaywrightClient(base_url="http://localhost:5173") as client:
        await client.page.goto("/")
"""

import logging
from typing import List, Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from blog_harness.config import HarnessSettings

logger = logging.getLogger(__name__)

BROWSER_TYPES = ("chromium", "firefox", "webkit")


class PlaywrightClient:
    """Browser plus the contexts opened for each actor."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        browser_type: str = "chromium",
        headless: Optional[bool] = None,
        timeout: int = 10000,
    ):
        """
        Args:
            base_url: Frontend root used to resolve relative navigation
            browser_type: chromium, firefox or webkit
            headless: None reads PLAYWRIGHT_HEADLESS via HarnessSettings (default true)
            timeout: Default action timeout in milliseconds
        """
        if browser_type not in BROWSER_TYPES:
            raise ValueError(f"Unsupported browser {browser_type!r}; expected one of {BROWSER_TYPES}")
        self.base_url = base_url
        self.browser_type = browser_type
        if headless is None:
            headless = HarnessSettings.from_env().playwright_headless
        self.headless = headless
        self.timeout = timeout

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []
        self._page: Optional[Page] = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def connect(self):
        self._playwright = await async_playwright().start()
        launcher = getattr(self._playwright, self.browser_type)
        self._browser = await launcher.launch(headless=self.headless)
        logger.debug(f"Launched {self.browser_type} (headless={self.headless})")
        self._page = await self.isolated_page()

    async def _new_context(self) -> BrowserContext:
        if not self._browser:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")
        options = {"base_url": self.base_url} if self.base_url else {}
        context = await self._browser.new_context(**options)
        context.set_default_timeout(self.timeout)
        self._contexts.append(context)
        return context

    async def isolated_page(self) -> Page:
        """Page in a brand-new context: starts logged out whatever other pages do."""
        context = await self._new_context()
        return await context.new_page()

    async def close(self):
        # Closing a context closes its pages
        while self._contexts:
            await self._contexts.pop().close()
        self._page = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def page(self) -> Page:
        """The primary actor's page."""
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page
