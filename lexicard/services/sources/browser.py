"""Shared headless browser for client-rendered pages."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from playwright.async_api import Browser, Page, Playwright, async_playwright

logger = logging.getLogger(__name__)


class BrowserPool:
    """
    One Chromium process per application, reused across requests.

    The browser is launched lazily on first use. Each caller gets a fresh
    context and page, bounded by ``max_pages``, and both are closed on every
    exit path.
    """

    def __init__(self, max_pages: int = 2, headless: bool = True) -> None:
        self.max_pages = max_pages
        self.headless = headless
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._launch_lock = asyncio.Lock()
        self._semaphore: asyncio.Semaphore | None = None

    def _get_semaphore(self) -> asyncio.Semaphore:
        """Get or create the page semaphore (lazy init for event loop)."""
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.max_pages)
        return self._semaphore

    async def _get_browser(self) -> Browser:
        async with self._launch_lock:
            if self._browser is None or not self._browser.is_connected():
                if self._playwright is None:
                    self._playwright = await async_playwright().start()
                logger.info("Launching headless Chromium...")
                self._browser = await self._playwright.chromium.launch(headless=self.headless)
            return self._browser

    @asynccontextmanager
    async def page(self, **context_options: Any) -> AsyncIterator[Page]:
        """Yield a new page in an isolated context."""
        async with self._get_semaphore():
            browser = await self._get_browser()
            context = await browser.new_context(**context_options)
            try:
                page = await context.new_page()
                try:
                    yield page
                finally:
                    await page.close()
            finally:
                await context.close()

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def close(self) -> None:
        """Shut down the browser and the Playwright driver."""
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                logger.warning(f"Error closing browser: {e}")
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
