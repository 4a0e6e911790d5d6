from typing import Any, AsyncIterator, Optional
from contextlib import asynccontextmanager
import asyncio
import structlog

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

logger = structlog.get_logger(__name__)


class BrowserController:
    """Process-wide browser page shared by every session.

    The page is launched lazily and handed out through ``acquire()``, which
    serializes access: at most one tool action touches the page at a time.
    """

    def __init__(
        self,
        headless: bool = True,
        viewport_width: int = 1280,
        viewport_height: int = 800,
        default_timeout_ms: int = 15000
    ):
        self.headless = headless
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.default_timeout_ms = default_timeout_ms

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None
        self._lock = asyncio.Lock()
        self._closed = False

    @property
    def is_started(self) -> bool:
        return self._page is not None

    @property
    def in_use(self) -> bool:
        return self._lock.locked()

    async def _ensure_page(self) -> Page:
        """Launch the browser on first use, or relaunch if the page was closed"""

        if self._page is not None and not self._page.is_closed():
            return self._page

        if self._playwright is None:
            self._playwright = await async_playwright().start()

        if self._browser is None or not self._browser.is_connected():
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            self._context = None

        if self._context is None:
            self._context = await self._browser.new_context(
                viewport={"width": self.viewport_width, "height": self.viewport_height}
            )

        self._page = await self._context.new_page()
        self._page.set_default_timeout(self.default_timeout_ms)

        logger.info("Browser page ready", headless=self.headless)
        return self._page

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[Page]:
        """Hold the shared page exclusively for one action"""

        async with self._lock:
            if self._closed:
                raise RuntimeError("Browser has been closed")
            page = await self._ensure_page()
            yield page

    async def close(self) -> None:
        """Close page, context, browser and driver. Safe to call twice."""

        async with self._lock:
            self._closed = True
            await self._close_quietly(self._context, "context")
            await self._close_quietly(self._browser, "browser")
            if self._playwright is not None:
                try:
                    await self._playwright.stop()
                except Exception as e:
                    logger.warning("Error stopping playwright", error=str(e))

            self._page = None
            self._context = None
            self._browser = None
            self._playwright = None

        logger.info("Browser closed")

    @staticmethod
    async def _close_quietly(resource: Any, label: str) -> None:
        if resource is None:
            return
        try:
            await resource.close()
        except Exception as e:
            logger.warning("Error closing browser resource", resource=label, error=str(e))
