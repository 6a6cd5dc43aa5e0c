"""Playwright rendering provider backed by a pool of browser contexts."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from types import TracebackType
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from ..errors import RenderingFault, UpstreamLoadError
from ..models.config import BrowserConfig
from ..models.result import PageSnapshot

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Page, Playwright

logger = logging.getLogger(__name__)

# Status reported when navigation produced no response at all
NO_RESPONSE_STATUS = 502

VIEWPORT = {"width": 1920, "height": 1080}


class BrowserContextPool:
    """
    Bounded source of isolated browser contexts in one Chromium process.

    Every borrow gets a brand new context, closed again when the borrow
    ends, so cookies, storage and cache never carry over from one request
    to the next. At most ``max_contexts`` contexts are open at once; further
    borrowers wait up to the navigation timeout for a free slot.

    Example:
        async with BrowserContextPool(BrowserConfig(max_contexts=2)) as pool:
            async with pool.acquire() as page:
                await page.goto("https://example.com")
                html = await page.content()
    """

    def __init__(self, config: BrowserConfig | None = None) -> None:
        self._config = config or BrowserConfig()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._slots = asyncio.Semaphore(self._config.max_contexts)
        self._in_use = 0
        self._started = False

    @property
    def size(self) -> int:
        return self._config.max_contexts

    @property
    def in_use(self) -> int:
        return self._in_use

    async def _new_context(self) -> BrowserContext:
        if self._browser is None:
            raise RuntimeError("Browser not launched")

        options: dict[str, object] = {
            "viewport": VIEWPORT,
            "java_script_enabled": True,
            "ignore_https_errors": True,
        }
        if self._config.user_agent:
            options["user_agent"] = self._config.user_agent

        context = await self._browser.new_context(**options)  # type: ignore[arg-type]
        context.set_default_timeout(self._config.navigation_timeout * 1000)
        return context

    async def start(self) -> None:
        """Launch Chromium."""
        if self._started:
            return

        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self._config.headless)
        self._started = True
        logger.info(f"Browser pool started with {self.size} slots")

    async def close(self) -> None:
        """Close the browser and stop Playwright."""
        self._started = False
        try:
            if self._browser is not None:
                await self._browser.close()
        finally:
            self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
        logger.info("Browser pool closed")

    async def __aenter__(self) -> BrowserContextPool:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _wait_for_slot(self) -> None:
        timeout = self._config.navigation_timeout
        try:
            await asyncio.wait_for(self._slots.acquire(), timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"No browser context became free within {timeout:g}s")
            raise RenderingFault(f"Timed out waiting for a browser context after {timeout:g}s") from e

    @contextlib.asynccontextmanager
    async def acquire(self) -> AsyncIterator[Page]:
        """
        Borrow a page in a fresh context.

        The context (and its page) is closed and the slot released on every
        exit path, including errors raised inside the block and cancellation.

        Raises:
            RenderingFault: No slot became free within the navigation timeout
        """
        if not self._started:
            raise RuntimeError("Browser pool not started. Use 'async with' or start().")

        await self._wait_for_slot()
        self._in_use += 1
        context: BrowserContext | None = None
        try:
            context = await self._new_context()
            yield await context.new_page()
        finally:
            if context is not None:
                try:
                    await context.close()
                except Exception as e:
                    logger.debug(f"Error closing context: {e}")
            self._in_use -= 1
            self._slots.release()


class BrowserFetcher:
    """
    Rendering provider: loads a URL in a pooled browser page.

    Example:
        async with BrowserFetcher(BrowserConfig()) as fetcher:
            snapshot = await fetcher.fetch("https://example.com", wait_seconds=2)
    """

    def __init__(
        self,
        config: BrowserConfig | None = None,
        pool: BrowserContextPool | None = None,
    ) -> None:
        """
        Initialize the browser fetcher.

        Args:
            config: Browser settings (defaults used if None)
            pool: Pre-built context pool (one is created from config if None)
        """
        self._config = config or BrowserConfig()
        self._pool = pool or BrowserContextPool(self._config)
        self._timeout = self._config.navigation_timeout * 1000

    async def __aenter__(self) -> BrowserFetcher:
        await self._pool.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self._pool.close()

    async def fetch(self, url: str, wait_seconds: int | None = None) -> PageSnapshot:
        """
        Navigate to a page and capture its rendered HTML.

        Args:
            url: URL to load
            wait_seconds: Extra settle delay after navigation

        Returns:
            PageSnapshot with HTML and status code

        Raises:
            UpstreamLoadError: Navigation finished with a non-2xx status
            RenderingFault: Browser failure or navigation timeout
        """
        try:
            async with self._pool.acquire() as page:
                response = await page.goto(
                    url,
                    wait_until=self._config.wait_until,
                    timeout=self._timeout,
                )

                if response is None:
                    logger.warning(f"Browser fetch failed for {url}: no response")
                    raise UpstreamLoadError(NO_RESPONSE_STATUS)

                if not 200 <= response.status < 300:
                    logger.warning(f"Browser fetch failed for {url}: status={response.status}")
                    raise UpstreamLoadError(response.status)

                if wait_seconds:
                    await page.wait_for_timeout(wait_seconds * 1000)

                html = await page.content()
                logger.debug(f"Browser fetched {url}: {len(html)} characters")
                return PageSnapshot(url=url, html=html, status=response.status)

        except PlaywrightTimeoutError as e:
            logger.error(f"Navigation timed out for {url}: {e}")
            raise RenderingFault(
                f"Navigation timed out after {self._config.navigation_timeout:g}s"
            ) from e
        except PlaywrightError as e:
            logger.error(f"Browser fetch error for {url}: {e}")
            raise RenderingFault(f"Browser error: {e}") from e
