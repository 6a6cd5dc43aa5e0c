"""Pipeline step for browser-based fetching with JavaScript rendering."""

import logging

from ...concurrency.browser_pool import BrowserFetcher
from ..base import PageContext

logger = logging.getLogger(__name__)


class BrowserFetchStep:
    """
    Pipeline step that renders the page in a pooled browser.

    The browser page is borrowed for this step only and handed back
    before the step returns or raises.

    Example:
        async with BrowserFetcher() as fetcher:
            step = BrowserFetchStep(fetcher)
            ctx = await step.execute(ctx)
    """

    name = "browser_fetch"

    def __init__(self, browser_fetcher: BrowserFetcher):
        """
        Initialize the browser fetch step.

        Args:
            browser_fetcher: BrowserFetcher instance (must be initialized)
        """
        self._fetcher = browser_fetcher

    async def execute(self, ctx: PageContext) -> PageContext:
        """
        Fetch page content using browser rendering.

        Raises:
            UpstreamLoadError: Non-2xx navigation result
            RenderingFault: Browser failure or timeout
        """
        snapshot = await self._fetcher.fetch(ctx.url, wait_seconds=ctx.options.wait_seconds)

        ctx.html = snapshot.html
        ctx.status_code = snapshot.status

        logger.debug(f"Browser fetched {ctx.url}: status={snapshot.status}")
        return ctx
