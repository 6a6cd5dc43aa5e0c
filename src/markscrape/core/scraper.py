"""Scraper: the request-level entry point to the extraction pipeline."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Any

from ..concurrency.browser_pool import BrowserFetcher
from ..concurrency.manager import ConcurrencyManager
from ..models.config import MarkscrapeConfig, ScrapeOptions
from ..models.result import ExtractionResult
from ..pipeline.base import ExtractionPipeline
from ..pipeline.steps import BrowserFetchStep, ConvertStep, MetadataStep, ValidateStep

logger = logging.getLogger(__name__)


class Scraper:
    """
    Turns URLs into ExtractionResults.

    Owns the browser pool and the conversion thread pool for its lifetime;
    any number of ``scrape`` calls may run concurrently.

    Example:
        async with Scraper(MarkscrapeConfig()) as scraper:
            result = await scraper.scrape("https://example.com")
            print(result.to_text())
    """

    def __init__(
        self,
        config: MarkscrapeConfig | None = None,
        browser_fetcher: BrowserFetcher | None = None,
    ) -> None:
        """
        Initialize the scraper.

        Args:
            config: Configuration (defaults used if None)
            browser_fetcher: Rendering provider (built from config if None)
        """
        self.config = config or MarkscrapeConfig()
        self._fetcher = browser_fetcher or BrowserFetcher(self.config.browser)
        self._concurrency = ConcurrencyManager(max_workers=self.config.performance.cpu_workers)
        self._pipeline = ExtractionPipeline(
            steps=[
                ValidateStep(),
                BrowserFetchStep(self._fetcher),
                MetadataStep(concurrency=self._concurrency),
                ConvertStep(concurrency=self._concurrency),
            ]
        )

    @property
    def pipeline(self) -> ExtractionPipeline:
        return self._pipeline

    async def __aenter__(self) -> Scraper:
        await self._fetcher.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            await self._fetcher.__aexit__(exc_type, exc_val, exc_tb)
        finally:
            self._concurrency.shutdown(wait=True)

    async def scrape(self, url: str, options: ScrapeOptions | None = None) -> ExtractionResult:
        """
        Render ``url`` and convert it to Markdown.

        Raises:
            ValidationError: Malformed URL
            UpstreamLoadError: Non-2xx navigation result
            RenderingFault: Browser or conversion failure
        """
        logger.info(f"Scraping {url}")
        return await self._pipeline.run(url, options)


def scrape_blocking(url: str, options: ScrapeOptions | None = None, **kwargs: Any) -> ExtractionResult:
    """
    Blocking scrape of a single URL.

    Convenience wrapper for sync code; do not call from within a running
    event loop.

    Args:
        url: The URL to scrape
        options: Rendering options
        **kwargs: Additional config options passed to MarkscrapeConfig

    Returns:
        The extraction result
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError("scrape_blocking() called from async context. Use 'async with Scraper()' instead.")

    config = MarkscrapeConfig(**kwargs)

    async def _run() -> ExtractionResult:
        async with Scraper(config) as scraper:
            return await scraper.scrape(url, options)

    return asyncio.run(_run())
