"""Pipeline step for HTML to Markdown conversion."""

import logging
from typing import Optional

from ...concurrency.manager import ConcurrencyManager
from ...conversion.extractor import MainContentExtractor, parse_html
from ...conversion.protocols import ContentExtractor
from ...conversion.markdown import HtmlToMarkdown
from ...conversion.structured import StructuredDataFormatter
from ..base import PageContext

logger = logging.getLogger(__name__)


class ConvertStep:
    """
    Pipeline step that converts the snapshot to Markdown.

    Runs main content location, noise removal, table and definition list
    formatting, rendering and postprocessing on a freshly parsed tree.
    The whole transformation runs as one call, so it never yields midway
    through a tree.

    Example:
        step = ConvertStep()
        ctx = await step.execute(ctx)
        # ctx.markdown now contains the converted content
    """

    name = "convert"

    def __init__(
        self,
        extractor: Optional[ContentExtractor] = None,
        concurrency: Optional[ConcurrencyManager] = None,
    ):
        """
        Initialize the convert step.

        Args:
            extractor: Content extractor (uses default if None)
            concurrency: Thread pool to convert in (converts inline if None)
        """
        self._extractor = extractor or MainContentExtractor()
        self._concurrency = concurrency

    def process(self, ctx: PageContext) -> PageContext:
        """Synchronous body of the step."""
        if ctx.html is None:
            raise ValueError("No HTML content to convert")

        options = ctx.options
        soup = parse_html(ctx.html)

        body = self._extractor.extract(soup)
        StructuredDataFormatter(
            format_tables=options.format_tables,
            strip_tables=options.strip_tables,
        ).format(body)
        converter = HtmlToMarkdown(
            strip_images=options.strip_images,
            strip_links=options.strip_links,
        )
        ctx.markdown = converter.convert(body)

        logger.debug(f"Converted {ctx.url} to {len(ctx.markdown)} characters of Markdown")
        return ctx

    async def execute(self, ctx: PageContext) -> PageContext:
        if self._concurrency is not None:
            return await self._concurrency.run_cpu_bound(self.process, ctx)
        return self.process(ctx)
