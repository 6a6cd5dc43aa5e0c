"""Pipeline step for metadata extraction."""

import logging
from typing import Optional

from ...concurrency.manager import ConcurrencyManager
from ...conversion.extractor import parse_html
from ...metadata_extractor import PageMetadataExtractor
from ..base import PageContext

logger = logging.getLogger(__name__)


class MetadataStep:
    """
    Pipeline step that reads title and publication time.

    Parses its own copy of the snapshot, so it always sees the original
    document regardless of what the conversion step removes.

    Example:
        step = MetadataStep()
        ctx = await step.execute(ctx)
        # ctx.title, ctx.published_time now populated
    """

    name = "metadata"

    def __init__(
        self,
        extractor: Optional[PageMetadataExtractor] = None,
        concurrency: Optional[ConcurrencyManager] = None,
    ):
        """
        Initialize the metadata step.

        Args:
            extractor: Metadata extractor (uses default if None)
            concurrency: Thread pool to parse in (parses inline if None)
        """
        self._extractor = extractor or PageMetadataExtractor()
        self._concurrency = concurrency

    def process(self, ctx: PageContext) -> PageContext:
        """Synchronous body of the step."""
        if ctx.html is None:
            return ctx

        metadata = self._extractor.extract(parse_html(ctx.html))
        ctx.title = metadata.title
        ctx.published_time = metadata.published_time
        return ctx

    async def execute(self, ctx: PageContext) -> PageContext:
        if self._concurrency is not None:
            return await self._concurrency.run_cpu_bound(self.process, ctx)
        return self.process(ctx)
