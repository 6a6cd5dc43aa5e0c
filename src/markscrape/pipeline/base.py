"""Base classes for the extraction pipeline."""

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from ..errors import RenderingFault, ScrapeError
from ..models.config import ScrapeOptions
from ..models.result import ExtractionResult

logger = logging.getLogger(__name__)


@dataclass
class PageContext:
    """
    Context object passed through pipeline steps.

    Holds all state for a single request, accumulated as it moves
    through the pipeline. Nothing in it outlives the request.

    Attributes:
        url: The URL being scraped
        options: Rendering options for this request
        html: Rendered HTML snapshot
        status_code: Navigation status of the snapshot
        title: Document title
        published_time: Publication time from meta tags, if any
        markdown: Final Markdown content
    """

    url: str
    options: ScrapeOptions = field(default_factory=ScrapeOptions)

    html: Optional[str] = None
    status_code: Optional[int] = None

    title: str = ""
    published_time: Optional[str] = None
    markdown: Optional[str] = None

    def to_result(self) -> ExtractionResult:
        """Package the accumulated state as an ExtractionResult."""
        return ExtractionResult(
            title=self.title,
            url_source=self.url,
            published_time=self.published_time,
            markdown_content=self.markdown or "",
        )


@runtime_checkable
class PipelineStep(Protocol):
    """
    Protocol for pipeline steps.

    Each step receives a PageContext, processes it, and returns
    the (possibly modified) context.

    Error Handling Contract:
    - For request-level failures (bad URL, upstream status): raise a
      ScrapeError subclass; it reaches the caller unchanged
    - Any other exception is wrapped by the pipeline as a RenderingFault
    """

    name: str

    async def execute(self, ctx: PageContext) -> PageContext:
        """
        Execute this pipeline step.

        Args:
            ctx: The page context with accumulated state

        Returns:
            The (possibly modified) page context
        """
        ...


@dataclass
class ExtractionPipeline:
    """
    Pipeline for turning one URL into an ExtractionResult.

    Steps are executed in order; the first failure stops the run.

    Example:
        pipeline = ExtractionPipeline(steps=[
            ValidateStep(),
            BrowserFetchStep(fetcher),
            MetadataStep(),
            ConvertStep(),
        ])

        result = await pipeline.run("https://example.com", ScrapeOptions())
    """

    steps: list[PipelineStep]

    async def execute(self, url: str, options: Optional[ScrapeOptions] = None) -> PageContext:
        """
        Execute the pipeline for a URL.

        Raises:
            ScrapeError: Any failure, with step exceptions wrapped as RenderingFault
        """
        ctx = PageContext(url=url, options=options or ScrapeOptions())

        for step in self.steps:
            try:
                ctx = await step.execute(ctx)
            except ScrapeError:
                raise
            except Exception as e:
                logger.exception(f"Step {step.name} failed for {url}")
                raise RenderingFault(f"{step.name}: {e}") from e

        return ctx

    async def run(self, url: str, options: Optional[ScrapeOptions] = None) -> ExtractionResult:
        """Execute the pipeline and return its result."""
        ctx = await self.execute(url, options)
        return ctx.to_result()
