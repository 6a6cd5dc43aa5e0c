"""Pipeline architecture for scrape requests."""

from .base import ExtractionPipeline, PageContext, PipelineStep

__all__ = ["ExtractionPipeline", "PageContext", "PipelineStep"]
