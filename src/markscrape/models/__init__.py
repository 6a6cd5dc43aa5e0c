"""Markscrape configuration and result models."""

from .config import (
    BrowserConfig,
    MarkscrapeConfig,
    PerformanceConfig,
    ScrapeOptions,
    ServerConfig,
)
from .result import ExtractionResult, PageMetadata, PageSnapshot

__all__ = [
    # Config
    "BrowserConfig",
    "MarkscrapeConfig",
    "PerformanceConfig",
    "ScrapeOptions",
    "ServerConfig",
    # Results
    "ExtractionResult",
    "PageMetadata",
    "PageSnapshot",
]
