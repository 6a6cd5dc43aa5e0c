"""
markscrape - Render web pages and convert their main content to Markdown.

Usage:
    from markscrape import Scraper, ScrapeOptions

    async with Scraper() as scraper:
        result = await scraper.scrape(
            "https://example.com/article",
            ScrapeOptions(strip_images=True),
        )
        print(result.to_text())
"""

__version__ = "1.0.0"

from .core.scraper import Scraper, scrape_blocking
from .errors import RenderingFault, ScrapeError, UpstreamLoadError, ValidationError
from .models.config import (
    BrowserConfig,
    MarkscrapeConfig,
    PerformanceConfig,
    ScrapeOptions,
    ServerConfig,
)
from .models.result import ExtractionResult, PageMetadata, PageSnapshot

__all__ = [
    "__version__",
    # Core
    "Scraper",
    "scrape_blocking",
    # Config
    "MarkscrapeConfig",
    "ScrapeOptions",
    "BrowserConfig",
    "ServerConfig",
    "PerformanceConfig",
    # Results
    "ExtractionResult",
    "PageMetadata",
    "PageSnapshot",
    # Errors
    "ScrapeError",
    "ValidationError",
    "UpstreamLoadError",
    "RenderingFault",
]
