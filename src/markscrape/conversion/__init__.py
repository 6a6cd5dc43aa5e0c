"""Content conversion for markscrape (main content, tables, Markdown)."""

from .extractor import MainContentExtractor, parse_html
from .markdown import HtmlToMarkdown, ScrapeMarkdownConverter, postprocess_markdown
from .protocols import ContentExtractor
from .structured import StructuredDataFormatter, format_aligned_block

__all__ = [
    # Protocols
    "ContentExtractor",
    # Implementations
    "MainContentExtractor",
    "StructuredDataFormatter",
    "HtmlToMarkdown",
    "ScrapeMarkdownConverter",
    # Helpers
    "format_aligned_block",
    "parse_html",
    "postprocess_markdown",
]
