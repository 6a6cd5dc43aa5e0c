"""Result types produced by a scrape."""

from dataclasses import asdict, dataclass
from typing import Any, Optional


@dataclass
class PageSnapshot:
    """Rendered HTML of a page together with the navigation status."""

    url: str
    html: str
    status: int


@dataclass
class PageMetadata:
    """Metadata read from the original, untouched document."""

    title: str = ""
    published_time: Optional[str] = None


@dataclass
class ExtractionResult:
    """
    Final output of the extraction pipeline.

    Example:
        result = ExtractionResult(
            title="Example",
            url_source="https://example.com",
            published_time=None,
            markdown_content="# Example",
        )
        result.to_text()
    """

    title: str
    url_source: str
    published_time: Optional[str]
    markdown_content: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON response shape."""
        data = asdict(self)
        return {
            "title": data["title"],
            "urlSource": data["url_source"],
            "publishedTime": data["published_time"],
            "markdownContent": data["markdown_content"],
        }

    def to_text(self) -> str:
        """Render the labeled plain-text response body."""
        return (
            f"# Title: {self.title}\n\n"
            f"# URL Source: {self.url_source}\n\n"
            f"# Published Time: {self.published_time or 'N/A'}\n\n"
            f"# Markdown Content:\n{self.markdown_content}"
        )
