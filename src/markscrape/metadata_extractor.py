"""Page metadata extraction from the original document."""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .models.result import PageMetadata

logger = logging.getLogger(__name__)

# Meta elements holding the publication time, in priority order
PUBLISHED_TIME_META = (
    {"property": "article:published_time"},
    {"name": "dcterms.created"},
)


class PageMetadataExtractor:
    """
    Reads the title and publication time of a page.

    Runs against the untouched document, independently of the content
    pipeline, so boilerplate removal never hides metadata.

    Example:
        metadata = PageMetadataExtractor().extract(soup)
        print(metadata.title, metadata.published_time)
    """

    def _extract_title(self, soup: BeautifulSoup) -> str:
        title_tag = soup.find("title")
        if isinstance(title_tag, Tag):
            return title_tag.get_text().strip()
        return ""

    def _extract_published_time(self, soup: BeautifulSoup) -> Optional[str]:
        for attrs in PUBLISHED_TIME_META:
            meta = soup.find("meta", attrs=attrs)
            if isinstance(meta, Tag) and meta.get("content") is not None:
                return str(meta["content"])
        return None

    def extract(self, soup: BeautifulSoup) -> PageMetadata:
        """
        Extract page metadata.

        Args:
            soup: Original parsed document (not modified)

        Returns:
            PageMetadata with title and optional publication time
        """
        metadata = PageMetadata(
            title=self._extract_title(soup),
            published_time=self._extract_published_time(soup),
        )
        logger.debug(f"Extracted metadata: title={metadata.title!r}")
        return metadata
