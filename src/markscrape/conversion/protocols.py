"""Protocol definitions for content conversion."""

from typing import Protocol

from bs4 import BeautifulSoup, Tag


class ContentExtractor(Protocol):
    """
    Protocol for narrowing a document down to its main content.

    Implementations select the main content area and remove navigation,
    headers, footers, scripts and similar boilerplate.
    """

    def extract(self, soup: BeautifulSoup) -> Tag:
        """
        Extract main content in place.

        Args:
            soup: Parsed document (modified in place)

        Returns:
            Element holding the cleaned content
        """
        ...
