"""Main content location and boilerplate removal."""

import copy
import logging
from typing import Optional

from bs4 import BeautifulSoup, Comment, Tag

logger = logging.getLogger(__name__)

# Candidates for the main content root, in priority order; first match wins
CONTENT_SELECTORS = (
    "main",
    "#main-content",
    "#main-container",
    "article",
    "#article",
    ".article",
    ".content",
    "#content",
)

# Elements removed outright
NOISE_TAGS = ("script", "style", "noscript", "nav", "header", "footer", "form")

# Substrings matched (case-insensitive) against tag name, id and class string
DENYLIST_TERMS = (
    "breadcrumbs",
    "cookies",
    "popup",
    "sidebar",
    "modal",
    "menu-container",
    "dropdown-menu",
    "header-dropdown",
)

# Top-level nodes that stay outside body when one has to be created
_HEAD_ONLY_TAGS = frozenset({"head", "title", "meta", "link", "base"})


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML snapshot into a fresh, independently owned tree."""
    return BeautifulSoup(html, "html.parser")


class MainContentExtractor:
    """
    Narrows a document down to its main content.

    The chosen content root is copied into ``body`` (replacing everything
    else there), then navigation, scripts and other boilerplate are deleted
    from it. The tree is modified in place.

    Example:
        soup = parse_html(html)
        body = MainContentExtractor().extract(soup)
    """

    def __init__(
        self,
        content_selectors: Optional[tuple[str, ...]] = None,
        noise_tags: Optional[tuple[str, ...]] = None,
        denylist_terms: Optional[tuple[str, ...]] = None,
    ):
        """
        Initialize the content extractor.

        Args:
            content_selectors: CSS selectors for main content (overrides defaults)
            noise_tags: Tag names removed outright (overrides defaults)
            denylist_terms: Substrings marking boilerplate regions (overrides defaults)
        """
        self._content_selectors = content_selectors or CONTENT_SELECTORS
        self._noise_tags = noise_tags or NOISE_TAGS
        self._denylist_terms = tuple(term.lower() for term in (denylist_terms or DENYLIST_TERMS))

    def _ensure_body(self, soup: BeautifulSoup) -> Tag:
        """Return the document body, creating one for fragments without it."""
        body = soup.body
        if body is not None:
            return body

        body = soup.new_tag("body")
        container = soup.html or soup
        movable = [
            node
            for node in container.contents
            if not (isinstance(node, Tag) and node.name in _HEAD_ONLY_TAGS)
        ]
        for node in movable:
            body.append(node.extract())
        container.append(body)
        return body

    def _find_main_content(self, soup: BeautifulSoup) -> Optional[Tag]:
        """Find the main content element using selectors."""
        for selector in self._content_selectors:
            element = soup.select_one(selector)
            if element is not None:
                logger.debug(f"Main content matched selector {selector!r}")
                return element
        return None

    def locate(self, soup: BeautifulSoup) -> Tag:
        """
        Make the main content the sole child of ``body``.

        Returns:
            The body element
        """
        body = self._ensure_body(soup)
        main_content = self._find_main_content(soup)

        # body itself, or a wrapper around it, leaves nothing to move
        if main_content is None or main_content is body or main_content in body.parents:
            return body

        # Copy instead of move so the original node keeps a valid parent
        content = copy.copy(main_content)
        body.clear()
        body.append(content)
        return body

    def _matches_denylist(self, element: Tag) -> bool:
        """Check tag name, id and class string against the denylist."""
        fields = (
            element.name or "",
            str(element.get("id") or ""),
            " ".join(element.get("class") or []),
        )
        for field in fields:
            lowered = field.lower()
            if any(term in lowered for term in self._denylist_terms):
                return True
        return False

    def remove_noise(self, root: Tag) -> None:
        """Remove boilerplate below ``root``: noise tags first, then denylisted regions."""
        removed = 0

        # Both passes walk a captured list; nested matches may already be gone
        for element in root.find_all(list(self._noise_tags)):
            if element.decomposed:
                continue
            element.decompose()
            removed += 1

        for element in root.find_all(True):
            if element.decomposed:
                continue
            if self._matches_denylist(element):
                element.decompose()
                removed += 1

        for comment in root.find_all(string=lambda text: isinstance(text, Comment)):
            comment.extract()

        logger.debug(f"Removed {removed} boilerplate elements")

    def extract(self, soup: BeautifulSoup) -> Tag:
        """
        Locate the main content and strip boilerplate from it.

        Args:
            soup: Parsed document (modified in place)

        Returns:
            The body element holding the cleaned main content
        """
        body = self.locate(soup)
        self.remove_noise(body)
        return body
