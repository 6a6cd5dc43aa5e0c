"""HTML to Markdown conversion."""

from __future__ import annotations

import logging
import re
from typing import Any

from bs4 import Tag
from markdownify import ATX, MarkdownConverter

from .structured import BLOCK_ATTRIBUTE

logger = logging.getLogger(__name__)

# Base rendering style shared by every request
BASE_STYLE: dict[str, Any] = {
    "heading_style": ATX,
    "bullets": "-",
    "code_language": "",
}

_BLANK_LINE_RUN = re.compile(r"\n{3,}")


def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def postprocess_markdown(markdown: str) -> str:
    """
    Final cleanup of rendered Markdown.

    Trims the text, deletes literal ``\\[`` and ``\\]`` sequences and
    collapses runs of three or more newlines to a single blank line.
    """
    markdown = markdown.strip()
    markdown = markdown.replace("\\[", "").replace("\\]", "")
    return _BLANK_LINE_RUN.sub("\n\n", markdown)


class ScrapeMarkdownConverter(MarkdownConverter):
    """
    markdownify converter with the link, image and block rules.

    - Images without alt text are dropped; all images are dropped with
      ``strip_images``.
    - Links with no text are dropped; ``strip_links`` keeps only the text.
    - ``<pre>`` blocks produced by the structured data formatter are
      emitted verbatim instead of as fenced code.
    """

    def __init__(self, strip_images: bool = False, strip_links: bool = False, **options: Any):
        super().__init__(**options)
        self.strip_images = strip_images
        self.strip_links = strip_links

    def convert_img(self, el, text, parent_tags):
        if self.strip_images:
            return ""

        alt = _collapse_whitespace(el.get("alt") or "")
        if not alt:
            return ""

        src = el.get("src") or ""
        return f"![{alt}]({src})"

    def convert_a(self, el, text, parent_tags):
        text = _collapse_whitespace(el.get_text())
        if not text:
            return ""

        href = el.get("href")
        if self.strip_links or not href:
            return text

        return f"[{text}]({href})"

    def convert_pre(self, el, text, parent_tags):
        if el.has_attr(BLOCK_ATTRIBUTE):
            return f"\n\n{el.get_text()}\n\n"
        return super().convert_pre(el, text, parent_tags)


class HtmlToMarkdown:
    """
    Converts a cleaned content tree to Markdown.

    Example:
        converter = HtmlToMarkdown(strip_images=True)
        markdown = converter.convert(body)
    """

    def __init__(self, strip_images: bool = False, strip_links: bool = False):
        """
        Initialize the Markdown converter.

        Args:
            strip_images: Drop every image
            strip_links: Render anchors as plain text
        """
        self._converter = ScrapeMarkdownConverter(
            strip_images=strip_images,
            strip_links=strip_links,
            **BASE_STYLE,
        )

    def convert(self, root: Tag) -> str:
        """
        Render ``root`` and its descendants to Markdown.

        Args:
            root: Element to render (normally the document body)

        Returns:
            Postprocessed Markdown string
        """
        markdown = self._converter.convert_soup(root)
        markdown = postprocess_markdown(markdown)
        logger.debug(f"Rendered {len(markdown)} characters of Markdown")
        return markdown
