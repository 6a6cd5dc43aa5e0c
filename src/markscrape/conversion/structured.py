"""Definition list and table formatting.

Structured elements are rewritten before rendering, either into aligned
pipe blocks (kept verbatim by the Markdown renderer) or into flat
``key: value; key: value`` paragraphs.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Marks a <pre> whose text the renderer emits verbatim
BLOCK_ATTRIBUTE = "data-markscrape-block"

DL_HEADERS = ("Header", "Value")
MISSING_CELL = "N/A"


def cell_text(element: Tag) -> str:
    """Text of a cell, trimmed and collapsed onto a single line."""
    return " ".join(element.get_text().split())


def flatten_links(element: Tag) -> None:
    """Replace every anchor below ``element`` with its plain text."""
    for anchor in element.find_all("a"):
        if anchor.decomposed or anchor.parent is None:
            continue
        anchor.replace_with(anchor.get_text())


def format_aligned_block(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """
    Lay out a header row, a dash separator and data rows as a pipe table.

    Every cell is right-padded to the widest entry in its column (header
    included). Widths are character counts. Rows shorter than the header
    get empty cells.

    Example:
        >>> print(format_aligned_block(["Name", "Qty"], [["Bolt", "12"]]))
        | Name | Qty |
        | ---- | --- |
        | Bolt | 12  |
    """
    column_count = len(headers)
    padded_rows = [list(row) + [""] * (column_count - len(row)) for row in rows]

    widths = [len(header) for header in headers]
    for row in padded_rows:
        for index, value in enumerate(row[:column_count]):
            widths[index] = max(widths[index], len(value))

    def line(cells: Sequence[str]) -> str:
        return "| " + " | ".join(cell.ljust(width) for cell, width in zip(cells, widths)) + " |"

    lines = [line(headers), line(["-" * width for width in widths])]
    lines.extend(line(row) for row in padded_rows)
    return "\n".join(lines)


class StructuredDataFormatter:
    """
    Rewrites ``<dl>`` and ``<table>`` elements below a root.

    Example:
        formatter = StructuredDataFormatter(format_tables=True)
        formatter.format(body)
    """

    def __init__(self, format_tables: bool = True, strip_tables: bool = False):
        self._format_tables = format_tables
        self._strip_tables = strip_tables

    def _new_block(self, soup: BeautifulSoup, text: str) -> Tag:
        block = soup.new_tag("pre", attrs={BLOCK_ATTRIBUTE: ""})
        block.string = text
        return block

    def _new_paragraph(self, soup: BeautifulSoup, text: str) -> Tag:
        paragraph = soup.new_tag("p")
        paragraph.string = text
        return paragraph

    def format_definition_list(self, dl: Tag, soup: BeautifulSoup) -> bool:
        """
        Rewrite one definition list.

        Returns:
            True if the list was removed or replaced, False if left in place
        """
        if self._strip_tables:
            dl.decompose()
            return True

        terms = dl.find_all("dt")
        definitions = dl.find_all("dd")

        # Rejected lists stay byte-identical, links included
        if not terms or len(terms) != len(definitions):
            logger.debug(f"Leaving <dl> with {len(terms)} terms and {len(definitions)} definitions")
            return False

        for item in terms + definitions:
            flatten_links(item)

        pairs = [(cell_text(dt), cell_text(dd)) for dt, dd in zip(terms, definitions)]

        if self._format_tables:
            block = format_aligned_block(DL_HEADERS, [list(pair) for pair in pairs])
            dl.replace_with(self._new_block(soup, block))
        else:
            text = "; ".join(f"{term}: {definition}" for term, definition in pairs).strip()
            dl.replace_with(self._new_paragraph(soup, text))
        return True

    def format_table(self, table: Tag, soup: BeautifulSoup) -> bool:
        """
        Rewrite one table.

        Returns:
            True if the table was removed or replaced, False if left in place
        """
        if self._strip_tables:
            table.decompose()
            return True

        rows = table.find_all("tr")
        if not rows:
            return False

        header_cells = table.find_all("th")
        if header_cells:
            data_rows = rows
        else:
            header_cells = rows[0].find_all("td")
            data_rows = rows[1:]

        headers = [cell_text(cell) for cell in header_cells]
        body = [[cell_text(cell) for cell in row.find_all("td")] for row in data_rows]
        body = [cells for cells in body if cells]

        if not headers or not body:
            return False
        if any(len(cells) > len(headers) for cells in body):
            logger.debug("Leaving <table> whose rows are wider than its header")
            return False

        for cell in table.find_all(["td", "th"]):
            flatten_links(cell)

        if self._format_tables:
            table.replace_with(self._new_block(soup, format_aligned_block(headers, body)))
            return True

        paragraphs = []
        for cells in body:
            values = cells + [MISSING_CELL] * (len(headers) - len(cells))
            text = "; ".join(f"{header}: {value}" for header, value in zip(headers, values))
            paragraphs.append(self._new_paragraph(soup, text.strip()))

        table.replace_with(*paragraphs)
        return True

    def format(self, root: Tag) -> int:
        """
        Rewrite every definition list and table below ``root``.

        Returns:
            Number of elements removed or replaced
        """
        soup = _owning_soup(root)
        changed = 0

        for dl in root.find_all("dl"):
            # Lists nested in an already rewritten list are detached
            if dl.decomposed or not _is_attached(dl, root):
                continue
            if self.format_definition_list(dl, soup):
                changed += 1

        for table in root.find_all("table"):
            if table.decomposed or not _is_attached(table, root):
                continue
            if self.format_table(table, soup):
                changed += 1

        logger.debug(f"Rewrote {changed} structured elements")
        return changed


def _owning_soup(element: Tag) -> BeautifulSoup:
    top = element
    for parent in element.parents:
        top = parent
    if isinstance(top, BeautifulSoup):
        return top
    # Detached subtree: any BeautifulSoup instance can create tags
    return BeautifulSoup("", "html.parser")


def _is_attached(element: Tag, root: Tag) -> bool:
    return any(parent is root for parent in element.parents)
