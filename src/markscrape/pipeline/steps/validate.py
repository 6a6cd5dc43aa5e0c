"""ValidateStep - URL validation pipeline step."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from ...errors import ValidationError
from ..base import PageContext

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https"})


def validate_url(url: str | None) -> str:
    """
    Check that ``url`` is an absolute http(s) URL.

    Returns:
        The URL with surrounding whitespace removed

    Raises:
        ValidationError: URL missing, blank or malformed
    """
    if url is None or not url.strip():
        raise ValidationError("Missing 'url' query parameter")

    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.netloc:
        raise ValidationError(f"Invalid 'url' query parameter: {url}")
    return url


class ValidateStep:
    """
    Pipeline step that rejects malformed URLs before any browser work.

    Example:
        ctx = await ValidateStep().execute(PageContext(url="ftp://example.com"))
        # raises ValidationError
    """

    name = "validate"

    async def execute(self, ctx: PageContext) -> PageContext:
        ctx.url = validate_url(ctx.url)
        return ctx
