"""Error taxonomy for scrape requests.

Every error carries the HTTP status it maps to, so the web layer and the
CLI can report it without knowing which stage raised it.
"""

from __future__ import annotations

from typing import Any


class ScrapeError(Exception):
    """Base class for errors surfaced to the caller of a scrape."""

    status: int = 500

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(ScrapeError):
    """The request is missing or carries a malformed ``url``."""

    status = 400


class UpstreamLoadError(ScrapeError):
    """Navigation finished with a non-2xx status (or no response at all)."""

    def __init__(self, status: int) -> None:
        super().__init__(f"Failed to load URL: {status}", status=status)


class RenderingFault(ScrapeError):
    """Provider failure, navigation timeout, or crash during extraction."""

    status = 500

    def to_dict(self) -> dict[str, Any]:
        return {"error": "Failed to convert URL to Markdown", "detail": self.message}
