"""Concurrency management for markscrape."""

from .browser_pool import BrowserContextPool, BrowserFetcher
from .manager import ConcurrencyManager

__all__ = [
    "BrowserContextPool",
    "BrowserFetcher",
    "ConcurrencyManager",
]
