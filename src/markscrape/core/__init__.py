"""Core scraping API."""

from .scraper import Scraper, scrape_blocking

__all__ = ["Scraper", "scrape_blocking"]
