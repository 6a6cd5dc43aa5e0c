"""HTTP front end for markscrape."""

from .app import SCRAPER_KEY, create_app, run_server

__all__ = ["SCRAPER_KEY", "create_app", "run_server"]
