"""aiohttp application exposing the scrape endpoint."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from aiohttp import web

from ..core.scraper import Scraper
from ..errors import RenderingFault, ScrapeError
from ..models.config import MarkscrapeConfig, ScrapeOptions
from ..pipeline.steps.validate import validate_url

logger = logging.getLogger(__name__)

SCRAPER_KEY = web.AppKey("scraper", Scraper)

WELCOME_TEXT = "Welcome! Please use /api/scrape?url=<your_url> to convert a webpage to Markdown."

routes = web.RouteTableDef()


def _error_response(error: ScrapeError) -> web.Response:
    return web.json_response(error.to_dict(), status=error.status)


@routes.get("/")
async def index(request: web.Request) -> web.Response:
    return web.Response(text=WELCOME_TEXT)


@routes.get("/api/scrape")
async def scrape(request: web.Request) -> web.Response:
    """
    Convert the page at ``?url=`` to Markdown.

    Responds with JSON when ``json=1``/``json=true``, otherwise with the
    labeled plain-text body.
    """
    scraper = request.app[SCRAPER_KEY]

    try:
        # Rejects bad input before options are parsed; ValidateStep repeats
        # the check for callers that use Scraper directly
        url = validate_url(request.query.get("url"))
        options = ScrapeOptions.from_query(request.query)
        result = await scraper.scrape(url, options)
    except ScrapeError as e:
        if e.status >= 500:
            logger.error(f"Scrape failed for {request.query.get('url')}: {e.message}")
        return _error_response(e)
    except Exception as e:
        logger.exception(f"Unexpected error scraping {request.query.get('url')}")
        return _error_response(RenderingFault(str(e)))

    if options.use_json:
        return web.json_response(result.to_dict())
    return web.Response(text=result.to_text())


def create_app(config: MarkscrapeConfig | None = None, scraper: Scraper | None = None) -> web.Application:
    """
    Build the web application.

    Args:
        config: Configuration (defaults used if None)
        scraper: Pre-built scraper whose lifecycle the caller manages;
            when None, one is created and started with the app

    Returns:
        The aiohttp application
    """
    config = config or MarkscrapeConfig()
    app = web.Application()
    app.add_routes(routes)

    if scraper is not None:
        app[SCRAPER_KEY] = scraper
        return app

    async def scraper_lifecycle(app: web.Application) -> AsyncIterator[None]:
        async with Scraper(config) as owned:
            app[SCRAPER_KEY] = owned
            yield

    app.cleanup_ctx.append(scraper_lifecycle)
    return app


def run_server(config: MarkscrapeConfig) -> None:
    """Serve the application until interrupted."""
    logger.info(f"Server listening on port {config.server.port}")
    web.run_app(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        print=None,
    )
