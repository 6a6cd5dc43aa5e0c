"""Command-line interface for markscrape."""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from . import __version__
from .core.scraper import Scraper
from .errors import ScrapeError
from .logging_config import setup_logging
from .models.config import MarkscrapeConfig, ScrapeOptions


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="markscrape",
        description="Render web pages and convert their main content to Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve the HTTP API on port 8080
  markscrape serve

  # Convert one page and print the labeled text body
  markscrape fetch https://example.com/article

  # JSON output, tables flattened to paragraphs, no images
  markscrape fetch https://example.com --json --no-format-tables --strip-images
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Run diagnostic checks",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )

    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default=None, help="Interface to bind (default: 0.0.0.0)")
    serve.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: $PORT or 8080)",
    )
    serve.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )

    fetch = subparsers.add_parser("fetch", help="Convert a single URL and print the result")
    fetch.add_argument("url", help="URL to convert")
    fetch.add_argument("--json", action="store_true", dest="use_json", help="Print JSON")
    fetch.add_argument(
        "--no-format-tables",
        action="store_false",
        dest="format_tables",
        help="Flatten tables and definition lists to paragraphs",
    )
    fetch.add_argument("--strip-tables", action="store_true", help="Drop tables and definition lists")
    fetch.add_argument("--strip-images", action="store_true", help="Drop images")
    fetch.add_argument("--strip-links", action="store_true", help="Render links as plain text")
    fetch.add_argument(
        "--wait",
        type=int,
        default=None,
        metavar="SECONDS",
        help="Extra settle delay after navigation",
    )

    return parser


def load_config(args: argparse.Namespace) -> MarkscrapeConfig:
    """Build configuration from the config file, environment and flags."""
    if args.config:
        config = MarkscrapeConfig.from_yaml_file(args.config)
    else:
        config = MarkscrapeConfig()

    server = config.server.model_copy()
    env_port = os.environ.get("PORT")
    if env_port:
        server.port = int(env_port)
    if getattr(args, "host", None):
        server.host = args.host
    if getattr(args, "port", None):
        server.port = args.port

    updates: dict = {"server": server}
    if getattr(args, "log_level", None):
        updates["log_level"] = args.log_level
    if args.verbose:
        updates["log_level"] = "DEBUG"
    return config.model_copy(update=updates)


def run_serve(config: MarkscrapeConfig) -> int:
    """Serve the HTTP API until interrupted."""
    from .server.app import run_server

    run_server(config)
    return 0


def run_fetch(args: argparse.Namespace, config: MarkscrapeConfig) -> int:
    """Convert a single URL and print the response body."""
    console = Console(soft_wrap=True)
    options = ScrapeOptions(
        format_tables=args.format_tables,
        strip_tables=args.strip_tables,
        strip_images=args.strip_images,
        strip_links=args.strip_links,
        use_json=args.use_json,
        wait_seconds=args.wait if args.wait and args.wait > 0 else None,
    )

    async def run() -> int:
        try:
            async with Scraper(config) as scraper:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    console=Console(stderr=True),
                    transient=True,
                ) as progress:
                    progress.add_task(f"[cyan]Rendering {args.url}", total=None)
                    result = await scraper.scrape(args.url, options)
        except ScrapeError as e:
            console.print(f"[red]Error:[/red] {e.message}")
            return 1
        except Exception as e:
            console.print(f"[red]Error:[/red] {e}")
            console.print("Run [bold]markscrape --doctor[/bold] to check the browser installation")
            return 1

        if options.use_json:
            console.print_json(json.dumps(result.to_dict()))
        else:
            console.print(result.to_text(), markup=False, highlight=False)
        return 0

    return asyncio.run(run())


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.doctor:
        from .doctor import run_doctor

        return run_doctor()

    if args.command is None:
        parser.print_help()
        return 1

    console = Console()
    try:
        config = load_config(args)
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    # Keep fetch output clean unless asked for more
    quiet = args.command == "fetch" and not args.verbose
    setup_logging(
        level="WARNING" if quiet else config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
    )

    if args.command == "serve":
        return run_serve(config)
    return run_fetch(args, config)


if __name__ == "__main__":
    sys.exit(main())
