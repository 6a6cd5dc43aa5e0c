import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers that share markscrape's handlers; aiohttp.access carries request lines
MANAGED_LOGGERS = ("markscrape", "aiohttp.access", "aiohttp.server")


def _build_handlers(level: int, log_file: Optional[str], format_string: str) -> list[logging.Handler]:
    formatter = logging.Formatter(format_string)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Set up logging for markscrape and the aiohttp server loggers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log messages
        force: If True, replace handlers that are already installed

    Returns:
        The configured ``markscrape`` logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    handlers = _build_handlers(numeric_level, log_file, format_string or DEFAULT_FORMAT)

    for name in MANAGED_LOGGERS:
        managed = logging.getLogger(name)
        managed.setLevel(numeric_level)
        if force or not managed.handlers:
            managed.handlers.clear()
            for handler in handlers:
                managed.addHandler(handler)
        managed.propagate = False

    return logging.getLogger("markscrape")
