"""Pydantic configuration models for markscrape."""

from collections.abc import Mapping
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

_TRUE_VALUES = frozenset({"1", "true"})
_FALSE_VALUES = frozenset({"0", "false"})


def _query_flag(query: Mapping[str, str], name: str, default: bool) -> bool:
    """Read a boolean query parameter, falling back to ``default``."""
    raw = query.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if default:
        # Enabled unless explicitly switched off
        return value not in _FALSE_VALUES
    return value in _TRUE_VALUES


def _query_positive_int(query: Mapping[str, str], name: str) -> Optional[int]:
    """Read a positive whole number; anything else is ignored."""
    raw = query.get(name)
    if raw is None:
        return None
    try:
        number = float(raw.strip())
    except ValueError:
        return None
    if number <= 0 or not number.is_integer():
        return None
    return int(number)


class ScrapeOptions(BaseModel):
    """Per-request rendering options."""

    format_tables: bool = Field(True, description="Render tables and definition lists as aligned blocks")
    strip_tables: bool = Field(False, description="Drop tables and definition lists entirely")
    strip_images: bool = Field(False, description="Drop all images")
    strip_links: bool = Field(False, description="Render anchors as plain text")
    use_json: bool = Field(False, description="Respond with JSON instead of labeled text")
    wait_seconds: Optional[int] = Field(
        None,
        ge=1,
        description="Extra settle delay after navigation (seconds)",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def from_query(cls, query: Mapping[str, str]) -> "ScrapeOptions":
        """
        Build options from request query parameters.

        Recognised keys: json, formatTables, stripTables, stripImages,
        stripLinks, waitForTimeoutSeconds.
        """
        return cls(
            format_tables=_query_flag(query, "formatTables", True),
            strip_tables=_query_flag(query, "stripTables", False),
            strip_images=_query_flag(query, "stripImages", False),
            strip_links=_query_flag(query, "stripLinks", False),
            use_json=_query_flag(query, "json", False),
            wait_seconds=_query_positive_int(query, "waitForTimeoutSeconds"),
        )


class BrowserConfig(BaseModel):
    """Configuration for the Playwright rendering provider."""

    headless: bool = Field(True, description="Run Chromium headless")
    max_contexts: int = Field(5, ge=1, description="Maximum browser contexts open at once")
    navigation_timeout: float = Field(30.0, gt=0, description="Navigation timeout in seconds")
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        "networkidle",
        description="Navigation event to wait for",
    )
    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")

    model_config = {"extra": "forbid"}


class ServerConfig(BaseModel):
    """Configuration for the HTTP front end."""

    host: str = Field("0.0.0.0", description="Interface to bind")
    port: int = Field(8080, ge=1, le=65535, description="Port to listen on")

    model_config = {"extra": "forbid"}


class PerformanceConfig(BaseModel):
    """Configuration for performance tuning."""

    cpu_workers: int = Field(
        4,
        ge=1,
        description="Thread pool workers for HTML parsing and Markdown conversion",
    )

    model_config = {"extra": "forbid"}


class MarkscrapeConfig(BaseModel):
    """
    Root configuration model for markscrape.

    Example:
        config = MarkscrapeConfig(
            server=ServerConfig(port=9000),
            browser=BrowserConfig(navigation_timeout=60),
        )

    YAML format:
        server:
          port: 9000
        browser:
          max_contexts: 2
          navigation_timeout: 60
        log_level: DEBUG
    """

    server: ServerConfig = Field(default_factory=ServerConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "MarkscrapeConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "MarkscrapeConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
