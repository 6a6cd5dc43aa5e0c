"""Pipeline steps for scrape requests."""

from .browser_fetch import BrowserFetchStep
from .convert import ConvertStep
from .metadata import MetadataStep
from .validate import ValidateStep, validate_url

__all__ = [
    "BrowserFetchStep",
    "ConvertStep",
    "MetadataStep",
    "ValidateStep",
    "validate_url",
]
