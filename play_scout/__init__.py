"""
play_scout package initializer.
Defines package version and exposes the scraper facade.
"""
__version__ = "0.1.0"

from .exceptions import (
    ExtractionStructureError,
    NotFoundError,
    RequestFailureError,
    ScraperError,
    ValidationError,
)
from .config import ScraperConfig, load_config
from .models import AppDetail, AppSummary
from .scraper import COLLECTIONS, PlayScraper

__all__ = [
    "__version__",
    "AppDetail",
    "AppSummary",
    "COLLECTIONS",
    "ExtractionStructureError",
    "NotFoundError",
    "PlayScraper",
    "RequestFailureError",
    "ScraperConfig",
    "ScraperError",
    "ValidationError",
    "load_config",
]
