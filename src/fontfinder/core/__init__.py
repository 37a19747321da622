"""Core components for the font finder."""

from .config import FontFinderConfig
from .exceptions import (
    ConfigurationError,
    FontFinderError,
    FontParseError,
    InstallError,
    ValidationError,
)
from .models import (
    InstallOutcome,
    MissingFont,
    ResolvedFont,
    SearchQuery,
    SearchResult,
)

__all__ = [
    "ConfigurationError",
    "FontFinderConfig",
    "FontFinderError",
    "FontParseError",
    "InstallError",
    "InstallOutcome",
    "MissingFont",
    "ResolvedFont",
    "SearchQuery",
    "SearchResult",
    "ValidationError",
]
