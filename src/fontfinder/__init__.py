"""Font Finder
===========

Finds the fonts installed on a machine and indexes them by family and
style, so applications can locate a font file without knowing per-OS font
directories or parsing font binaries themselves.
"""

__version__ = "1.0.0"

from .core.config import FontFinderConfig
from .core.exceptions import ConfigurationError, FontFinderError, InstallError
from .core.models import InstallOutcome, MissingFont, ResolvedFont, SearchQuery, SearchResult
from .fonts import FamilyEntry, FontIndex, FontNameRecord, SystemFonts, build_index

__all__ = [
    "ConfigurationError",
    "FamilyEntry",
    "FontFinderConfig",
    "FontFinderError",
    "FontIndex",
    "FontNameRecord",
    "InstallError",
    "InstallOutcome",
    "MissingFont",
    "ResolvedFont",
    "SearchQuery",
    "SearchResult",
    "SystemFonts",
    "build_index",
]
