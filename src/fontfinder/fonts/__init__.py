"""Font Discovery and Search
========================

Discovers installed font files, indexes them by family and style names and
resolves family/style queries against the index.
"""

from .aggregator import aggregate, sort_families
from .classifier import classify, is_parseable
from .discovery import get_system_font_directories, list_candidate_font_files
from .index import FontIndex, build_index
from .installer import FontInstaller
from .manager import SystemFonts
from .models import FamilyEntry, FontKind, FontNameRecord, LocalizedNames
from .normalizer import normalize
from .parsers import (
    FontToolsParser,
    FreeTypeParser,
    get_parser,
    parse_font_files,
    parse_font_files_async,
    parse_font_name_records,
)
from .reconciler import reconcile
from .search import normalize_queries, search_fonts

__all__ = [
    "FamilyEntry",
    "FontIndex",
    "FontInstaller",
    "FontKind",
    "FontNameRecord",
    "FontToolsParser",
    "FreeTypeParser",
    "LocalizedNames",
    "SystemFonts",
    "aggregate",
    "build_index",
    "classify",
    "get_parser",
    "get_system_font_directories",
    "is_parseable",
    "list_candidate_font_files",
    "normalize",
    "normalize_queries",
    "parse_font_files",
    "parse_font_files_async",
    "parse_font_name_records",
    "reconcile",
    "search_fonts",
    "sort_families",
]
