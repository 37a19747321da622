"""
Font Index
==========

Immutable snapshot of the indexed font families. A snapshot is built once
per scan and never changes; rescanning builds a new one, so readers holding
an older snapshot keep a consistent view.
"""

import logging
from collections.abc import Iterable, Iterator

from ..core.models import SearchResult
from .aggregator import aggregate, family_sort_key, sort_families
from .models import FamilyEntry, FontNameRecord
from .reconciler import reconcile
from .search import QueryLike, find_family, search_fonts

logger = logging.getLogger(__name__)


class FontIndex:
    """Searchable, read-only list of family entries."""

    def __init__(self, families: Iterable[FamilyEntry] = ()):
        self._families: tuple[FamilyEntry, ...] = tuple(families)

    @property
    def families(self) -> tuple[FamilyEntry, ...]:
        return self._families

    def family_names(self) -> list[str]:
        """Sorted, unique family names."""
        return sorted({entry.family for entry in self._families}, key=family_sort_key)

    def get(self, family: str) -> FamilyEntry | None:
        """Entry for an exact family name."""
        return find_family(self._families, family)

    def search(self, queries: Iterable[QueryLike]) -> SearchResult:
        """Resolve a batch of family/style queries against this snapshot."""
        return search_fonts(self._families, queries)

    def to_dict(self) -> list[dict]:
        return [entry.to_dict() for entry in self._families]

    def __contains__(self, family: object) -> bool:
        return any(entry.family == family for entry in self._families)

    def __iter__(self) -> Iterator[FamilyEntry]:
        return iter(self._families)

    def __len__(self) -> int:
        return len(self._families)

    def __repr__(self) -> str:
        return f"FontIndex({len(self._families)} families)"


def build_index(records: Iterable[FontNameRecord]) -> FontIndex:
    """Aggregate, sort and reconcile records into a new snapshot."""
    families = sort_families(aggregate(records).values())
    index = FontIndex(reconcile(families))
    logger.info(f"Indexed {len(index)} font families")
    return index
