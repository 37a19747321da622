"""
Family Aggregator
=================

Folds per-font records into one entry per family name.
"""

import locale
import logging
import unicodedata
from collections.abc import Iterable

from .models import FamilyEntry, FontNameRecord

logger = logging.getLogger(__name__)


def merge_record(
    families: dict[str, FamilyEntry], record: FontNameRecord
) -> dict[str, FamilyEntry]:
    """Merge one record into the family map.

    A known family gets the record's style appended (duplicates included)
    and the style's file, postscript name and alternate names overwritten.
    Once any record of a family is non-system, the family is non-system.
    """
    existing = families.get(record.family)
    if existing is None:
        families[record.family] = FamilyEntry.from_record(record)
    else:
        families[record.family] = existing.merged_with(record)
    return families


def aggregate(records: Iterable[FontNameRecord]) -> dict[str, FamilyEntry]:
    """Fold records, in order, into a mapping of family name to entry."""
    families: dict[str, FamilyEntry] = {}
    count = 0
    for record in records:
        merge_record(families, record)
        count += 1

    logger.debug(f"Aggregated {count} font records into {len(families)} families")
    return families


def _fold_accents(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def family_sort_key(name: str) -> tuple[str, str, str]:
    """Collation key for family names.

    Compares base letters first, ignoring case and accents, then accents,
    then case, so "arial" < "Bravo" < "Émile" < "Zed" even in the C locale.
    """
    folded = name.casefold()
    return (
        locale.strxfrm(_fold_accents(folded)),
        locale.strxfrm(folded),
        locale.strxfrm(name),
    )


def sort_families(entries: Iterable[FamilyEntry]) -> list[FamilyEntry]:
    """Sort entries by family name, case- and accent-insensitive first."""
    return sorted(entries, key=lambda entry: family_sort_key(entry.family))
