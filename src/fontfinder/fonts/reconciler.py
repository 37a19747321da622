"""
Alternate-Name Reconciler
=========================

Makes fonts discoverable under every family name they declare in their
preferred name records, on top of the family they were aggregated under.
A weight variant such as "Foo Bold"/"Regular" that also claims to be
"Foo"/"Bold" ends up searchable both ways.
"""

import logging
from collections.abc import Iterable

from .models import FamilyEntry

logger = logging.getLogger(__name__)


def reconcile(entries: Iterable[FamilyEntry]) -> list[FamilyEntry]:
    """Index every entry under its alternate family names.

    Only the entries passed in are scanned. Entries created here are
    appended after them and can receive further alternate styles, but their
    own alternate names are never expanded.

    Args:
        entries: Aggregated family entries, in index order

    Returns:
        New list with updated entries in place and new ones appended
    """
    result = list(entries)
    positions: dict[str, int] = {}
    for i, entry in enumerate(result):
        positions.setdefault(entry.family, i)

    created = 0
    for i in range(len(result)):
        entry = result[i]
        for style, alt_families in entry.alternative_families.items():
            file = entry.files.get(style)
            if not file:
                continue
            alt_sub_families = entry.alternative_sub_families.get(style, ())
            for index, alt_family in enumerate(alt_families):
                if not alt_family or alt_family == entry.family:
                    continue

                alt_style = alt_sub_families[index] if index < len(alt_sub_families) else ""
                postscript_name = entry.postscript_names.get(style)

                position = positions.get(alt_family)
                if position is None:
                    positions[alt_family] = len(result)
                    result.append(
                        FamilyEntry(
                            family=alt_family,
                            is_system_font=entry.is_system_font,
                            sub_families=(alt_style,),
                            files={alt_style: file},
                            postscript_names={alt_style: postscript_name},
                        )
                    )
                    created += 1
                elif not result[position].has_style(alt_style):
                    result[position] = result[position].with_style(
                        alt_style, file, postscript_name
                    )
                # first registration of a style wins

    logger.debug(f"Alternate names added {created} families")
    return result
