"""
Record Normalizer
=================

Turns the raw name table produced by a font parser into a canonical
``FontNameRecord``.
"""

from collections.abc import Mapping

from ..core.exceptions import IncompleteNameTableError
from .models import FontNameRecord, LocalizedNames

# OpenType name IDs
NAME_ID_FAMILY = 1
NAME_ID_SUBFAMILY = 2
NAME_ID_POSTSCRIPT = 6
NAME_ID_PREFERRED_FAMILY = 16
NAME_ID_PREFERRED_SUBFAMILY = 17

RawNameTable = Mapping[int, str] | LocalizedNames


def normalize_name_table(
    names: Mapping[int, str], file: str, is_system_font: bool = True
) -> FontNameRecord:
    """Normalize a flat name table.

    The preferred family/subfamily names win over the legacy ones. A flat
    table has no localized records, so the alternative lists stay empty.
    """
    family = names.get(NAME_ID_PREFERRED_FAMILY) or names.get(NAME_ID_FAMILY)
    sub_family = names.get(NAME_ID_PREFERRED_SUBFAMILY) or names.get(NAME_ID_SUBFAMILY)
    if not family or not sub_family:
        raise IncompleteNameTableError(file)

    return FontNameRecord(
        family=family,
        sub_family=sub_family,
        file=file,
        postscript_name=names.get(NAME_ID_POSTSCRIPT) or None,
        is_system_font=is_system_font,
    )


def normalize_localized(
    names: LocalizedNames, file: str, is_system_font: bool = True
) -> FontNameRecord:
    """Normalize a source exposing legacy names plus localized preferred records.

    Each preferred family record becomes an alternative identity, paired by
    position with the preferred subfamily records. A family without a
    subfamily counterpart is paired with an empty string.
    """
    if not names.family or not names.sub_family:
        raise IncompleteNameTableError(file)

    alternative_families = tuple(names.preferred_families)
    sub_families = list(names.preferred_sub_families[: len(alternative_families)])
    sub_families.extend([""] * (len(alternative_families) - len(sub_families)))

    return FontNameRecord(
        family=names.family,
        sub_family=names.sub_family,
        file=file,
        postscript_name=names.postscript_name or None,
        alternative_families=alternative_families,
        alternative_sub_families=tuple(sub_families),
        is_system_font=is_system_font,
    )


def normalize(raw: RawNameTable, file: str, is_system_font: bool = True) -> FontNameRecord:
    """Normalize any raw name table into a ``FontNameRecord``.

    Raises:
        IncompleteNameTableError: no family or subfamily name is present
    """
    if isinstance(raw, LocalizedNames):
        return normalize_localized(raw, file, is_system_font)
    return normalize_name_table(raw, file, is_system_font)
