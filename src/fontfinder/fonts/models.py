"""
Font data models and types.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType


class FontKind(Enum):
    """Font container formats the finder recognises."""

    TTF = "ttf"
    OTF = "otf"
    TTC = "ttc"
    DFONT = "dfont"

    @property
    def parseable(self) -> bool:
        """Whether the name table parsers can read this format."""
        return self is not FontKind.DFONT


@dataclass(frozen=True)
class LocalizedNames:
    """Name table of a source that separates legacy and preferred names.

    Every localized preferred family/subfamily record is kept, in name table
    order.
    """

    family: str | None
    sub_family: str | None
    postscript_name: str | None = None
    preferred_families: list[str] = field(default_factory=list)
    preferred_sub_families: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FontNameRecord:
    """Identifying names of one physical font (one face of a collection)."""

    family: str
    sub_family: str
    file: str
    postscript_name: str | None = None
    alternative_families: tuple[str, ...] = ()
    alternative_sub_families: tuple[str, ...] = ()
    is_system_font: bool = True

    @property
    def filename(self) -> str:
        """Get the font filename."""
        return Path(self.file).name

    def __str__(self) -> str:
        return f"{self.family} {self.sub_family} ({self.filename})"


_FAMILY_MAPS = (
    "files",
    "postscript_names",
    "alternative_families",
    "alternative_sub_families",
)


def _freeze(value):
    return tuple(value) if isinstance(value, list) else value


@dataclass(frozen=True)
class FamilyEntry:
    """All indexed styles of one family name.

    ``sub_families`` keeps every added style in order, duplicates included;
    the per-style maps hold the last value written for a style name and are
    read-only views, so entries shared through an index cannot be changed.
    """

    family: str
    is_system_font: bool = True
    sub_families: tuple[str, ...] = ()
    files: Mapping[str, str] = field(default_factory=dict)
    postscript_names: Mapping[str, str | None] = field(default_factory=dict)
    alternative_families: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    alternative_sub_families: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "sub_families", tuple(self.sub_families))
        for name in _FAMILY_MAPS:
            value = {key: _freeze(v) for key, v in getattr(self, name).items()}
            object.__setattr__(self, name, MappingProxyType(value))

    def __hash__(self) -> int:
        return hash(
            (self.family, self.is_system_font, self.sub_families, tuple(self.files.items()))
        )

    @classmethod
    def from_record(cls, record: FontNameRecord) -> "FamilyEntry":
        """Seed an entry from a single record."""
        style = record.sub_family
        return cls(
            family=record.family,
            is_system_font=record.is_system_font,
            sub_families=(style,),
            files={style: record.file},
            postscript_names={style: record.postscript_name},
            alternative_families={style: tuple(record.alternative_families)},
            alternative_sub_families={style: tuple(record.alternative_sub_families)},
        )

    def merged_with(self, record: FontNameRecord) -> "FamilyEntry":
        """Return a new entry with ``record`` added as one more style."""
        style = record.sub_family
        return FamilyEntry(
            family=self.family,
            is_system_font=self.is_system_font and record.is_system_font,
            sub_families=(*self.sub_families, style),
            files={**self.files, style: record.file},
            postscript_names={**self.postscript_names, style: record.postscript_name},
            alternative_families={
                **self.alternative_families,
                style: tuple(record.alternative_families),
            },
            alternative_sub_families={
                **self.alternative_sub_families,
                style: tuple(record.alternative_sub_families),
            },
        )

    def with_style(self, style: str, file: str, postscript_name: str | None) -> "FamilyEntry":
        """Return a new entry with a style registered under an alternate name.

        The alternate-name maps are left alone.
        """
        return FamilyEntry(
            family=self.family,
            is_system_font=self.is_system_font,
            sub_families=(*self.sub_families, style),
            files={**self.files, style: file},
            postscript_names={**self.postscript_names, style: postscript_name},
            alternative_families=dict(self.alternative_families),
            alternative_sub_families=dict(self.alternative_sub_families),
        )

    def has_style(self, style: str) -> bool:
        return style in self.sub_families

    def to_dict(self) -> dict:
        """JSON-friendly representation."""
        return {
            "family": self.family,
            "is_system_font": self.is_system_font,
            "sub_families": list(self.sub_families),
            "files": dict(self.files),
            "postscript_names": dict(self.postscript_names),
            "alternative_families": {k: list(v) for k, v in self.alternative_families.items()},
            "alternative_sub_families": {
                k: list(v) for k, v in self.alternative_sub_families.items()
            },
        }

    def __str__(self) -> str:
        return f"{self.family} ({', '.join(self.sub_families)})"
