"""
Font Name Table Parsers
=======================

Parsers that read the name table of a font file, and the helpers that run
them over many files. Parsers are tried in order and the first one that
yields records wins: fontTools first, FreeType as the fallback.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Collection, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from fontTools.ttLib import TTCollection, TTFont

from ..core.config import AVAILABLE_PARSERS
from ..core.exceptions import (
    FontParseError,
    ParserUnavailableError,
    UnknownParserError,
    UnsupportedFontKindError,
)
from .classifier import classify
from .models import FontKind, FontNameRecord, LocalizedNames
from .normalizer import (
    NAME_ID_FAMILY,
    NAME_ID_POSTSCRIPT,
    NAME_ID_PREFERRED_FAMILY,
    NAME_ID_PREFERRED_SUBFAMILY,
    NAME_ID_SUBFAMILY,
    RawNameTable,
    normalize,
)

# Optional dependency - handled gracefully
try:
    import freetype
except ImportError:
    freetype = None

logger = logging.getLogger(__name__)

NAME_IDS = (
    NAME_ID_FAMILY,
    NAME_ID_SUBFAMILY,
    NAME_ID_POSTSCRIPT,
    NAME_ID_PREFERRED_FAMILY,
    NAME_ID_PREFERRED_SUBFAMILY,
)

PLATFORM_UNICODE = 0
PLATFORM_MAC = 1
PLATFORM_WINDOWS = 3
WINDOWS_ENGLISH_US = 0x409
MAC_ENGLISH = 0


class BaseFontParser(ABC):
    """Base class for font name table parsers."""

    name = "base"

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def parse(self, path: str | Path, kind: FontKind | None = None) -> list[RawNameTable]:
        """Read one raw name table per font face in ``path``.

        Raises:
            FontParseError: the file cannot be read by this parser
        """

    def _check_kind(self, path: str | Path, kind: FontKind | None) -> FontKind | None:
        kind = kind or classify(path)
        if kind is not None and not kind.parseable:
            raise UnsupportedFontKindError(str(path))
        return kind

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class FontToolsParser(BaseFontParser):
    """Reads a flat name table with fontTools, one per face."""

    name = "fonttools"

    def parse(self, path: str | Path, kind: FontKind | None = None) -> list[RawNameTable]:
        kind = self._check_kind(path, kind)
        try:
            if kind is FontKind.TTC:
                collection = TTCollection(str(path), lazy=True)
                try:
                    return [self._read_names(font) for font in collection.fonts]
                finally:
                    collection.close()

            font = TTFont(str(path), lazy=True)
            try:
                return [self._read_names(font)]
            finally:
                font.close()

        except FontParseError:
            raise
        except Exception as e:
            raise FontParseError(f"fonttools failed for {path}: {e}") from e

    def _read_names(self, font: TTFont) -> dict[int, str]:
        """Extract the identifying names, English records preferred."""
        name_table = font["name"]
        names = {}
        for name_id in NAME_IDS:
            value = name_table.getDebugName(name_id)
            if value:
                names[name_id] = value
        return names


def _decode_sfnt_name(record) -> str:
    """Decode a FreeType sfnt name record."""
    if record.platform_id in (PLATFORM_UNICODE, PLATFORM_WINDOWS):
        encoding = "utf-16-be"
    elif record.platform_id == PLATFORM_MAC and record.encoding_id == 0:
        encoding = "mac_roman"
    else:
        encoding = "latin-1"
    return record.string.decode(encoding, errors="replace").strip("\x00").strip()


def _decode_face_name(value: bytes | None) -> str | None:
    if not value:
        return None
    return value.decode("utf-8", errors="replace")


class FreeTypeParser(BaseFontParser):
    """Reads legacy names and every localized preferred name with FreeType."""

    name = "freetype"

    def parse(self, path: str | Path, kind: FontKind | None = None) -> list[RawNameTable]:
        self._check_kind(path, kind)
        if freetype is None:
            raise ParserUnavailableError(self.name, "freetype")

        try:
            face = freetype.Face(str(path))
            tables = [self._read_names(face)]
            for index in range(1, face.num_faces):
                tables.append(self._read_names(freetype.Face(str(path), index)))
        except FontParseError:
            raise
        except Exception as e:
            raise FontParseError(f"freetype failed for {path}: {e}") from e
        return tables

    def _read_names(self, face) -> LocalizedNames:
        # name_id -> {(platform, language): value}, in name table order
        records: dict[int, dict[tuple[int, int], str]] = {}
        for i in range(face.sfnt_name_count):
            record = face.get_sfnt_name(i)
            if record.name_id not in NAME_IDS:
                continue
            value = _decode_sfnt_name(record)
            if value:
                key = (record.platform_id, record.language_id)
                records.setdefault(record.name_id, {}).setdefault(key, value)

        preferred_families = self._localized(records.get(NAME_ID_PREFERRED_FAMILY, {}))
        preferred_sub_families = self._localized(records.get(NAME_ID_PREFERRED_SUBFAMILY, {}))

        return LocalizedNames(
            family=self._best(records.get(NAME_ID_FAMILY, {}))
            or _decode_face_name(face.family_name),
            sub_family=self._best(records.get(NAME_ID_SUBFAMILY, {}))
            or _decode_face_name(face.style_name),
            postscript_name=self._best(records.get(NAME_ID_POSTSCRIPT, {}))
            or _decode_face_name(face.postscript_name),
            preferred_families=list(preferred_families.values()),
            preferred_sub_families=[
                preferred_sub_families.get(language, "") for language in preferred_families
            ],
        )

    @staticmethod
    def _best(values: dict[tuple[int, int], str]) -> str | None:
        """English Windows name, then English Mac name, then the first one."""
        for key in ((PLATFORM_WINDOWS, WINDOWS_ENGLISH_US), (PLATFORM_MAC, MAC_ENGLISH)):
            if key in values:
                return values[key]
        return next(iter(values.values()), None)

    @staticmethod
    def _localized(values: dict[tuple[int, int], str]) -> dict[tuple[int, int], str]:
        """One record per language, Windows records preferred over the others."""
        windows = {key: value for key, value in values.items() if key[0] == PLATFORM_WINDOWS}
        return windows or values


PARSERS: dict[str, type[BaseFontParser]] = {
    FontToolsParser.name: FontToolsParser,
    FreeTypeParser.name: FreeTypeParser,
}


def get_parser(name: str) -> BaseFontParser:
    """Instantiate a registered parser by name."""
    try:
        return PARSERS[name]()
    except KeyError:
        raise UnknownParserError(name, list(PARSERS)) from None


def get_parsers(names: Iterable[str] = AVAILABLE_PARSERS) -> list[BaseFontParser]:
    return [get_parser(name) for name in names]


def parse_font_name_records(
    path: str | Path,
    is_system_font: bool = True,
    parsers: Sequence[BaseFontParser] | None = None,
) -> list[FontNameRecord]:
    """Read the name records of a font file.

    Each parser is tried in turn; the first to yield at least one record
    wins. A file no parser can read yields an empty list.
    """
    parsers = parsers if parsers is not None else get_parsers()
    kind = classify(path)

    for parser in parsers:
        try:
            tables = parser.parse(path, kind)
        except FontParseError as e:
            logger.debug(f"Error reading font {path} with {parser.name}: {e}")
            continue

        records = []
        for table in tables:
            try:
                records.append(normalize(table, str(path), is_system_font))
            except FontParseError as e:
                logger.debug(f"Skipping face of {path}: {e}")
        if records:
            return records

    logger.debug(f"No parser could read {path}")
    return []


def parse_font_files(
    files: Sequence[str | Path],
    custom_files: Collection[str | Path] = frozenset(),
    parsers: Sequence[BaseFontParser] | None = None,
    max_workers: int = 8,
) -> list[FontNameRecord]:
    """Parse many font files in parallel.

    Records are returned in the order of ``files`` so that aggregation stays
    deterministic. Files listed in ``custom_files`` are non-system fonts.
    """
    parsers = parsers if parsers is not None else get_parsers()
    custom = {str(f) for f in custom_files}

    def parse_one(file: str | Path) -> list[FontNameRecord]:
        return parse_font_name_records(file, str(file) not in custom, parsers)

    if max_workers == 1 or len(files) <= 1:
        results = [parse_one(file) for file in files]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(parse_one, files))

    records = [record for file_records in results for record in file_records]
    logger.debug(f"Parsed {len(records)} font records from {len(files)} files")
    return records


async def parse_font_files_async(
    files: Sequence[str | Path],
    custom_files: Collection[str | Path] = frozenset(),
    parsers: Sequence[BaseFontParser] | None = None,
    max_workers: int = 8,
) -> list[FontNameRecord]:
    """Asynchronous counterpart of ``parse_font_files``."""
    parsers = parsers if parsers is not None else get_parsers()
    custom = {str(f) for f in custom_files}
    semaphore = asyncio.Semaphore(max_workers)

    async def parse_one(file: str | Path) -> list[FontNameRecord]:
        async with semaphore:
            return await asyncio.to_thread(
                parse_font_name_records, file, str(file) not in custom, parsers
            )

    results = await asyncio.gather(*(parse_one(file) for file in files))
    return [record for file_records in results for record in file_records]
