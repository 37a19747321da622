"""
System Fonts
============

Entry point of the font finder: discovers font files, builds the font
index snapshot, answers searches against it and installs missing fonts.
"""

import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core.config import FontFinderConfig
from ..core.exceptions import ConfigLoadError, InvalidCustomDirsError
from ..core.models import InstallOutcome, MissingFont, ResolvedFont, SearchResult
from .classifier import is_parseable
from .discovery import get_system_font_directories, list_candidate_font_files
from .index import FontIndex, build_index
from .installer import FontInstaller
from .models import FamilyEntry, FontNameRecord
from .parsers import (
    get_parsers,
    parse_font_files,
    parse_font_files_async,
    parse_font_name_records,
)
from .search import QueryLike, search_fonts

logger = logging.getLogger(__name__)


class SystemFonts:
    """
    Font discovery and search.

    Font files are discovered on construction. The index is built lazily on
    first use and kept as an immutable snapshot until ``refresh`` replaces
    it, so concurrent searches need no locking.
    """

    def __init__(self, config: FontFinderConfig | None = None, **overrides: Any):
        """
        Initialize system fonts.

        Args:
            config: Font finder configuration, loaded from the environment if omitted
            **overrides: Configuration fields overriding ``config``

        Raises:
            ConfigurationError: ``custom_dirs`` is not a list or the configuration is invalid
        """
        custom_dirs = overrides.get("custom_dirs")
        if custom_dirs is not None and not isinstance(custom_dirs, list | tuple):
            raise InvalidCustomDirsError(custom_dirs)

        try:
            if config is None:
                config = FontFinderConfig(**overrides)
            elif overrides:
                config = FontFinderConfig(**{**config.model_dump(), **overrides})
        except PydanticValidationError as e:
            raise ConfigLoadError(str(e)) from e

        self.config = config
        if config.debug:
            logging.getLogger("fontfinder").setLevel(config.effective_log_level)

        self.parsers = get_parsers(config.parsers)
        self.installer = FontInstaller(config.install_dir, config.install_timeout)

        self._lock = threading.Lock()
        self._index: FontIndex | None = None
        self.all_font_files: list[Path] = []
        self.font_files: list[Path] = []
        self.custom_font_files: set[Path] = set()

        self.init_font_files()

    def get_font_directories(self) -> list[Path]:
        """Custom directories first, then the system font directories."""
        directories = [Path(d) for d in self.config.custom_dirs]
        system_directories = list(get_system_font_directories())
        if self.config.install_dir and Path(self.config.install_dir) not in system_directories:
            system_directories.append(Path(self.config.install_dir))
        for directory in system_directories:
            if directory not in directories:
                directories.append(directory)
        return directories

    def init_font_files(self) -> None:
        """(Re)discover font files."""
        directories = self.get_font_directories()
        logger.debug(f"Font directories: {directories}")

        custom_dirs = [Path(d) for d in self.config.custom_dirs]
        custom_files = list_candidate_font_files(custom_dirs)
        other_files = list_candidate_font_files(d for d in directories if d not in custom_dirs)

        seen = set(custom_files)
        self.all_font_files = custom_files + [f for f in other_files if f not in seen]
        self.font_files = [f for f in self.all_font_files if is_parseable(f)]
        self.custom_font_files = set(custom_files)

        logger.info(
            f"Found {len(self.all_font_files)} font files, {len(self.font_files)} readable"
        )

    def get_all_font_files(self) -> list[Path]:
        """All discovered font files, including ones that cannot be parsed."""
        return list(self.all_font_files)

    def get_font_files(self) -> list[Path]:
        """Discovered font files the parsers can read."""
        return list(self.font_files)

    def is_system_font_file(self, file: str | Path) -> bool:
        return Path(file) not in self.custom_font_files

    def _files_to_index(self) -> list[Path]:
        if self.config.ignore_system_fonts:
            return [f for f in self.font_files if f in self.custom_font_files]
        return list(self.font_files)

    def get_font_info(self, file: str | Path) -> list[FontNameRecord]:
        """Name records of one font file; empty if it cannot be read."""
        return parse_font_name_records(file, self.is_system_font_file(file), self.parsers)

    async def get_font_info_async(self, file: str | Path) -> list[FontNameRecord]:
        return await parse_font_files_async(
            [file], self.custom_font_files, self.parsers, max_workers=1
        )

    def _store(self, index: FontIndex) -> FontIndex:
        with self._lock:
            self._index = index
        return index

    def _current(self) -> FontIndex | None:
        with self._lock:
            return self._index

    def get_fonts_extended(self, refresh: bool = False) -> FontIndex:
        """
        Get the font index snapshot.

        Args:
            refresh: Rebuild from the discovered files even if a snapshot exists

        Returns:
            Index of font families
        """
        index = self._current()
        if index is None or refresh:
            records = parse_font_files(
                self._files_to_index(),
                self.custom_font_files,
                self.parsers,
                self.config.max_workers,
            )
            index = self._store(build_index(records))
        return index

    async def get_fonts_extended_async(self, refresh: bool = False) -> FontIndex:
        """Asynchronous counterpart of ``get_fonts_extended``."""
        index = self._current()
        if index is None or refresh:
            records = await parse_font_files_async(
                self._files_to_index(),
                self.custom_font_files,
                self.parsers,
                self.config.max_workers,
            )
            index = self._store(build_index(records))
        return index

    def get_fonts(self) -> list[str]:
        """Sorted family names."""
        return self.get_fonts_extended().family_names()

    async def get_fonts_async(self) -> list[str]:
        index = await self.get_fonts_extended_async()
        return index.family_names()

    def search_fonts(
        self, fonts: Iterable[FamilyEntry], queries: Iterable[QueryLike]
    ) -> SearchResult:
        """Resolve queries against any list of family entries."""
        return search_fonts(tuple(fonts), queries)

    def find_fonts(self, queries: Iterable[QueryLike]) -> SearchResult:
        """Resolve queries against the current index."""
        return self.get_fonts_extended().search(queries)

    async def find_fonts_async(self, queries: Iterable[QueryLike]) -> SearchResult:
        index = await self.get_fonts_extended_async()
        return index.search(queries)

    def refresh(self) -> FontIndex:
        """Rediscover font files and replace the index with a new snapshot."""
        self.init_font_files()
        return self.get_fonts_extended(refresh=True)

    def install_fonts(
        self, font_paths: Iterable[str | Path], timeout: float | None = None
    ) -> InstallOutcome:
        """
        Install the given font files that are not indexed yet.

        Each file is identified by its first name record and searched in the
        index. Missing ones are installed, the index is rebuilt and searched
        again.

        Args:
            font_paths: Font files to install
            timeout: Seconds the font cache refresh may run

        Returns:
            Install outcome

        Raises:
            InstallError: copying or the cache refresh failed; the index is left as is
        """
        installer = self.installer
        if timeout is not None:
            installer = FontInstaller(installer.install_dir, timeout, installer.system)

        requests: list[tuple[str, str, Path]] = []
        unreadable: list[str] = []
        for font_path in font_paths:
            path = Path(font_path).resolve()
            records = self.get_font_info(path)
            if not records:
                logger.warning(f"Cannot read font name table of {path}")
                unreadable.append(str(path))
                continue
            requests.append((records[0].family, records[0].sub_family, path))

        index = self.get_fonts_extended()
        found: list[ResolvedFont] = []
        to_install: list[MissingFont] = []
        for family, style, path in requests:
            result = index.search([{"family": family, "style": style}])
            if result.found:
                found.append(result.found[0])
            if result.missing:
                to_install.append(result.missing[0].model_copy(update={"path": str(path)}))

        if not to_install:
            return InstallOutcome(success=True, found=found, unreadable=unreadable)

        copied = installer.install_fonts(font.path for font in to_install)
        new_index = self.refresh()

        installed: list[ResolvedFont] = []
        missing: list[MissingFont] = []
        for font in to_install:
            result = new_index.search([{"family": font.family, "style": font.style}])
            if result.found:
                installed.append(result.found[0].model_copy(update={"path": font.path}))
            else:
                missing.append(font)

        return InstallOutcome(
            success=not missing,
            found=found,
            missing=missing,
            installed=installed,
            installed_count=len(copied),
            unreadable=unreadable,
        )
