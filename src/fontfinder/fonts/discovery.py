"""
Font Discovery
==============

Finds candidate font files in the standard font locations of the running
operating system and in caller supplied directories.
"""

import logging
import os
import platform
from collections.abc import Iterable
from pathlib import Path

from .classifier import classify

logger = logging.getLogger(__name__)

# Directories with this name (any case) hold removed fonts
DELETED_DIR_NAME = "deleted"


def current_system() -> str:
    """Lower-cased operating system name (windows, darwin, linux, ...)."""
    return platform.system().lower()


def get_system_font_directories(system: str | None = None) -> list[Path]:
    """Get system font directories based on operating system.

    Directories are returned whether or not they exist.
    """
    system = system or current_system()
    home = Path.home()

    if system == "windows":
        local_app_data = os.environ.get("LOCALAPPDATA") or str(home / "AppData" / "Local")
        win_dir = os.environ.get("WINDIR") or os.environ.get("windir") or "C:\\Windows"
        return [
            Path(local_app_data) / "Microsoft" / "Windows" / "Fonts",
            Path(win_dir) / "Fonts",
        ]

    if system == "darwin":
        return [
            home / "Library" / "Fonts",
            Path("/Library/Fonts"),
            Path("/System/Library/Fonts"),
            Path("/System/Library/Fonts/Supplemental"),
            # Adobe Fonts activated through Creative Cloud
            home / "Library" / "Application Support" / "Adobe" / "CoreSync" / "plugins"
            / "livetype" / ".r",
        ]

    # Linux and other Unix-like systems
    return [
        home / ".fonts",
        home / ".local" / "share" / "fonts",
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]


def _walk(target: Path, visited: set[Path]) -> list[Path]:
    """Recursively collect font files below ``target``."""
    try:
        is_dir = target.is_dir()
    except OSError as e:
        logger.debug(f"Cannot stat {target}: {e}")
        return []

    if not is_dir:
        try:
            is_file = target.is_file()
        except OSError:
            return []
        return [target] if is_file and classify(target) is not None else []

    try:
        real = target.resolve()
    except (OSError, RuntimeError):
        real = target
    if real in visited:
        return []
    visited.add(real)

    try:
        children = sorted(target.iterdir())
    except PermissionError:
        logger.debug(f"Permission denied accessing {target}")
        return []
    except OSError as e:
        logger.debug(f"Cannot list {target}: {e}")
        return []

    files: list[Path] = []
    for child in children:
        if child.name.lower() == DELETED_DIR_NAME:
            continue
        files.extend(_walk(child, visited))
    return files


def list_candidate_font_files(directories: Iterable[str | Path]) -> list[Path]:
    """List font files found recursively in ``directories``.

    Unreadable or missing directories are skipped, anything below a
    ``deleted`` directory is ignored and a file reached twice is listed
    once, at its first position.
    """
    visited: set[Path] = set()
    seen: set[Path] = set()
    files: list[Path] = []

    for directory in directories:
        directory = Path(directory)
        if not directory.exists():
            logger.debug(f"Font directory does not exist: {directory}")
            continue
        for file in _walk(directory, visited):
            if file not in seen:
                seen.add(file)
                files.append(file)

    logger.debug(f"Found {len(files)} candidate font files")
    return files
