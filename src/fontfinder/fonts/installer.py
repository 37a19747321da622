"""
Font Installer
==============

Installs font files into the per-user font directory of the running
operating system and refreshes the platform font cache.
"""

import logging
import os
import shutil
import subprocess
from collections.abc import Iterable
from pathlib import Path

from ..core.exceptions import FontFileNotFoundError, InstallError, InstallTimeoutError
from .discovery import current_system

# Optional Windows dependency
try:
    import winreg
except ImportError:
    winreg = None

logger = logging.getLogger(__name__)

WINDOWS_FONTS_KEY = r"Software\Microsoft\Windows NT\CurrentVersion\Fonts"
DEFAULT_INSTALL_TIMEOUT = 20.0


class FontInstaller:
    """
    Copies fonts into the user font directory.

    The only external process it starts is the font cache refresh, which is
    killed once ``timeout`` seconds have passed.
    """

    def __init__(
        self,
        install_dir: Path | None = None,
        timeout: float = DEFAULT_INSTALL_TIMEOUT,
        system: str | None = None,
    ):
        """
        Initialize font installer.

        Args:
            install_dir: Target directory, defaults to the user font directory
            timeout: Seconds the cache refresh process may run
            system: Operating system name, defaults to the running one
        """
        self.system = system or current_system()
        self.install_dir = Path(install_dir) if install_dir else self.user_font_directory()
        self.timeout = timeout

    def user_font_directory(self) -> Path:
        """Per-user font directory of the operating system."""
        if self.system == "windows":
            local_app_data = os.environ.get("LOCALAPPDATA") or str(
                Path.home() / "AppData" / "Local"
            )
            return Path(local_app_data) / "Microsoft" / "Windows" / "Fonts"
        if self.system == "darwin":
            return Path.home() / "Library" / "Fonts"
        return Path.home() / ".local" / "share" / "fonts"

    def is_installed(self, font_path: str | Path) -> bool:
        """Whether a file of the same name (or its ``_0`` variant) is present."""
        source = Path(font_path)
        variant = f"{source.stem}_0{source.suffix}"
        return (self.install_dir / source.name).exists() or (
            self.install_dir / variant
        ).exists()

    def install_font(self, font_path: str | Path) -> Path | None:
        """
        Copy a font file into the install directory.

        Args:
            font_path: Font file to install

        Returns:
            Installed path, or None if the font was already there

        Raises:
            FontFileNotFoundError: the source file does not exist
            InstallError: the file cannot be copied or registered
        """
        source = Path(font_path)
        if not source.is_file():
            raise FontFileNotFoundError(str(font_path))

        if self.is_installed(source):
            logger.info(f"Font already present in {self.install_dir}: {source.name}")
            return None

        target = self.install_dir / source.name
        try:
            self.install_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
        except OSError as e:
            raise InstallError(f"Failed to copy {source} to {target}: {e}") from e

        if self.system == "windows":
            self._register_windows_font(target)

        logger.info(f"Installed font: {target}")
        return target

    def install_fonts(self, font_paths: Iterable[str | Path]) -> list[Path]:
        """Install several fonts, then refresh the font cache once."""
        installed = [path for path in map(self.install_font, font_paths) if path is not None]
        if installed:
            self.refresh_font_cache()
        return installed

    def _register_windows_font(self, target: Path) -> None:
        """Register a per-user font in the Windows registry."""
        if winreg is None:
            raise InstallError("winreg is not available on this platform")

        value_name = f"{target.stem} (TrueType)"
        try:
            with winreg.CreateKey(winreg.HKEY_CURRENT_USER, WINDOWS_FONTS_KEY) as key:
                winreg.SetValueEx(key, value_name, 0, winreg.REG_SZ, str(target))
        except OSError as e:
            raise InstallError(f"Failed to register font {target}: {e}") from e

    def refresh_font_cache(self) -> None:
        """
        Refresh the system font cache.

        Raises:
            InstallTimeoutError: the refresh process did not finish in time
            InstallError: the refresh process failed
        """
        if self.system == "linux":
            fc_cache_path = shutil.which("fc-cache")
            if not fc_cache_path:
                logger.warning("fc-cache not found in PATH")
                return
            self._run([fc_cache_path, "-f", str(self.install_dir)])
            logger.info("Refreshed fontconfig cache")

        elif self.system == "darwin":
            logger.info("macOS picks up fonts in the user font directory automatically")

        elif self.system == "windows":
            # Windows font cache is managed automatically
            logger.info("Windows font cache is managed automatically")

    def _run(self, command: list[str]) -> None:
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            logger.error(
                f"Kill font install process after {self.timeout:g} seconds timeout"
            )
            raise InstallTimeoutError(" ".join(command), self.timeout) from e
        except OSError as e:
            raise InstallError(f"Failed to run {command[0]}: {e}") from e

        if result.returncode != 0:
            raise InstallError(
                f"{command[0]} exited with status {result.returncode}",
                details={"stderr": result.stderr},
            )
