"""Custom exceptions for the font finder."""

from typing import Any


class FontFinderError(Exception):
    """Base exception for all font finder errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(FontFinderError):
    """Exception raised for configuration errors."""


class ValidationError(FontFinderError):
    """Exception raised for input validation errors."""


class FontParseError(FontFinderError):
    """Exception raised when a font name table cannot be read."""


class InstallError(FontFinderError):
    """Exception raised when a font cannot be installed."""


# Specific exception classes for TRY003 compliance
class InvalidCustomDirsError(ConfigurationError):
    """Exception raised when custom directories are not a list of paths."""

    def __init__(self, value: Any):
        super().__init__(
            "custom_dirs must be a list of folder path strings, "
            f"got {type(value).__name__}",
            details={"value": value},
        )


class UnknownParserError(ConfigurationError):
    """Exception raised when a font parser name is not registered."""

    def __init__(self, name: str, available: list[str]):
        super().__init__(f"Unknown font parser '{name}'. Available parsers: {available}")


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")


class InvalidSearchQueryError(ValidationError):
    """Exception raised for a malformed search request."""

    def __init__(self, query: Any, error: str):
        super().__init__(f"Invalid search query {query!r}: {error}", details={"query": query})


class IncompleteNameTableError(FontParseError):
    """Exception raised when a name table has no family or subfamily name."""

    def __init__(self, file: str):
        super().__init__(f"Name table without family or subfamily name: {file}")


class UnsupportedFontKindError(FontParseError):
    """Exception raised when a file is discoverable but not parseable."""

    def __init__(self, file: str):
        super().__init__(f"Font file type is not parseable: {file}")


class ParserUnavailableError(FontParseError):
    """Exception raised when the library behind a parser is not installed."""

    def __init__(self, parser: str, module: str):
        super().__init__(f"Font parser '{parser}' needs the '{module}' module")


class FontFileNotFoundError(InstallError):
    """Exception raised when a font file to install does not exist."""

    def __init__(self, file: str):
        super().__init__(f"Font file not found: {file}")


class InstallTimeoutError(InstallError):
    """Exception raised when the font install helper process times out."""

    def __init__(self, command: str, timeout: float):
        super().__init__(f"Killed font install process '{command}' after {timeout:g} seconds")


class CustomDirsTypeError(ValueError):
    """Exception raised by the config validator for a non-list custom_dirs."""

    def __init__(self):
        super().__init__("custom_dirs must be an array of folder path strings")


class EmptyParserListError(ValueError):
    """Exception raised when no font parser is configured."""

    def __init__(self):
        super().__init__("At least one font parser is required")
