"""Configuration management for the font finder."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    CustomDirsTypeError,
    EmptyConfigFileError,
    EmptyParserListError,
    InvalidYamlError,
    UnknownParserError,
)

# Parser names in their default order of preference
AVAILABLE_PARSERS = ("fonttools", "freetype")


class FontFinderConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FONTFINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Font discovery, indexing and installation configuration."""

    # Discovery
    custom_dirs: list[Path] = Field(
        default_factory=list, description="Extra font directories (fonts there are non-system)"
    )
    ignore_system_fonts: bool = Field(False, description="Only index custom directory fonts")

    # Parsing
    parsers: list[str] = Field(
        default_factory=lambda: list(AVAILABLE_PARSERS),
        description="Font parsers, tried in order",
    )
    max_workers: int = Field(8, ge=1, description="Parallel font parsing workers")

    # Installation
    install_timeout: float = Field(20.0, gt=0.0, description="Install helper timeout in seconds")
    install_dir: Path | None = Field(None, description="Override for the user font directory")

    # Logging
    debug: bool = Field(False, description="Debug logging")
    log_level: str = Field("INFO", description="Log level")

    @field_validator("custom_dirs", mode="before")
    @classmethod
    def validate_custom_dirs(cls, v):
        """Reject anything but a list of directories."""
        if v is None:
            return []
        if not isinstance(v, list | tuple):
            raise CustomDirsTypeError()
        return list(v)

    @field_validator("parsers")
    @classmethod
    def validate_parsers(cls, v):
        """Ensure every configured parser is known."""
        if not v:
            raise EmptyParserListError()
        for name in v:
            if name not in AVAILABLE_PARSERS:
                raise UnknownParserError(name, list(AVAILABLE_PARSERS))
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        return v.upper()

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug switch."""
        return "DEBUG" if self.debug else self.log_level

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "FontFinderConfig":
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)

    @classmethod
    def from_env_and_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str = ".env", **overrides: Any
    ) -> "FontFinderConfig":
        """Load configuration from environment variables and optionally override with YAML."""
        if yaml_path and Path(yaml_path).exists():
            config = cls.from_yaml(yaml_path)
            return config.model_copy(update=overrides) if overrides else config
        # Load from environment variables/.env file
        return cls(_env_file=env_file if Path(env_file).exists() else None, **overrides)


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e

    if config_data is None:
        raise EmptyConfigFileError(str(config_path))

    # YAML-based configs do not read the .env file
    class TempConfig(config_class):
        model_config = SettingsConfigDict(
            env_file=None,
            case_sensitive=False,
            extra="ignore",
        )

    try:
        return TempConfig(**config_data)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigLoadError(str(e)) from e
