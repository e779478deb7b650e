"""Configuration loading for the student directory client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from studentdir.gateway import DEFAULT_BASE_URL
from studentdir.pagination import PAGE_SIZE_OPTIONS
from studentdir.search import BULK_SEARCH_SIZE

CONFIG_FILE_NAME = "studentdir.yaml"
DEFAULT_TIMEOUT = 30.0
DEFAULT_PAGE_SIZE = 10


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class ApiConfig:
    """Remote record store connection settings."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class DisplayConfig:
    """Directory display settings.

    page_size must be one of the page-size options offered by the table
    (5, 10, 25, 50). bulk_search_size is how many records a name search
    fetches before filtering locally.
    """

    page_size: int = DEFAULT_PAGE_SIZE
    bulk_search_size: int = BULK_SEARCH_SIZE


@dataclass
class DirectoryConfig:
    """Top-level client configuration."""

    api: ApiConfig = field(default_factory=ApiConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @classmethod
    def default(cls) -> DirectoryConfig:
        """Build the default configuration with environment overrides applied."""
        return cls().with_env_overrides()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DirectoryConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a value has the wrong type or is out of range.
        """
        api_data = data.get("api") or {}
        display_data = data.get("display") or {}
        if not isinstance(api_data, dict) or not isinstance(display_data, dict):
            raise ConfigError("'api' and 'display' sections must be mappings")

        try:
            api = ApiConfig(
                base_url=str(api_data.get("base_url", DEFAULT_BASE_URL)),
                timeout=float(api_data.get("timeout", DEFAULT_TIMEOUT)),
            )
            display = DisplayConfig(
                page_size=int(display_data.get("page_size", DEFAULT_PAGE_SIZE)),
                bulk_search_size=int(display_data.get("bulk_search_size", BULK_SEARCH_SIZE)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration value: {e}") from e

        config = cls(api=api, display=display)
        config.validate()
        return config

    def with_env_overrides(self) -> DirectoryConfig:
        """Apply STUDENTDIR_API_URL and STUDENTDIR_API_TIMEOUT overrides in place."""
        base_url = os.environ.get("STUDENTDIR_API_URL")
        if base_url:
            self.api.base_url = base_url

        timeout = os.environ.get("STUDENTDIR_API_TIMEOUT")
        if timeout:
            try:
                self.api.timeout = float(timeout)
            except ValueError as e:
                raise ConfigError(f"Invalid STUDENTDIR_API_TIMEOUT: {timeout!r}") from e

        self.validate()
        return self

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ConfigError: If any value is out of range.
        """
        if not self.api.base_url.startswith(("http://", "https://")):
            raise ConfigError(f"api.base_url must be an http(s) URL, got {self.api.base_url!r}")
        if self.api.timeout <= 0:
            raise ConfigError("api.timeout must be positive")
        if self.display.page_size not in PAGE_SIZE_OPTIONS:
            raise ConfigError(
                f"display.page_size must be one of {list(PAGE_SIZE_OPTIONS)}, "
                f"got {self.display.page_size}"
            )
        if self.display.bulk_search_size < 1:
            raise ConfigError("display.bulk_search_size must be at least 1")


def load_config(config_path: Path | str) -> DirectoryConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to studentdir.yaml file.

    Returns:
        Parsed configuration object with environment overrides applied.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return DirectoryConfig.from_dict(data).with_env_overrides()


def find_config(start_path: Path | str | None = None) -> Path | None:
    """Find studentdir.yaml by walking up the directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to the config file, or None when there is none.
    """
    start = Path.cwd() if start_path is None else Path(start_path)
    current = start.resolve()

    for directory in (current, *current.parents):
        config_path = directory / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

    return None
