"""
Configuration loader for graphql_search.

This module builds a SearchConfig from a JSON or YAML file and
``GRAPHQL_SEARCH_*`` environment variables, the environment taking
precedence over the file.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import yaml

from .models import SearchConfig


class ConfigLoader:
    """Configuration loader with support for files and environment variables."""

    def __init__(
        self,
        search_paths: Optional[Sequence[Union[str, Path]]] = None,
        env_prefix: str = "GRAPHQL_SEARCH_",
    ) -> None:
        """
        Initialize configuration loader.

        Args:
            search_paths: Files tried in order when no explicit file is given
            env_prefix: Prefix of the environment variables to read
        """
        if search_paths is None:
            self.config_paths: List[Path] = [
                Path("graphql_search.yaml"),
                Path("graphql_search.yml"),
                Path("graphql_search.json"),
                Path("config/graphql_search.yaml"),
                Path("config/graphql_search.yml"),
                Path("config/graphql_search.json"),
                Path.home() / ".graphql_search" / "config.yaml",
                Path.home() / ".graphql_search" / "config.json",
            ]
        else:
            self.config_paths = [Path(p) for p in search_paths]

        self.env_prefix = env_prefix

    def load_config(
        self,
        config_file: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> SearchConfig:
        """
        Load configuration from all available sources.

        Args:
            config_file: Specific config file to load
            environ: Environment mapping (defaults to ``os.environ``)

        Returns:
            SearchConfig instance with merged configuration

        Raises:
            ValueError: If a config file cannot be parsed
            pydantic.ValidationError: If the merged configuration is invalid
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_from_file(config_file)
        if file_config:
            config_data.update(file_config)

        env_config = self._load_from_environment(os.environ if environ is None else environ)
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        return SearchConfig(**config_data)

    def _load_from_file(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        if config_file:
            config_path = Path(config_file)
            if config_path.exists():
                return self._parse_config_file(config_path)
        else:
            for config_path in self.config_paths:
                if config_path.exists():
                    return self._parse_config_file(config_path)

        return None

    def _parse_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Parse configuration file based on extension."""
        suffix = config_path.suffix.lower()
        if suffix not in (".yaml", ".yml", ".json"):
            raise ValueError(f"Unsupported config file format: {config_path.suffix}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Failed to parse config file {config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")
        return data

    def _load_from_environment(self, environ: Mapping[str, str]) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        env_mappings = {
            # Fetcher
            f"{self.env_prefix}ENDPOINT": ("fetcher", "endpoint"),
            f"{self.env_prefix}APPLICATION_KEY": ("fetcher", "application_key"),
            f"{self.env_prefix}TIMEOUT": ("fetcher", "timeout"),
            f"{self.env_prefix}LOG_RESPONSE_BODIES": ("fetcher", "log_response_bodies"),
            # Logging
            f"{self.env_prefix}LOG_LEVEL": ("logging", "level"),
            f"{self.env_prefix}LOG_FORMAT": ("logging", "format"),
            f"{self.env_prefix}LOG_STRUCTURED": ("logging", "enable_structured"),
            f"{self.env_prefix}LOG_COMPACT": ("logging", "enable_compact"),
        }

        # Values stay strings; pydantic coerces them to the field types.
        for env_var, config_path in env_mappings.items():
            value = environ.get(env_var)
            if value is not None:
                current = config
                for key in config_path[:-1]:
                    current = current.setdefault(key, {})
                current[config_path[-1]] = value

        return config

    def _deep_merge(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(
    config_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SearchConfig:
    """Load configuration using the default search paths."""
    return ConfigLoader().load_config(config_file, environ)
