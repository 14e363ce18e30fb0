"""
Centralized YAML configuration loading utilities.

Provides consistent YAML loading with error handling and logging for the
config file, catalog seed files and trusted-id files.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class YAMLConfigLoader:
    """Centralized YAML configuration loader with consistent error handling."""

    @staticmethod
    def load_document(path: Path) -> Any:
        """
        Load any YAML document (mapping, list or scalar).

        Args:
            path: Path to YAML file

        Returns:
            Parsed document, None if the file is empty

        Raises:
            ConfigurationError: If the file is missing or cannot be parsed
        """
        if not path.exists():
            raise ConfigurationError(f"YAML file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML file {path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            logger.error(f"Unexpected error loading YAML file {path}: {e}")
            raise ConfigurationError(f"Cannot read {path}: {e}") from e

        logger.debug(f"Successfully loaded YAML from {path}")
        return data

    @staticmethod
    def load_yaml(path: Path) -> Dict[str, Any]:
        """
        Load a YAML mapping.

        Args:
            path: Path to YAML file

        Returns:
            Dictionary containing YAML data, empty dict if file is empty

        Raises:
            ConfigurationError: If the file is missing, invalid, or not a mapping
        """
        data = YAMLConfigLoader.load_document(path)

        if data is None:
            logger.warning(f"YAML file is empty or contains only comments: {path}")
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {path}")
        return data


def load_yaml(path: Path) -> Dict[str, Any]:
    """Convenience function for loading YAML files."""
    return YAMLConfigLoader.load_yaml(path)
