"""
Configuration management for todoist-blocks.

This module handles loading and accessing configuration values from config.yaml.
It holds the Todoist credential, the retrieval preferences that shape the
rendered blocks, and the logging setup used by the command-line entry.
"""

import yaml
import os
from pathlib import Path
from typing import Any, Dict
import logging


DEFAULT_PROJECT_PLACEHOLDER = "--- ---"


class ConfigManager:
    """
    Manages configuration loading and access for todoist-blocks.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}

            logging.info(f"Configuration loaded from {self.config_path}")

        except Exception as e:
            logging.warning(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "todoist": {
                "api_token": "",
                "base_url": "https://api.todoist.com/api/v1",
                "timeout": 30.0
            },
            "retrieve": {
                "default_project": DEFAULT_PROJECT_PLACEHOLDER,
                "append_todo": True,
                "append_labels": False,
                "append_todoist_id": True,
                "append_creation_datetime": False,
                "append_url": False,
                "clear_tasks": False,
                "project_name_as_parent_block": False
            },
            "logseq": {
                "preferred_date_format": "MMM do, yyyy"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "file": "todoist_blocks.log"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "todoist.timeout")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("todoist.base_url")  # Returns "https://api.todoist.com/api/v1"
            config.get("retrieve.append_todo")  # Returns True
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {}) or {}

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def api_token(self) -> str:
        """Get the Todoist API token, falling back to TODOIST_API_TOKEN."""
        return self.get("todoist.api_token") or os.environ.get("TODOIST_API_TOKEN", "")

    @property
    def base_url(self) -> str:
        """Get the Todoist REST API root."""
        return self.get("todoist.base_url", "https://api.todoist.com/api/v1")

    @property
    def timeout(self) -> float:
        """Get the HTTP timeout."""
        return self.get("todoist.timeout", 30.0)

    @property
    def default_project(self) -> str:
        """Get the default project selector ("Name (id)")."""
        return self.get("retrieve.default_project", DEFAULT_PROJECT_PLACEHOLDER) or DEFAULT_PROJECT_PLACEHOLDER

    @property
    def clear_tasks(self) -> bool:
        """Whether fetched tasks are deleted from Todoist after retrieval."""
        return bool(self.get("retrieve.clear_tasks", False))

    @property
    def project_name_as_parent_block(self) -> bool:
        """Whether the anchor block is renamed to the default project's name."""
        return bool(self.get("retrieve.project_name_as_parent_block", False))

    @property
    def preferred_date_format(self) -> str:
        """Get the page-date format used for creation dates."""
        return self.get("logseq.preferred_date_format", "MMM do, yyyy")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("logging.file", "todoist_blocks.log")

    def read_flag(self, key_path: str, fallback: bool) -> bool:
        """
        Read a boolean setting, using the fallback only when the key is unset.

        Args:
            key_path: Dot-separated path to the setting
            fallback: Value used when the setting is missing or null

        Returns:
            The setting coerced to bool
        """
        value = self.get(key_path)
        if value is None:
            return fallback
        return bool(value)


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
