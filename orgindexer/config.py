"""
Configuration management for orgindexer.

This module handles loading and accessing configuration values from config.yaml.
It provides a centralized way to tune indexing, presentation markers and
logging without changing code.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class ConfigManager:
    """
    Manages configuration loading and access for orgindexer.
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

        except (OSError, yaml.YAMLError) as e:
            logging.warning(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "index": {
                "use_zip": True,
                "retrieve_prefix": "mm_",
                "unpackaged_dir": "unpackaged"
            },
            "performance": {
                "max_concurrent_requests": 0
            },
            "presentation": {
                "hidden_cls": "hidden",
                "hidden_add_class": "dynatree-hidden",
                "partial_cls": "x-tree-checkbox-checked-disabled"
            },
            "paths": {
                "log_file": "orgindexer.log"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "index.use_zip")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("index.retrieve_prefix")  # Returns "mm_"
            config.get("presentation.hidden_cls")  # Returns "hidden"
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
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def use_zip(self) -> bool:
        """Whether retrieve requests ask for a zipped payload."""
        return self.get("index.use_zip", True)

    @property
    def retrieve_prefix(self) -> str:
        """Prefix for temporary retrieve directories."""
        return self.get("index.retrieve_prefix", "mm_")

    @property
    def unpackaged_directory(self) -> str:
        """Directory name retrieved files are unpacked under."""
        return self.get("index.unpackaged_dir", "unpackaged")

    @property
    def max_concurrent_requests(self) -> int:
        """Upper bound on simultaneous remote calls (0 means unbounded)."""
        return self.get("performance.max_concurrent_requests", 0)

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "orgindexer.log")

    @property
    def hidden_cls(self) -> str:
        return self.get("presentation.hidden_cls", "hidden")

    @property
    def hidden_add_class(self) -> str:
        return self.get("presentation.hidden_add_class", "dynatree-hidden")

    @property
    def partial_cls(self) -> str:
        return self.get("presentation.partial_cls", "x-tree-checkbox-checked-disabled")


# Global configuration instance
config = ConfigManager()


def setup_logging(config_manager: Optional[ConfigManager] = None) -> None:
    """Configure logging for the application."""
    cfg = config_manager or config
    level = getattr(logging, cfg.get("logging.level", "INFO").upper())
    format_str = cfg.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(cfg.log_filename)
        ]
    )
