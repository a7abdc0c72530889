"""YAML loading utilities for scenario files."""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..errors import ConfigurationError


class ConfigLoader:
    """Load and merge YAML scenario configurations."""

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_dir: Directory relative paths are resolved against.
        """
        self.config_dir = Path(config_dir) if config_dir else Path("configs")
        self._cache: Dict[str, Dict] = {}

    def resolve(self, config_path: Union[str, Path]) -> Path:
        """Resolve a relative path against `config_dir` unless it exists as-is."""
        config_path = Path(config_path)
        if config_path.is_absolute() or config_path.exists():
            return config_path
        return self.config_dir / config_path

    def load(
        self,
        config_path: Union[str, Path],
        use_cache: bool = True,
    ) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to config file.
            use_cache: Whether to use cached config.

        Returns:
            Configuration dictionary.

        Raises:
            FileNotFoundError: The file does not exist.
            ConfigurationError: The file is not a YAML mapping.
        """
        config_path = self.resolve(config_path)
        cache_key = str(config_path)

        if use_cache and cache_key in self._cache:
            return self._cache[cache_key].copy()

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r") as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Failed to parse {config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(f"Scenario file {config_path} is not a mapping")

        config = self._process_includes(config, config_path.parent)

        if use_cache:
            self._cache[cache_key] = config

        return config.copy()

    def _process_includes(self, config: Dict, base_dir: Path) -> Dict:
        """Replace `!include <file>` string values with the included YAML."""
        result = {}

        for key, value in config.items():
            if isinstance(value, str) and value.startswith("!include "):
                include_path = base_dir / value[len("!include "):]
                with open(include_path, "r") as f:
                    result[key] = yaml.safe_load(f)
            elif isinstance(value, dict):
                result[key] = self._process_includes(value, base_dir)
            else:
                result[key] = value

        return result

    def merge(
        self,
        base: Dict[str, Any],
        override: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Deep merge two configurations.

        Args:
            base: Base configuration.
            override: Override configuration.

        Returns:
            Merged configuration.
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self.merge(result[key], value)
            else:
                result[key] = value

        return result

    def clear_cache(self) -> None:
        """Clear configuration cache."""
        self._cache.clear()


def get_nested(
    config: Dict[str, Any],
    key: str,
    default: Any = None,
) -> Any:
    """
    Get nested config value using dot notation.

    Args:
        config: Configuration dictionary.
        key: Dot-separated key (e.g., 'Evaluation.Conditions.PassRate').
        default: Default value if key not found.

    Returns:
        Config value or default.
    """
    value = config

    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value
