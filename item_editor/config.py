"""Configuration for item-editor, stored as YAML."""

from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger()

CONFIG_DIR_NAME = ".item-editor"
CONFIG_FILE_NAME = "config.yaml"

DEFAULTS: dict[str, str] = {
    "backend": "yaml",
    "yaml.path": "items.yaml",
    "rest.timeout": "10",
}


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


class Config:
    """Layered configuration.

    Local settings live in ``.item-editor/config.yaml`` under the working
    directory and global ones under the home directory. Lookups try the
    local file, then the global file, then built-in defaults.
    """

    def __init__(
        self,
        use_global: bool = False,
        config_dir: Path | None = None,
        global_dir: Path | None = None,
    ) -> None:
        """Initialize configuration manager.

        Args:
            use_global: Read and write the global config only
            config_dir: Directory holding the config file (overrides use_global)
            global_dir: Directory holding the global fallback config
        """
        global_dir = Path(global_dir) if global_dir is not None else Path.home() / CONFIG_DIR_NAME
        if config_dir is not None:
            self.config_dir = Path(config_dir)
        elif use_global:
            self.config_dir = global_dir
        else:
            self.config_dir = Path.cwd() / CONFIG_DIR_NAME
        self.is_global = use_global
        self.config_file = self.config_dir / CONFIG_FILE_NAME

        self._config: dict[str, Any] = self._load()

        self._global_config: dict[str, Any] = {}
        global_file = global_dir / CONFIG_FILE_NAME
        if not self.is_global and global_file != self.config_file and global_file.exists():
            try:
                self._global_config = _read_yaml(global_file)
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.warning("Failed to load global config", path=str(global_file), error=str(e))

        logger.debug("Config initialized", config_file=str(self.config_file), is_global=self.is_global)

    def _load(self) -> dict[str, Any]:
        if not self.config_file.exists():
            logger.debug("Config file does not exist, initializing empty config")
            return {}

        try:
            config = _read_yaml(self.config_file)
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load config", error=str(e))
            raise ValueError(f"Failed to load config from {self.config_file}: {e}") from e
        logger.debug("Config loaded successfully", keys=list(config.keys()))
        return config

    def _save(self) -> None:
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            logger.error("Failed to save config", error=str(e))
            raise ValueError(f"Failed to save config to {self.config_file}: {e}") from e
        logger.debug("Config saved successfully")

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a configuration value, falling back to global config and defaults."""
        if key in self._config:
            logger.debug("Getting config value from local", key=key)
            return self._config[key]
        if not self.is_global and key in self._global_config:
            logger.debug("Getting config value from global", key=key)
            return self._global_config[key]
        if default is None:
            default = DEFAULTS.get(key)
        logger.debug("Config value not set", key=key, default=default)
        return default

    def get_float(self, key: str) -> float:
        """Get a configuration value as a number."""
        value = self.get(key)
        try:
            return float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError) as e:
            raise ValueError(f"Config value {key} must be a number, got {value!r}") from e

    def set(self, key: str, value: str) -> None:
        """Set a configuration value."""
        logger.debug("Setting config value", key=key)
        self._config[key] = value
        self._save()

    def unset(self, key: str) -> None:
        """Remove a configuration value."""
        logger.debug("Unsetting config value", key=key)
        if key in self._config:
            del self._config[key]
            self._save()

    def list(self) -> dict[str, Any]:
        """List explicitly set values; local settings override global ones."""
        if self.is_global:
            return self._config.copy()
        merged = self._global_config.copy()
        merged.update(self._config)
        logger.debug("Listing merged config values", count=len(merged))
        return merged


def get_config(use_global: bool = False) -> Config:
    """Get a configuration instance."""
    return Config(use_global=use_global)
