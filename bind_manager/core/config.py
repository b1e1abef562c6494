"""Configuration management for bind-manager."""

import json
import os
import shlex
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from bind_manager.core.constants import (
    BLOCKED_DB_PATH,
    CONFIG_PATH,
    LOCK_FILE_NAME,
    LOCK_FILE_PATH,
    LOCK_TIMEOUT,
    LOG_FILE,
    LOG_LEVEL,
    REASON_LOG_PATH,
    RELOAD_COMMAND,
    RELOAD_TIMEOUT,
    ZONES_FILE_PATH,
)
from bind_manager.core.exceptions import ConfigError
from bind_manager.core.logger import logger


class Config:
    """Layered bind-manager configuration.

    Built-in defaults (environment aware) are overlaid by an optional
    YAML or JSON file, which is in turn overlaid by explicit ``set`` calls
    made by the CLI.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_path: Path to a YAML/JSON config file. If None, the
                ``BIND_MANAGER_CONFIG`` environment variable is consulted.
        """
        if config_path is None and CONFIG_PATH:
            config_path = Path(CONFIG_PATH)
        self.config_path = Path(config_path) if config_path else None
        self.config_data: Dict[str, Any] = self._get_default_config()
        self._load_config()

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "zones_file": ZONES_FILE_PATH,
            "reason_log": REASON_LOG_PATH,
            "blocked_db": BLOCKED_DB_PATH,
            "reload": {
                "command": RELOAD_COMMAND,
                "timeout": RELOAD_TIMEOUT,
            },
            "lock": {
                "file": LOCK_FILE_PATH,
                "timeout": LOCK_TIMEOUT,
            },
            "log_level": LOG_LEVEL,
            "log_file": LOG_FILE,
        }

    def _load_config(self) -> None:
        """Overlay the config file, if one was given."""
        if self.config_path is None:
            return
        if not self.config_path.exists():
            raise ConfigError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                if self.config_path.suffix.lower() in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Error parsing config {self.config_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config {self.config_path} must be a mapping")

        logger.debug(f"Loaded config from {self.config_path}")
        self._merge(self.config_data, data)

    def _merge(self, target: Dict[str, Any], overlay: Dict[str, Any]) -> None:
        for key, value in overlay.items():
            if key not in target:
                logger.debug(f"Ignoring unknown config key: {key}")
                continue
            if isinstance(target[key], dict) and isinstance(value, dict):
                self._merge(target[key], value)
            else:
                target[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key (supports dot notation, e.g., 'reload.timeout')
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self.config_data
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split(".")
        data = self.config_data
        for k in keys[:-1]:
            if k not in data:
                data[k] = {}
            data = data[k]
        data[keys[-1]] = value

    @property
    def zones_file(self) -> str:
        return str(self.get("zones_file"))

    @property
    def reason_log(self) -> str:
        return str(self.get("reason_log"))

    @property
    def blocked_db(self) -> str:
        return str(self.get("blocked_db"))

    @property
    def reload_command(self) -> List[str]:
        """Reload command as an argv list; strings are split shell-style."""
        command = self.get("reload.command")
        if isinstance(command, str):
            command = shlex.split(command)
        if not command:
            raise ConfigError("reload.command must not be empty")
        return [str(part) for part in command]

    @property
    def reload_timeout(self) -> float:
        return float(self.get("reload.timeout", RELOAD_TIMEOUT))

    @property
    def lock_file(self) -> str:
        """Lock file path, defaulting to a file beside the reason log."""
        lock_file = self.get("lock.file")
        if lock_file:
            return str(lock_file)
        return os.path.join(os.path.dirname(os.path.abspath(self.reason_log)), LOCK_FILE_NAME)

    @property
    def lock_timeout(self) -> float:
        return float(self.get("lock.timeout", LOCK_TIMEOUT))
