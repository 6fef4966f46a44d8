"""
Configuration loading.

The config file is read once at start-up and handed to every collector as an
immutable ``Config``.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import ConfigError

APP_NAME = "hello-term"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / APP_NAME / "config.json"


@dataclass(frozen=True)
class Config:
    """Read-only view over the parsed config file"""

    values: Mapping[str, Any]

    def require(self, key: str) -> str:
        """Return a required attribute as a string or fail"""
        value = self.values.get(key)
        if value is None:
            raise ConfigError(f"Couldn't find '{key}' attribute.")
        return str(value)

    @property
    def name(self) -> str:
        return self.require("name")

    @property
    def hostname(self) -> str:
        return self.require("hostname")

    @property
    def location(self) -> str:
        return self.require("location")

    @property
    def units(self) -> str:
        return self.require("units")

    @property
    def lang(self) -> str:
        return self.require("lang")

    @property
    def api_key(self) -> str:
        return self.require("api_key")

    @property
    def time_format(self) -> str:
        return self.require("time_format")

    @property
    def song_enabled(self) -> bool:
        """Now-playing lookup runs unless ``song`` is explicitly false"""
        return self.values.get("song") is not False

    @property
    def package_managers(self) -> Optional[List[str]]:
        """Configured package managers, or None when the feature is off"""
        managers = self.values.get("package_managers")
        if managers is None:
            return None
        if isinstance(managers, str):
            return [managers]
        if isinstance(managers, list):
            return [m for m in managers if isinstance(m, str)]
        # A lone number or object names no known manager
        return []


class ConfigManager:
    """Handle configuration file loading"""

    def __init__(self, config_path: Union[str, Path, None] = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self.default_config: Dict[str, Any] = {
            "song": True,
            "package_managers": None,
        }

    def load_config(self) -> Config:
        """Load configuration from file, merged over the defaults"""
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            raise ConfigError(f"Failed to open config file {self.config_path}: {e}") from e

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse config file as a JSON: {e}") from e

        if not isinstance(parsed, dict):
            raise ConfigError("Failed to parse config file as a JSON: top level is not an object")

        return Config(MappingProxyType({**self.default_config, **parsed}))
