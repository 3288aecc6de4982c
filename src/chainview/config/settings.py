# File: src/chainview/config/settings.py

import os
from typing import Any, Dict, Optional

import yaml

from ..exceptions import ConfigError
from ..utils.config import Config

CONFIG_ENV_VAR = "CHAINVIEW_CONFIG"
DEFAULT_CONFIG_PATH = "config/chainview.yaml"


class Settings:
    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_path):
            return self._create_default_config()

        try:
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read {self.config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigError(f"{self.config_path} must contain a mapping")
        return _merge(self.defaults(), loaded)

    @staticmethod
    def defaults() -> Dict[str, Any]:
        return {
            "database": {
                "path": Config.DEFAULT_DB_PATH,
            },
            "api": {
                "host": Config.API_HOST,
                "port": Config.API_PORT,
                "prefix": Config.API_PREFIX,
            },
            "listing": {
                "block_height_floor": Config.BLOCK_HEIGHT_FLOOR,
                "recent_window": Config.RECENT_TRANSACTION_WINDOW,
                "limit": Config.LISTING_LIMIT,
            },
            "monitor": {
                "enabled": True,
                "refresh_interval": Config.MONITOR_REFRESH_INTERVAL,
                "request_timeout": Config.NODE_REQUEST_TIMEOUT,
                "seed_nodes": list(Config.SEED_NODES),
            },
            "monitoring": {
                "metrics_port": None,
                "log_dir": "logs",
                "log_level": "INFO",
            },
        }

    def _create_default_config(self) -> Dict[str, Any]:
        config = self.defaults()

        directory = os.path.dirname(self.config_path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.config_path, 'w') as f:
                yaml.safe_dump(config, f, sort_keys=False)
        except OSError as e:
            raise ConfigError(f"Cannot write default config to {self.config_path}: {e}") from e

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dotted key."""
        try:
            keys = key.split('.')
            value = self.config
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
