"""
Configuration management for todosync.
Loads YAML configuration files and fills in defaults.
"""

import copy
import logging
import os
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG = {
    'server': {
        'host': '127.0.0.1',
        'port': 3000,
        'seed': True,
    },
    'client': {
        'base_url': 'http://localhost:3000',
        'timeout': 10.0,
    },
    'cache': {
        'file': '~/.todosync/cache.json',
    },
    'notifier': {
        'duration': 3.0,
    },
    'logging': {
        'level': 'INFO',
        'console': True,
        'file': None,
    },
}


class Config:
    """
    Application configuration manager
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Load configuration from YAML file

        Args:
            config_path: Path to config.yaml; defaults only if None

        Raises:
            FileNotFoundError: If config_path is given but does not exist
        """
        self.logger = logging.getLogger(__name__)
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        if config_path is not None:
            if not os.path.exists(config_path):
                raise FileNotFoundError(f"Configuration file not found: {config_path}")

            with open(config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
            self._merge(self._config, loaded)
            self.logger.info(f"Configuration loaded from {config_path}")

        # Expand environment variables in paths
        self._expand_paths(self._config)

    def _merge(self, base: Dict, override: Dict):
        """Recursively merge override into base"""
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    def _expand_paths(self, config: Dict):
        """Recursively expand environment variables in path strings"""
        for key, value in config.items():
            if isinstance(value, dict):
                self._expand_paths(value)
            elif isinstance(value, str) and ('$' in value or '~' in value):
                config[key] = os.path.expandvars(os.path.expanduser(value))

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation

        Args:
            path: Configuration path (e.g., 'server.port')
            default: Default value if path doesn't exist

        Returns:
            Configuration value
        """
        keys = path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, path: str, value: Any):
        """
        Set configuration value using dot notation

        Args:
            path: Configuration path (e.g., 'server.port')
            value: Value to set
        """
        keys = path.split('.')
        config = self._config

        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value
        self.logger.debug(f"Config set: {path} = {value}")
