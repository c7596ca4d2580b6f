"""
load the config from config.yaml and environment variables
"""

import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional


DEFAULTS: Dict[str, Any] = {
    'fetcher': {
        'url': 'http://localhost:3000/',
        'timeout': None,
    },
    'output': {
        'mode': 'stdout',
        'path': 'crawler.html',
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    },
}


class Config:
    """Configuration loader that reads from config.yaml and environment variables."""

    def __init__(self, config_path: str = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to config.yaml file. If None, looks for config.yaml
                        in the same directory as this module.
        """
        if config_path is None:
            config_path = Path(__file__).parent / "config.yaml"

        self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and override with environment variables."""
        try:
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        config = self._merge(copy.deepcopy(DEFAULTS), loaded)
        return self._apply_env_overrides(config)

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value
        return base

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        # (config location, converter) per variable; values stay strings unless converted
        env_mappings = {
            'CRAWLER_URL': (('fetcher', 'url'), str),
            'FETCHER_TIMEOUT': (('fetcher', 'timeout'), self._convert_timeout),
            'CRAWLER_OUTPUT': (('output', 'mode'), str),
            'CRAWLER_OUTPUT_PATH': (('output', 'path'), str),
            'LOG_LEVEL': (('logging', 'level'), str),
            'LOG_FORMAT': (('logging', 'format'), str),
        }

        for env_var, (config_path, convert) in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value is not None:
                current = config
                for key in config_path[:-1]:
                    if key not in current:
                        current[key] = {}
                    current = current[key]

                final_key = config_path[-1]
                current[final_key] = convert(env_value)

        return config

    def _convert_timeout(self, value: str) -> Optional[float]:
        """Seconds as a float; empty, "none" or "null" mean no timeout."""
        if value.strip().lower() in ('', 'none', 'null'):
            return None
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"FETCHER_TIMEOUT must be a number of seconds, got {value!r}")

    def get(self, *keys, default=None):
        """Get configuration value using dot notation.

        Args:
            *keys: Configuration keys (e.g., 'fetcher', 'url')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self._config
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    @property
    def fetcher(self) -> Dict[str, Any]:
        """Get HTTP fetcher configuration."""
        return self.get('fetcher', default={})

    @property
    def output(self) -> Dict[str, Any]:
        """Get output configuration."""
        return self.get('output', default={})

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', default={})
