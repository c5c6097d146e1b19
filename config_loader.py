"""
Configuration Loader
Defaults, overlaid by config.yaml, overlaid by environment variables
"""
import copy
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from constants import (
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_MAX_RESULTS,
    DEFAULT_MIN_SCORE,
    EMBEDDING_SIMILARITY_THRESHOLD,
    EMBEDDING_TIMEOUT_SECONDS,
)

DEFAULTS: Dict[str, Dict[str, Any]] = {
    'data': {
        'funds_path': 'data/funds.json',
        'stocks_path': 'data/stocks.json',
        'holdings_path': 'data/holdings.json',
    },
    'search': {
        'max_results': DEFAULT_MAX_RESULTS,
        'min_score': DEFAULT_MIN_SCORE,
    },
    'embedding': {
        'enabled': False,
        'model_name': DEFAULT_EMBEDDING_MODEL,
        'similarity_threshold': EMBEDDING_SIMILARITY_THRESHOLD,
        'timeout_seconds': EMBEDDING_TIMEOUT_SECONDS,
        'failure_threshold': 3,
        'cooldown_seconds': 60.0,
    },
    'cache': {
        'max_size': 5000,
        'ttl_seconds': 86400,
    },
    'logging': {
        'level': 'INFO',
    },
}


def _coerce_env(raw: str) -> Any:
    """Environment values arrive as text: map true/false, ints and floats"""
    if raw.lower() in ('true', 'false'):
        return raw.lower() == 'true'
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            continue
    return raw


class Config:
    """Centralized configuration management"""

    def __init__(self, config_file: str = "config.yaml"):
        """
        Args:
            config_file: Path to YAML config file (missing file = defaults only)
        """
        self.config_file = Path(config_file)
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULTS)
        self._load_file()

    def _load_file(self):
        if not self.config_file.exists():
            return
        with open(self.config_file, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}

        # Sections merge key by key; anything else replaces
        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(self._config.get(section), dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation

        Args:
            key_path: Dot-separated path (e.g., 'search.max_results')
            default: Returned when any segment is missing

        Returns:
            Configuration value or default
        """
        value: Any = self._config
        for key in key_path.split('.'):
            if not isinstance(value, dict) or value.get(key) is None:
                return default
            value = value[key]
        return value

    def get_with_env(self, key_path: str, env_var: Optional[str] = None, default: Any = None) -> Any:
        """Like get(), but a non-empty environment variable wins"""
        if env_var:
            raw = os.getenv(env_var)
            if raw:
                return _coerce_env(raw)
        return self.get(key_path, default)

    # Data sources
    @property
    def funds_path(self) -> str:
        return self.get_with_env('data.funds_path', 'FUNDS_PATH', DEFAULTS['data']['funds_path'])

    @property
    def stocks_path(self) -> str:
        return self.get_with_env('data.stocks_path', 'STOCKS_PATH', DEFAULTS['data']['stocks_path'])

    @property
    def holdings_path(self) -> str:
        return self.get_with_env('data.holdings_path', 'HOLDINGS_PATH', DEFAULTS['data']['holdings_path'])

    # Ranking
    @property
    def max_results(self) -> int:
        return self.get('search.max_results', DEFAULT_MAX_RESULTS)

    @property
    def min_score(self) -> float:
        return self.get('search.min_score', DEFAULT_MIN_SCORE)

    @property
    def use_embeddings(self) -> bool:
        return bool(self.get_with_env('embedding.enabled', 'USE_EMBEDDINGS', False))

    @property
    def embedding_model(self) -> str:
        return self.get_with_env('embedding.model_name', 'EMBEDDING_MODEL', DEFAULT_EMBEDDING_MODEL)

    @property
    def embedding_threshold(self) -> float:
        return self.get('embedding.similarity_threshold', EMBEDDING_SIMILARITY_THRESHOLD)

    @property
    def embedding_timeout(self) -> float:
        return self.get_with_env('embedding.timeout_seconds', 'EMBEDDING_TIMEOUT', EMBEDDING_TIMEOUT_SECONDS)

    # Vector cache
    @property
    def cache_max_size(self) -> int:
        return self.get('cache.max_size', DEFAULTS['cache']['max_size'])

    @property
    def cache_ttl(self) -> int:
        return self.get('cache.ttl_seconds', DEFAULTS['cache']['ttl_seconds'])

    @property
    def log_level(self) -> str:
        return self.get_with_env('logging.level', 'LOG_LEVEL', 'INFO')


# Global config instance
_config_instance: Optional[Config] = None


def get_config() -> Config:
    """Get global config instance (singleton); FUND_SEARCH_CONFIG overrides the file path"""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config(os.getenv('FUND_SEARCH_CONFIG', 'config.yaml'))
    return _config_instance
