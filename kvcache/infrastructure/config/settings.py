"""Provides functions for loading and accessing configuration settings.

Supports loading from a YAML configuration file (~/.kvcache/config.yaml),
.env files and environment variables prefixed with KVCACHE_.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from kvcache.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_DATA_DIR = Path.home() / ".kvcache"
DEFAULT_CONFIG_FILE = DEFAULT_DATA_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "KVCACHE_"

CACHE_BACKENDS = ("disk", "memory")

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}  # For testing purposes
_override_config: Dict[str, Any] = {}  # Explicit values, e.g. command line options
_loaded = False


def _flatten(mapping: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flattens nested YAML mappings into dotted keys ('cache': {'ttl': 5} -> 'cache.ttl')."""
    flat = {}
    for key, value in mapping.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def load_configuration(config_file: Optional[Path] = None, env_file: Optional[Path] = None) -> None:
    """Loads configuration from a YAML file, a .env file and the environment.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file

    Args:
        config_file: Path to the YAML configuration file (DEFAULT_CONFIG_FILE if None).
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}
    config_file = Path(config_file) if config_file is not None else DEFAULT_CONFIG_FILE

    # 1. YAML file (lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r') as f:
                yaml_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
        else:
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a dictionary.")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. .env file; override=False lets real environment variables win
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path and load_dotenv(dotenv_path=dotenv_path, override=False):
        logger.info(f"Loaded environment variables from: {dotenv_path}")

    # 3. Environment variables are read lazily by get_config

    _loaded = True
    logger.debug("Configuration loading process completed.")


def reset_configuration() -> None:
    """Forgets loaded configuration so the next load_configuration() reads again."""
    global _config, _loaded
    _config = {}
    _override_config.clear()
    _loaded = False


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


def _env_name(key: str) -> str:
    return ENV_PREFIX + key.upper().replace('.', '_')


def _coerce(value: str) -> Any:
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False
    try:
        return float(value) if '.' in value else int(value)
    except ValueError:
        return value


def get_config(key: str, default: Any = None) -> Any:
    """Get a configuration value by key.

    Priority:
    1. Test configuration
    2. Values set with set_config (command line options)
    3. Environment variable (KVCACHE_ + upper-cased key, dots as underscores)
    4. YAML config
    5. Default value
    """
    if key in _test_config:
        return _test_config[key]

    if key in _override_config:
        return _override_config[key]

    env_key = _env_name(key)
    if env_key in os.environ:
        return _coerce(os.environ[env_key])

    if key in _config:
        return _config[key]

    return default


def set_config(key: str, value: Any) -> None:
    """Sets a configuration value for the rest of the process.

    The value outranks environment variables and the YAML file.
    """
    logger.debug(f"Setting config: {key} = {value!r}")
    _override_config[key] = value


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """Overrides configuration values; they take precedence over everything else."""
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()


# --- Convenience Functions ---

def get_store_dir() -> Path:
    return Path(get_config('store.directory', DEFAULT_DATA_DIR / "store"))


def get_cache_dir() -> Path:
    return Path(get_config('cache.directory', DEFAULT_DATA_DIR / "cache"))


def get_cache_backend() -> str:
    """Gets the cache backend name ('disk' or 'memory')."""
    backend = str(get_config('cache.backend', 'disk')).lower()
    if backend not in CACHE_BACKENDS:
        raise ConfigurationError(f"Unknown cache backend '{backend}'. Expected one of: {', '.join(CACHE_BACKENDS)}")
    return backend


def _get_non_negative_int(key: str, default: int) -> int:
    value = get_config(key, default)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Config '{key}' must be an integer. Got: {value!r}") from None
    if number < 0:
        raise ConfigurationError(f"Config '{key}' must be 0 or greater. Got: {number}")
    return number


def get_cache_ttl() -> int:
    """Gets the cache time-to-live in seconds (0 = never expires)."""
    return _get_non_negative_int('cache.ttl_seconds', 0)


def get_cache_max_items() -> int:
    """Gets the memory cache size bound (0 = unbounded)."""
    return _get_non_negative_int('cache.max_items', 0)
