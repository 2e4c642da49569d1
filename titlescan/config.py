"""
Load scan settings from config.yaml, falling back to defaults for missing keys.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_PATH = "config.yaml"

DEFAULTS: Dict[str, Any] = {
    "batch_size": 20,
    "timeout": 10,
    "max_concurrency": None,
    "disable_ssl_verification": True,
    "user_agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                  "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
}


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Read the YAML config at ``path`` and merge it over DEFAULTS.

    When ``path`` is None the default ``config.yaml`` is used if it exists;
    an explicitly given path that does not exist is an error.
    """
    config = dict(DEFAULTS)
    if path is None:
        config_path = Path(DEFAULT_CONFIG_PATH)
        if not config_path.is_file():
            return config
    else:
        config_path = Path(path)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file {config_path}: {e}") from e

    if not isinstance(loaded, dict):
        raise ConfigError(f"Configuration file {config_path} must contain a mapping")

    unknown = set(loaded) - set(DEFAULTS)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    config.update(loaded)
    _validate(config)
    return config


def _validate(config: Dict[str, Any]) -> None:
    batch_size = config["batch_size"]
    if not isinstance(batch_size, int) or isinstance(batch_size, bool) or batch_size < 1:
        raise ConfigError(f"batch_size must be a positive integer, got {batch_size!r}")

    timeout = config["timeout"]
    if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0:
        raise ConfigError(f"timeout must be a positive number, got {timeout!r}")

    max_concurrency = config["max_concurrency"]
    if max_concurrency is not None and (
            not isinstance(max_concurrency, int) or isinstance(max_concurrency, bool) or max_concurrency < 1):
        raise ConfigError(f"max_concurrency must be null or a positive integer, got {max_concurrency!r}")

    if not isinstance(config["disable_ssl_verification"], bool):
        raise ConfigError("disable_ssl_verification must be true or false")

    if not isinstance(config["user_agent"], str):
        raise ConfigError("user_agent must be a string")
