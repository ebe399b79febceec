"""Configuration loader for load_order

Configurable values come from config/config.yaml (or the file named by
the LOAD_ORDER_CONFIG environment variable). Without a config file the
schema defaults apply.

Configuration is validated at load time using Pydantic.
Typos and invalid values fail fast with clear error messages.

Usage:
    from load_order.config import load_config, get, get_validated_config

    # Load and validate (call once at startup)
    load_config("config/config.yaml")

    # Get values by dot-path
    markers = get("directives.markers")

    # Or use the typed config object (preferred)
    config = get_validated_config()
    markers = config.directives.markers
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from .config_schema import AppConfig, load_validated_config, validate_config_dict

# Global config instances
_config: dict[str, Any] | None = None
_validated_config: AppConfig | None = None

# Default config path
DEFAULT_CONFIG_PATH: Path = Path(__file__).parent.parent / "config" / "config.yaml"

CONFIG_ENV_VAR = "LOAD_ORDER_CONFIG"


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load and validate configuration from YAML file.

    Validates the config against the Pydantic schema. Invalid configs
    raise a ValidationError with details about what's wrong.

    Args:
        config_path: Path to config file. Defaults to $LOAD_ORDER_CONFIG,
            then config/config.yaml. A missing default file means defaults.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If an explicitly named config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    global _config, _validated_config

    explicit = config_path or os.environ.get(CONFIG_ENV_VAR)
    path: Path = Path(explicit) if explicit else DEFAULT_CONFIG_PATH

    if not explicit and not path.exists():
        _validated_config = validate_config_dict({})
        _config = {}
        return _config

    _validated_config = load_validated_config(path)

    with open(path) as f:
        loaded: Any = yaml.safe_load(f)
        if not isinstance(loaded, dict):
            loaded = {}
        _config = loaded

    return _config


def get_config() -> dict[str, Any]:
    """Get the loaded configuration dict. Loads default if not already loaded.

    For typed access, use get_validated_config() instead.
    """
    global _config
    if _config is None:
        load_config()
    if _config is None:
        raise RuntimeError("Config failed to load. Call load_config() first.")
    return _config


def get_validated_config() -> AppConfig:
    """Get the validated configuration object.

    Loads default config if not already loaded.
    """
    global _validated_config
    if _validated_config is None:
        load_config()
    if _validated_config is None:
        raise RuntimeError("Validated config failed to load. Call load_config() first.")
    return _validated_config


def get(key: str, default: Any = None) -> Any:
    """Get a config value by dot-separated key path.

    Falls back to the validated (defaulted) config when the key is absent
    from the raw file.

    Examples:
        get("directives.expand_bulk")
        get("logging.level")
    """
    sources: list[Any] = [get_config(), get_validated_config().model_dump()]
    for source in sources:
        value: Any = source
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                break
        else:
            return value
    return default


def set_config_value(key: str, value: Any) -> None:
    """Set a config value by dot-separated key path.

    Used for runtime overrides (e.g., CLI args). The result is re-validated.

    Args:
        key: Dot-separated key path (e.g., "output.format")
        value: Value to set
    """
    global _config, _validated_config

    if _config is None:
        load_config()

    if _config is None:
        raise RuntimeError("Config failed to load. Call load_config() first.")

    keys = key.split(".")
    target = _config

    # Navigate to parent
    for k in keys[:-1]:
        if k not in target:
            target[k] = {}
        target = target[k]

    target[keys[-1]] = value

    _validated_config = validate_config_dict(_config)


def reset_config() -> None:
    """Forget the loaded configuration (next access reloads)."""
    global _config, _validated_config
    _config = None
    _validated_config = None
