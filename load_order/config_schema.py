"""Pydantic schema for configuration validation.

All config values are validated at startup. Typos and invalid values
fail fast with clear error messages.

Usage:
    from load_order.config_schema import load_validated_config, AppConfig
    config = load_validated_config("config/config.yaml")
    # config is now a validated AppConfig instance
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# BASE MODEL WITH STRICT VALIDATION
# =============================================================================

class StrictModel(BaseModel):
    """Base model that rejects unknown fields (catches typos)."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# DIRECTIVES MODEL
# =============================================================================

def _default_markers() -> dict[str, str]:
    return {".js": "//=", ".coffee": "#="}


class DirectivesConfig(StrictModel):
    """Directive comment syntax and expansion options."""

    markers: dict[str, str] = Field(
        default_factory=_default_markers,
        description="File extension -> comment marker that starts a directive line"
    )
    expand_bulk: bool = Field(
        default=False,
        description="Expand require_tree / require_directory (otherwise accepted as no-ops)"
    )

    @field_validator("markers")
    @classmethod
    def normalize_markers(cls, v: dict[str, str]) -> dict[str, str]:
        """Give every extension a leading dot and reject blank markers."""
        normalized: dict[str, str] = {}
        for ext, marker in v.items():
            ext = ext.strip()
            if not ext or ext == ".":
                raise ValueError("extension must not be empty")
            if not marker.strip():
                raise ValueError(f"marker for '{ext}' must not be blank")
            if not ext.startswith("."):
                ext = f".{ext}"
            normalized[ext] = marker.strip()
        return normalized


# =============================================================================
# RESOLVER MODEL
# =============================================================================

class ResolverConfig(StrictModel):
    """Dependency resolution options."""

    memoize: bool = Field(
        default=False,
        description="Cache file descriptors and parsed directives within one run"
    )


class ListingConfig(StrictModel):
    """Directory listing options."""

    ignore_hidden: bool = Field(
        default=False,
        description="Skip files and directories whose name starts with '.'"
    )


# =============================================================================
# LOGGING AND OUTPUT MODELS
# =============================================================================

class LoggingConfig(StrictModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Root log level"
    )
    format: str = Field(
        default="%(levelname)s %(name)s: %(message)s",
        description="logging format string"
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class OutputConfig(StrictModel):
    """How run.py prints results."""

    format: Literal["text", "json"] = Field(
        default="text",
        description="Plain text listing or a JSON object keyed by domain"
    )
    relative_paths: bool = Field(
        default=True,
        description="Print paths relative to the resolved directory"
    )


# =============================================================================
# ROOT CONFIG MODEL
# =============================================================================

class AppConfig(StrictModel):
    """Root configuration model."""

    directives: DirectivesConfig = Field(default_factory=DirectivesConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    listing: ListingConfig = Field(default_factory=ListingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# =============================================================================
# LOADING FUNCTIONS
# =============================================================================

def load_validated_config(config_path: str | Path = "config/config.yaml") -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to config YAML file.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid (with detailed error message).
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw_config = yaml.safe_load(f) or {}

    return AppConfig.model_validate(raw_config)


def validate_config_dict(config_dict: dict[str, Any]) -> AppConfig:
    """Validate a configuration dictionary.

    Args:
        config_dict: Configuration as a dictionary.

    Returns:
        Validated AppConfig instance.

    Raises:
        pydantic.ValidationError: If config is invalid.
    """
    return AppConfig.model_validate(config_dict)


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "AppConfig",
    "DirectivesConfig",
    "ResolverConfig",
    "ListingConfig",
    "LoggingConfig",
    "OutputConfig",
    "load_validated_config",
    "validate_config_dict",
]
