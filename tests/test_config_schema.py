"""Tests for Pydantic config schema validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from load_order.config_schema import (
    AppConfig,
    DirectivesConfig,
    load_validated_config,
    validate_config_dict,
)


class TestValidConfig:
    """Test that valid configs are accepted."""

    def test_empty_config_uses_defaults(self) -> None:
        """Empty config should use all defaults."""
        config = validate_config_dict({})
        assert config.directives.markers == {".js": "//=", ".coffee": "#="}
        assert config.directives.expand_bulk is False
        assert config.resolver.memoize is False
        assert config.listing.ignore_hidden is False
        assert config.logging.level == "WARNING"
        assert config.output.format == "text"
        assert config.output.relative_paths is True

    def test_partial_config_merges_defaults(self) -> None:
        """Partial config should merge with defaults."""
        config = validate_config_dict({"resolver": {"memoize": True}})
        assert config.resolver.memoize is True
        assert config.directives.expand_bulk is False  # Default

    def test_full_config_loads(self) -> None:
        """The shipped config file should load without errors."""
        path = Path(__file__).parent.parent / "config" / "config.yaml"
        config = load_validated_config(path)
        assert config.directives.markers[".js"] == "//="

    def test_extensions_get_leading_dot(self) -> None:
        """Marker keys are normalized to '.ext'."""
        config = DirectivesConfig(markers={"ts": "// @", ".sass": "//="})
        assert config.markers == {".ts": "// @", ".sass": "//="}

    def test_markers_replace_defaults(self) -> None:
        """A configured marker table replaces the default one."""
        config = validate_config_dict({"directives": {"markers": {".ts": "//="}}})
        assert config.directives.markers == {".ts": "//="}

    def test_lowercase_log_level(self) -> None:
        """Log levels are case-insensitive."""
        config = validate_config_dict({"logging": {"level": "debug"}})
        assert config.logging.level == "DEBUG"

    def test_empty_yaml_file(self, tmp_path: Path) -> None:
        """An empty YAML file means all defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_validated_config(path) == AppConfig()


class TestInvalidConfig:
    """Test that invalid configs are rejected with clear errors."""

    def test_typo_in_key_rejected(self) -> None:
        """Typos in config keys should be rejected (extra='forbid')."""
        with pytest.raises(ValidationError) as exc_info:
            validate_config_dict({"direktives": {"expand_bulk": True}})
        assert "direktives" in str(exc_info.value)

    def test_nested_typo_rejected(self) -> None:
        """Typos inside sections are rejected too."""
        with pytest.raises(ValidationError) as exc_info:
            validate_config_dict({"resolver": {"memoise": True}})
        assert "memoise" in str(exc_info.value)

    def test_blank_marker_rejected(self) -> None:
        """A blank marker would match every line."""
        with pytest.raises(ValidationError) as exc_info:
            validate_config_dict({"directives": {"markers": {".js": "  "}}})
        assert "must not be blank" in str(exc_info.value)

    def test_empty_extension_rejected(self) -> None:
        """An empty extension key is rejected."""
        with pytest.raises(ValidationError):
            validate_config_dict({"directives": {"markers": {"": "//="}}})

    def test_bad_output_format(self) -> None:
        """Only text and json output formats exist."""
        with pytest.raises(ValidationError) as exc_info:
            validate_config_dict({"output": {"format": "xml"}})
        assert "format" in str(exc_info.value)

    def test_bad_log_level(self) -> None:
        """Unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            validate_config_dict({"logging": {"level": "LOUD"}})

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_validated_config(tmp_path / "nope.yaml")
