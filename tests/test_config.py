#!/usr/bin/env python3
"""Tests for YAML configuration loading."""

import json

import pytest
import yaml

from zb_migrate.config import Config, build_deny_list, load_config
from zb_migrate.exceptions import ConfigurationError


def write_config(tmp_path, data) -> str:
    path = tmp_path / "zb_migrate.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return str(path)


class TestLoadConfig:
    """Test load_config."""

    def test_defaults_without_file(self) -> None:
        """Test default values when no path is given."""
        config = load_config(None)

        assert config.migration.brew_command == "brew"
        assert config.migration.installer_command == "zb"
        assert config.migration.command_timeout == 600.0
        assert config.output.default_format == "text"
        assert config.output.safe_preview_count == 5
        assert config.deny_list.use_builtin is True

    def test_missing_file_uses_defaults(self, tmp_path) -> None:
        """Test that a missing file is not an error."""
        config = load_config(str(tmp_path / "nope.yaml"))

        assert config.logging.level == "INFO"

    def test_sections_override_defaults(self, tmp_path) -> None:
        """Test that known keys are applied per section."""
        path = write_config(tmp_path, {
            "migration": {"brew_command": "/usr/local/bin/brew", "command_timeout": 30},
            "output": {"default_format": "json", "safe_preview_count": 10},
            "logging": {"level": "DEBUG"},
            "deny_list": {"allow": ["curl"]},
        })

        config = load_config(path)

        assert config.migration.brew_command == "/usr/local/bin/brew"
        assert config.migration.command_timeout == 30
        assert config.output.default_format == "json"
        assert config.output.safe_preview_count == 10
        assert config.logging.level == "DEBUG"
        assert config.deny_list.allow == ["curl"]

    def test_unknown_keys_are_ignored(self, tmp_path) -> None:
        """Test that unknown keys do not fail loading."""
        path = write_config(tmp_path, {"migration": {"colour": "blue"}, "extra_section": {}})

        config = load_config(path)

        assert not hasattr(config.migration, "colour")

    def test_empty_file(self, tmp_path) -> None:
        """Test that an empty file yields defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert isinstance(load_config(str(path)), Config)

    @pytest.mark.parametrize("content", [
        "migration: [unclosed",
        "- just\n- a list\n",
        "migration: not-a-mapping\n",
    ])
    def test_invalid_content_raises(self, tmp_path, content: str) -> None:
        """Test malformed YAML and wrong shapes."""
        path = tmp_path / "bad.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(str(path))

    @pytest.mark.parametrize("data", [
        {"output": {"default_format": "pdf"}},
        {"migration": {"command_timeout": 0}},
        {"output": {"safe_preview_count": -1}},
    ])
    def test_invalid_values_raise(self, tmp_path, data) -> None:
        """Test value validation."""
        with pytest.raises(ConfigurationError):
            load_config(write_config(tmp_path, data))


class TestBuildDenyList:
    """Test build_deny_list."""

    def test_builtin_by_default(self) -> None:
        """Test that the default configuration uses the built-in names."""
        deny_list = build_deny_list(Config())

        assert "openssl@3" in deny_list

    def test_extra_packages_and_allow(self) -> None:
        """Test inline additions and removals."""
        config = Config()
        config.deny_list.extra_packages = {"internal-sdk": "Private build"}
        config.deny_list.allow = ["curl"]

        deny_list = build_deny_list(config)

        assert deny_list.get_reason("internal-sdk") == "Private build"
        assert "curl" not in deny_list

    def test_without_builtin(self, tmp_path) -> None:
        """Test that disabling the built-in list leaves only configured names."""
        extra = tmp_path / "extra.json"
        extra.write_text(json.dumps({"deny_list": [{"name": "only-this"}]}), encoding="utf-8")
        config = Config()
        config.deny_list.use_builtin = False
        config.deny_list.extra_files = [str(extra)]

        deny_list = build_deny_list(config)

        assert deny_list.names == frozenset({"only-this"})

    def test_extra_directory(self, tmp_path) -> None:
        """Test that a directory in extra_files loads all JSON files in it."""
        (tmp_path / "a.json").write_text(json.dumps({"deny_list": [{"name": "a"}]}), encoding="utf-8")
        config = Config()
        config.deny_list.use_builtin = False
        config.deny_list.extra_files = [str(tmp_path)]

        assert build_deny_list(config).names == frozenset({"a"})
