"""
Unit tests for configuration parser.

Tests the YAML configuration parsing, validation, and error handling
functionality of the ConfigParser class.
"""

import pytest
import yaml
from pathlib import Path
from unittest.mock import patch

from filesearch.config.parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    validate_config_file,
    create_config_template
)
from filesearch.models.config import FinderConfig


def write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.dump(data), encoding='utf-8')
    return path


class TestConfigParser:
    """Test cases for ConfigParser class."""

    def test_init_default(self):
        """Test default initialization."""
        parser = ConfigParser()
        assert parser.strict_mode is False
        assert parser.DEFAULT_CONFIG_NAMES == [
            '.filesearch.yaml',
            '.filesearch.yml',
            'filesearch.yaml',
            'filesearch.yml',
        ]

    def test_load_config_with_valid_file(self, tmp_path):
        """Test loading configuration from valid YAML file."""
        config_file = write_yaml(tmp_path / "filesearch.yaml", {
            'search': {'max_results': 200, 'max_workers': 3},
            'logging': {'level': 'debug', 'file': None},
        })

        result = ConfigParser().load_config(config_file)

        assert isinstance(result, ConfigParseResult)
        assert isinstance(result.config, FinderConfig)
        assert result.config_path == config_file
        assert result.is_default is False
        assert result.config.search.max_results == 200
        assert result.config.logging.level == "DEBUG"

    def test_load_config_file_not_found(self):
        """Test loading configuration from non-existent file."""
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            ConfigParser().load_config("/nonexistent/config.yaml")

    def test_load_config_invalid_yaml(self, tmp_path):
        """Test loading configuration with invalid YAML syntax."""
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("search: [unclosed\n", encoding='utf-8')

        with pytest.raises(ConfigurationError, match="Invalid YAML syntax"):
            ConfigParser().load_config(config_file)

    def test_load_config_non_mapping(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- one\n- two\n", encoding='utf-8')

        with pytest.raises(ConfigurationError, match="must contain a YAML object"):
            ConfigParser().load_config(config_file)

    def test_load_config_empty_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("", encoding='utf-8')

        result = ConfigParser().load_config(config_file)

        assert result.config == FinderConfig()
        assert result.is_default is False

    def test_load_config_invalid_values(self, tmp_path):
        config_file = write_yaml(tmp_path / "invalid.yaml", {'search': {'max_results': -5}})

        with pytest.raises(ConfigurationError, match="Configuration validation failed"):
            ConfigParser().load_config(config_file)

    def test_load_config_unknown_section(self, tmp_path):
        config_file = write_yaml(tmp_path / "unknown.yaml", {'vector_db': {'backend': 'faiss'}})

        with pytest.raises(ConfigurationError, match="Unknown configuration section"):
            ConfigParser().load_config(config_file)

    def test_defaults_when_no_file_found(self, tmp_path):
        parser = ConfigParser()

        with patch.object(ConfigParser, "search_paths", return_value=[tmp_path]):
            result = parser.load_config()

        assert result.is_default is True
        assert result.config_path is None
        assert "No configuration file found, using default settings" in result.warnings

    def test_discovers_file_in_search_paths(self, tmp_path):
        config_file = write_yaml(tmp_path / ".filesearch.yaml", {'ui': {'tick_interval_ms': 150}})

        with patch.object(ConfigParser, "search_paths", return_value=[tmp_path]):
            result = ConfigParser().load_config()

        assert result.config_path == config_file
        assert result.config.ui.tick_interval_ms == 150

    def test_broken_discovered_file_is_skipped(self, tmp_path):
        (tmp_path / ".filesearch.yaml").write_text("search: [unclosed\n", encoding='utf-8')
        good = write_yaml(tmp_path / "filesearch.yaml", {'search': {'max_results': 7}})

        with patch.object(ConfigParser, "search_paths", return_value=[tmp_path]):
            result = ConfigParser().load_config()

        assert result.config_path == good
        assert result.config.search.max_results == 7

    def test_strict_mode_rejects_warnings(self, tmp_path):
        config_file = write_yaml(tmp_path / "warn.yaml", {
            'search': {'max_results': 10},
            'ui': {'max_visible_rows': 50},
        })

        with pytest.raises(ConfigurationError, match="strict mode"):
            ConfigParser(strict_mode=True).load_config(config_file)


class TestConvenienceFunctions:
    """Test cases for module-level helpers."""

    def test_load_config(self, tmp_path):
        config_file = write_yaml(tmp_path / "cfg.yaml", {'search': {'max_results': 9}})

        assert load_config(config_file).config.search.max_results == 9

    def test_validate_config_file(self, tmp_path):
        good = write_yaml(tmp_path / "good.yaml", {'search': {'max_results': 9}})
        bad = write_yaml(tmp_path / "bad.yaml", {'ui': {'tick_interval_ms': 1}})

        assert validate_config_file(good) == []
        assert len(validate_config_file(bad)) == 1
        assert "not found" in validate_config_file(tmp_path / "missing.yaml")[0]

    def test_create_config_template(self, tmp_path):
        template = tmp_path / "template" / "filesearch.yaml"

        create_config_template(template)

        content = template.read_text(encoding='utf-8')
        assert "# Search engine limits and parallelism" in content
        result = load_config(template, strict_mode=True)
        assert result.config == FinderConfig()
