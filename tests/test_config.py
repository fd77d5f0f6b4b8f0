# tests/test_config.py
"""Tests for server configuration."""

import logging

import pytest

from objstore.config import ServerConfig
from objstore.errors import ConfigError


class TestServerConfig:
    """Test ServerConfig loading and validation."""

    def test_defaults(self):
        """Test default values."""
        config = ServerConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8282
        assert config.algorithm == "sha256"
        assert config.log_level_number == logging.INFO
        assert config.max_object_size is None

    def test_from_yaml(self):
        """Test loading from YAML."""
        config = ServerConfig.from_yaml(
            "host: 0.0.0.0\nport: 9000\nalgorithm: sha3_256\nlog_level: debug\n"
        )
        assert config.host == "0.0.0.0"
        assert config.port == 9000
        assert config.algorithm == "sha3_256"
        assert config.log_level == "DEBUG"

    def test_empty_yaml(self):
        """Test empty file gives defaults."""
        assert ServerConfig.from_yaml("") == ServerConfig()

    def test_from_file(self, tmp_path):
        """Test loading from file."""
        path = tmp_path / "config.yaml"
        path.write_text("port: 8000\nmax_object_size: 1024\n")
        config = ServerConfig.from_file(path)
        assert config.port == 8000
        assert config.max_object_size == 1024

    def test_unknown_key(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigError, match="colour"):
            ServerConfig.from_dict({"colour": "blue"})

    def test_not_a_mapping(self):
        """Test non-mapping YAML is rejected."""
        with pytest.raises(ConfigError):
            ServerConfig.from_yaml("- a\n- b\n")

    def test_invalid_yaml(self):
        """Test YAML syntax errors are reported as config errors."""
        with pytest.raises(ConfigError):
            ServerConfig.from_yaml("port: [1, 2\n")

    @pytest.mark.parametrize("data", [
        {"port": 70000},
        {"port": "80"},
        {"algorithm": "nope"},
        {"log_level": "LOUD"},
        {"max_object_size": -1},
        {"max_object_size": True},
        {"port": True},
    ])
    def test_invalid_values(self, data):
        """Test invalid values are rejected."""
        with pytest.raises(ConfigError):
            ServerConfig.from_dict(data)

    def test_merged(self):
        """Test overrides skip None values."""
        config = ServerConfig(port=9000).merged(host="0.0.0.0", port=None)
        assert config.host == "0.0.0.0"
        assert config.port == 9000
