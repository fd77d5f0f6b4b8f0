# objstore/config.py
"""
Server configuration.

Values come from, in increasing precedence: defaults, a YAML file, and
command-line flags.

Example config.yaml:
    host: 0.0.0.0
    port: 8282
    algorithm: sha256
    log_level: INFO
    max_object_size: 10485760
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .hasher import DEFAULT_ALGORITHM, check_algorithm

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    """Settings for an object store server."""
    host: str = "127.0.0.1"
    port: int = 8282
    algorithm: str = DEFAULT_ALGORITHM
    log_level: str = "INFO"
    max_object_size: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self):
        if not isinstance(self.port, int) or isinstance(self.port, bool) or not 0 <= self.port <= 65535:
            raise ConfigError(f"Invalid port: {self.port!r}")
        try:
            self.algorithm = check_algorithm(str(self.algorithm))
        except ValueError as e:
            raise ConfigError(str(e)) from e
        level = str(self.log_level).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {self.log_level!r}")
        self.log_level = level
        if self.max_object_size is not None:
            size = self.max_object_size
            if not isinstance(size, int) or isinstance(size, bool) or size < 0:
                raise ConfigError(f"Invalid max_object_size: {self.max_object_size!r}")

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ServerConfig":
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError("Config must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "ServerConfig":
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Path) -> "ServerConfig":
        with open(path) as f:
            return cls.from_yaml(f.read())

    def merged(self, **overrides) -> "ServerConfig":
        """Return a copy with non-None overrides applied."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ServerConfig.from_dict(data)
