# objstore/errors.py
"""
Result and error types shared by the store layers.

Missing repositories, missing objects and duplicate writes are expected
outcomes. They are returned as StoreError members, never raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union


@dataclass(frozen=True)
class ObjectInfo:
    """Descriptor of a written (or deleted) object."""
    oid: str
    size: int

    def to_dict(self) -> Dict:
        return {
            "size": self.size,
            "oid": self.oid,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "ObjectInfo":
        return cls(oid=data["oid"], size=data["size"])


class StoreError(Enum):
    """Structured failure outcomes of store operations."""
    REPOSITORY_NOT_FOUND = "repository_not_found"
    OBJECT_NOT_FOUND = "object_not_found"
    OBJECT_ALREADY_EXISTS = "object_already_exists"

    @property
    def message(self) -> str:
        if self.is_not_found:
            return "not found"
        return "already exists"

    @property
    def is_not_found(self) -> bool:
        return self in (StoreError.REPOSITORY_NOT_FOUND, StoreError.OBJECT_NOT_FOUND)


# Outcome aliases used in signatures
WriteResult = Union[ObjectInfo, StoreError]
ReadResult = Union[bytes, StoreError]
DeleteResult = Union[ObjectInfo, StoreError]


class ConfigError(ValueError):
    """Invalid server configuration."""
