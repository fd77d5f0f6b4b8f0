# objstore/service.py
"""
The three object operations, as a closed set of request variants.

    WriteObject(repository, data)   -> ObjectInfo | StoreError
    ReadObject(repository, oid)     -> bytes | StoreError
    DeleteObject(repository, oid)   -> ObjectInfo | StoreError

Writes create their repository on first use; reads and deletes never do.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .errors import DeleteResult, ReadResult, StoreError, WriteResult
from .hasher import DEFAULT_ALGORITHM, Hasher
from .storage import Storage, StorageStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteObject:
    repository: str
    data: bytes


@dataclass(frozen=True)
class ReadObject:
    repository: str
    oid: str


@dataclass(frozen=True)
class DeleteObject:
    repository: str
    oid: str


Operation = Union[WriteObject, ReadObject, DeleteObject]


class ObjectStore:
    """
    Entry point for object operations.

    Holds the process-wide Storage for as long as the service runs.

    Usage:
        store = ObjectStore()
        info = store.write_object("r1", b"hello")
        store.read_object("r1", info.oid)      # b"hello"
    """

    def __init__(self, storage: Optional[Storage] = None, algorithm: str = DEFAULT_ALGORITHM):
        self.storage = storage if storage is not None else Storage()
        self.hasher = Hasher(algorithm)

    def write_object(self, repository: str, data: bytes) -> WriteResult:
        repo = self.storage.repository(repository, create=True)
        if repo is None:
            return StoreError.REPOSITORY_NOT_FOUND
        data = bytes(data)
        return repo.store(self.hasher(data), data)

    def read_object(self, repository: str, oid: str) -> ReadResult:
        repo = self.storage.repository(repository)
        if repo is None:
            return StoreError.REPOSITORY_NOT_FOUND
        return repo.fetch(oid)

    def delete_object(self, repository: str, oid: str) -> DeleteResult:
        repo = self.storage.repository(repository)
        if repo is None:
            return StoreError.REPOSITORY_NOT_FOUND
        return repo.delete(oid)

    def execute(self, operation: Operation) -> Union[WriteResult, ReadResult, DeleteResult]:
        """Run exactly one operation variant."""
        if isinstance(operation, WriteObject):
            return self.write_object(operation.repository, operation.data)
        if isinstance(operation, ReadObject):
            return self.read_object(operation.repository, operation.oid)
        if isinstance(operation, DeleteObject):
            return self.delete_object(operation.repository, operation.oid)
        raise TypeError(f"Unknown operation: {operation!r}")

    def get_stats(self) -> StorageStats:
        return self.storage.get_stats()
