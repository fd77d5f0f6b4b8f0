# objstore/repository.py
"""
A single named namespace of objects.

Every operation holds the repository lock for its whole duration, so the
check and the insert of a write can never interleave with another caller.
"""

import logging
import threading
from typing import Dict, List, Tuple

from .errors import DeleteResult, ObjectInfo, ReadResult, StoreError, WriteResult

logger = logging.getLogger(__name__)


class Repository:
    """
    Write-once map of oid to object bytes.

    Usage:
        repo = Repository("photos")
        info = repo.store(oid, data)       # ObjectInfo or OBJECT_ALREADY_EXISTS
        data = repo.fetch(oid)             # bytes or OBJECT_NOT_FOUND
        repo.delete(oid)                   # ObjectInfo or OBJECT_NOT_FOUND
    """

    def __init__(self, name: str):
        self.name = name
        self._objects: Dict[str, bytes] = {}
        self._lock = threading.Lock()

    def store(self, oid: str, data: bytes) -> WriteResult:
        """
        Insert an object unless its oid is already present.

        Existing content is never overwritten. Mutable buffers are copied.
        """
        data = bytes(data)
        with self._lock:
            if oid in self._objects:
                logger.debug(f"Conflict: {self.name}/{oid}")
                return StoreError.OBJECT_ALREADY_EXISTS
            self._objects[oid] = data
            logger.debug(f"Stored: {self.name}/{oid} ({len(data)} bytes)")
            return ObjectInfo(oid=oid, size=len(data))

    def fetch(self, oid: str) -> ReadResult:
        """Return the stored bytes verbatim."""
        with self._lock:
            data = self._objects.get(oid)
            if data is None:
                return StoreError.OBJECT_NOT_FOUND
            return data

    def delete(self, oid: str) -> DeleteResult:
        """Remove an object. A second delete of the same oid reports not found."""
        with self._lock:
            data = self._objects.pop(oid, None)
            if data is None:
                return StoreError.OBJECT_NOT_FOUND
            logger.debug(f"Deleted: {self.name}/{oid}")
            return ObjectInfo(oid=oid, size=len(data))

    def contains(self, oid: str) -> bool:
        with self._lock:
            return oid in self._objects

    def oids(self) -> List[str]:
        """Sorted snapshot of the stored oids."""
        with self._lock:
            return sorted(self._objects)

    def stats(self) -> Tuple[int, int]:
        """Return (object count, total bytes)."""
        with self._lock:
            return len(self._objects), sum(len(d) for d in self._objects.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._objects)

    def __repr__(self) -> str:
        return f"Repository({self.name!r})"
