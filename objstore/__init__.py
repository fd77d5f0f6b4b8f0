# objstore - In-memory content-addressed object store
#
# Clients write opaque byte blobs into named repositories and read or delete
# them by an identifier derived from their content. Identical bytes always
# map to the same oid, so repeated writes of the same object are refused
# rather than duplicated.
#
# Core concepts:
# - oid: hex digest of an object's bytes
# - Repository: one namespace, write-once map of oid to bytes
# - Storage: registry of repositories by name
# - ObjectStore: the write/read/delete operations served over HTTP

from .hasher import identify, Hasher
from .errors import ObjectInfo, StoreError, ConfigError
from .repository import Repository
from .storage import Storage, StorageStats
from .service import ObjectStore, WriteObject, ReadObject, DeleteObject
from .router import Router, Response, UnsupportedOperation
from .config import ServerConfig

__all__ = [
    # Core
    "identify",
    "Hasher",
    "ObjectInfo",
    "StoreError",
    "ConfigError",
    "Repository",
    "Storage",
    "StorageStats",
    # Operations
    "ObjectStore",
    "WriteObject",
    "ReadObject",
    "DeleteObject",
    # Transport
    "Router",
    "Response",
    "UnsupportedOperation",
    "ServerConfig",
]

__version__ = "0.1.0"
