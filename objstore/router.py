# objstore/router.py
"""
Maps transport requests onto object operations and outcomes onto responses.

Routes:
    PUT    /data/{repository}          - Write object (201 {"size", "oid"})
    GET    /data/{repository}/{oid}    - Read object (200 raw bytes)
    DELETE /data/{repository}/{oid}    - Delete object (200 empty)
    GET    /health                     - Liveness check (HEAD too)
    GET    /stats                      - Storage statistics (HEAD too)

Missing repositories and objects answer 404, duplicate writes 409 and any
other method 405. Malformed paths resolve to 404.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
from urllib.parse import unquote, urlparse

from .errors import StoreError
from .service import DeleteObject, ObjectStore, Operation, ReadObject, WriteObject

logger = logging.getLogger(__name__)

DATA_PREFIX = "/data/"
ALLOWED_METHODS = ("GET", "PUT", "DELETE")


class UnsupportedOperation(Exception):
    """Request method has no matching object operation."""

    def __init__(self, method: str):
        super().__init__(f"Unsupported method: {method}")
        self.method = method


@dataclass
class Response:
    """Transport-neutral response."""
    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def json(cls, data, status: int = 200) -> "Response":
        return cls(
            status=status,
            body=json.dumps(data).encode(),
            headers={"Content-Type": "application/json"},
        )

    @classmethod
    def text(cls, message: str, status: int) -> "Response":
        return cls(
            status=status,
            body=message.encode(),
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )


def parse_path(path: str) -> Tuple[str, str]:
    """
    Split a request path into (repository, oid).

    Missing parts come back as empty strings, and so does anything outside
    /data/. Segments after the oid are ignored.
    """
    path = urlparse(path).path
    if not path.startswith(DATA_PREFIX):
        return "", ""

    parts = [unquote(p) for p in path[len(DATA_PREFIX):].split("/")]
    repository = parts[0] if parts else ""
    oid = parts[1] if len(parts) > 1 else ""
    return repository, oid


class Router:
    """
    Request router in front of an ObjectStore.

    Args:
        store: The object store to serve
        max_object_size: Largest accepted write body in bytes (None = no limit)
    """

    def __init__(self, store: ObjectStore, max_object_size: Optional[int] = None):
        self.store = store
        self.max_object_size = max_object_size

    def to_operation(self, method: str, path: str, body: bytes = b"") -> Operation:
        """Translate one request into exactly one operation variant."""
        repository, oid = parse_path(path)
        method = method.upper()

        if method == "PUT":
            return WriteObject(repository=repository, data=body)
        if method == "GET":
            return ReadObject(repository=repository, oid=oid)
        if method == "DELETE":
            return DeleteObject(repository=repository, oid=oid)
        raise UnsupportedOperation(method)

    def handle(self, method: str, path: str, body: bytes = b"") -> Response:
        """Serve one request."""
        method = method.upper()

        if method in ("GET", "HEAD"):
            route = urlparse(path).path
            if route == "/health":
                return Response.json({"status": "ok"})
            if route == "/stats":
                return Response.json(self.store.get_stats().to_dict())

        try:
            operation = self.to_operation(method, path, body)
        except UnsupportedOperation as e:
            logger.debug(str(e))
            response = Response.text("method not allowed", 405)
            response.headers["Allow"] = ", ".join(ALLOWED_METHODS)
            return response

        if isinstance(operation, WriteObject) and self.too_large(method, len(body)):
            return Response.text("object too large", 413)

        result = self.store.execute(operation)
        return self._to_response(operation, result)

    def too_large(self, method: str, size: int) -> bool:
        """Whether a write body of this size is over the limit."""
        if method.upper() != "PUT" or self.max_object_size is None:
            return False
        return size > self.max_object_size

    def _to_response(self, operation: Operation, result) -> Response:
        if isinstance(result, StoreError):
            status = 404 if result.is_not_found else 409
            return Response.text(result.message, status)

        if isinstance(operation, WriteObject):
            return Response.json(result.to_dict(), status=201)
        if isinstance(operation, ReadObject):
            return Response(
                status=200,
                body=result,
                headers={"Content-Type": "application/octet-stream"},
            )
        return Response(status=200)
