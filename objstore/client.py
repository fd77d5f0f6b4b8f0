# objstore/client.py
"""
Client SDK for the object store server.

Usage:
    client = ObjectClient("http://localhost:8282")

    info = client.put("photos", b"...")
    data = client.get("photos", info.oid)
    client.delete("photos", info.oid)
"""

import json
from typing import Dict, Optional, Tuple
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from .errors import ObjectInfo


class ClientError(RuntimeError):
    """Server answered with an error status."""

    def __init__(self, message: str, status: int = 0):
        super().__init__(message)
        self.status = status


class ObjectNotFoundError(ClientError):
    """Repository or object does not exist (404)."""


class ObjectExistsError(ClientError):
    """An object with the same oid is already stored (409)."""


_ERRORS = {
    404: ObjectNotFoundError,
    409: ObjectExistsError,
}


class ObjectClient:
    """
    Client for the object store server.

    Args:
        base_url: Server URL (e.g., "http://localhost:8282")
        timeout: Request timeout in seconds
    """

    def __init__(self, base_url: str = "http://localhost:8282", timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _request(self, method: str, path: str, data: Optional[bytes] = None) -> Tuple[int, bytes]:
        """Make HTTP request to server, return (status, body)."""
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/octet-stream"} if data is not None else {}
        req = Request(url, data=data, headers=headers, method=method)

        try:
            with urlopen(req, timeout=self.timeout) as response:
                return response.status, response.read()
        except HTTPError as e:
            error_body = e.read().decode(errors="replace")
            error_cls = _ERRORS.get(e.code, ClientError)
            raise error_cls(f"HTTP {e.code}: {error_body}", status=e.code)
        except URLError as e:
            raise ConnectionError(f"Failed to connect to server: {e}")

    @staticmethod
    def _object_path(repository: str, oid: str = "") -> str:
        path = f"/data/{quote(repository, safe='')}"
        if oid:
            path += f"/{quote(oid, safe='')}"
        return path

    def health(self) -> bool:
        """Check if server is healthy."""
        try:
            _, body = self._request("GET", "/health")
            return json.loads(body.decode()).get("status") == "ok"
        except (ClientError, ConnectionError, ValueError):
            return False

    def put(self, repository: str, data: bytes) -> ObjectInfo:
        """
        Write an object.

        Raises:
            ObjectExistsError: The same bytes are already in the repository
        """
        _, body = self._request("PUT", self._object_path(repository), data)
        return ObjectInfo.from_dict(json.loads(body.decode()))

    def get(self, repository: str, oid: str) -> bytes:
        """
        Read an object.

        Raises:
            ObjectNotFoundError: Repository or object missing
        """
        _, body = self._request("GET", self._object_path(repository, oid))
        return body

    def delete(self, repository: str, oid: str) -> None:
        """
        Delete an object.

        Raises:
            ObjectNotFoundError: Repository or object missing
        """
        self._request("DELETE", self._object_path(repository, oid))

    def stats(self) -> Dict:
        """Get storage statistics."""
        _, body = self._request("GET", "/stats")
        return json.loads(body.decode())


__all__ = ["ObjectClient", "ClientError", "ObjectNotFoundError", "ObjectExistsError"]
