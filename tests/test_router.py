# tests/test_router.py
"""Tests for request routing."""

import json

import pytest

from objstore.hasher import identify
from objstore.router import Router, UnsupportedOperation, parse_path
from objstore.service import DeleteObject, ObjectStore, ReadObject, WriteObject


@pytest.fixture
def router():
    """Create router over a fresh store."""
    return Router(ObjectStore())


class TestParsePath:
    """Test path parsing."""

    def test_repository_and_oid(self):
        """Test full object path."""
        assert parse_path("/data/r1/abc") == ("r1", "abc")

    def test_repository_only(self):
        """Test write path."""
        assert parse_path("/data/r1") == ("r1", "")
        assert parse_path("/data/r1/") == ("r1", "")

    def test_malformed(self):
        """Test paths outside /data/ give empty names."""
        assert parse_path("") == ("", "")
        assert parse_path("/") == ("", "")
        assert parse_path("/data") == ("", "")
        assert parse_path("/other/r1/abc") == ("", "")

    def test_extra_segments_ignored(self):
        """Test trailing segments after the oid are ignored."""
        assert parse_path("/data/r1/abc/extra") == ("r1", "abc")

    def test_query_and_escapes(self):
        """Test query string is dropped and segments are decoded."""
        assert parse_path("/data/my%20repo/abc?x=1") == ("my repo", "abc")


class TestToOperation:
    """Test method to operation mapping."""

    def test_variants(self, router):
        """Test each supported method maps to one variant."""
        assert router.to_operation("PUT", "/data/r1", b"x") == WriteObject("r1", b"x")
        assert router.to_operation("get", "/data/r1/o") == ReadObject("r1", "o")
        assert router.to_operation("DELETE", "/data/r1/o") == DeleteObject("r1", "o")

    def test_unsupported(self, router):
        """Test other methods are rejected."""
        with pytest.raises(UnsupportedOperation):
            router.to_operation("POST", "/data/r1", b"x")


class TestHandle:
    """Test request handling end to end."""

    def test_scenario(self, router):
        """Test write, read, conflict, missing repo, delete, read."""
        oid = identify(b"hello")

        response = router.handle("PUT", "/data/r1", b"hello")
        assert response.status == 201
        assert response.headers["Content-Type"] == "application/json"
        assert json.loads(response.body) == {"size": 5, "oid": oid}

        response = router.handle("GET", f"/data/r1/{oid}")
        assert response.status == 200
        assert response.body == b"hello"

        response = router.handle("PUT", "/data/r1", b"hello")
        assert response.status == 409
        assert response.body == b"already exists"

        response = router.handle("GET", f"/data/r2/{oid}")
        assert response.status == 404
        assert response.body == b"not found"

        response = router.handle("DELETE", f"/data/r1/{oid}")
        assert response.status == 200
        assert response.body == b""

        assert router.handle("GET", f"/data/r1/{oid}").status == 404
        assert router.handle("DELETE", f"/data/r1/{oid}").status == 404

    def test_malformed_paths_not_found(self, router):
        """Test empty or malformed paths resolve to 404."""
        assert router.handle("GET", "").status == 404
        assert router.handle("GET", "/nowhere").status == 404
        assert router.handle("DELETE", "/data/").status == 404
        assert router.handle("PUT", "/bogus", b"x").status == 404
        assert router.store.storage.names() == []

    def test_read_does_not_create(self, router):
        """Test failed read leaves no repository behind."""
        router.handle("GET", "/data/ghost/abc")
        assert router.store.storage.names() == []

    def test_unsupported_method(self, router):
        """Test other methods answer 405 with Allow header."""
        response = router.handle("POST", "/data/r1", b"x")
        assert response.status == 405
        assert response.headers["Allow"] == "GET, PUT, DELETE"

    def test_health(self, router):
        """Test health endpoint."""
        response = router.handle("GET", "/health")
        assert response.status == 200
        assert json.loads(response.body) == {"status": "ok"}

    def test_stats(self, router):
        """Test stats endpoint."""
        router.handle("PUT", "/data/r1", b"abc")
        response = router.handle("GET", "/stats")
        assert json.loads(response.body) == {
            "repositories": 1,
            "objects": 1,
            "total_size_bytes": 3,
        }

    def test_head_health_and_stats(self, router):
        """Test HEAD is served like GET on health and stats."""
        assert router.handle("HEAD", "/health").status == 200
        assert router.handle("HEAD", "/stats").status == 200
        assert router.handle("HEAD", "/data/r1/abc").status == 405

    def test_too_large(self):
        """Test size check only applies to writes over the limit."""
        router = Router(ObjectStore(), max_object_size=4)
        assert router.too_large("PUT", 5)
        assert not router.too_large("PUT", 4)
        assert not router.too_large("GET", 5)
        assert not Router(ObjectStore()).too_large("PUT", 10 ** 9)

    def test_max_object_size(self):
        """Test oversized writes are refused."""
        router = Router(ObjectStore(), max_object_size=4)
        assert router.handle("PUT", "/data/r1", b"12345").status == 413
        assert router.handle("PUT", "/data/r1", b"1234").status == 201
