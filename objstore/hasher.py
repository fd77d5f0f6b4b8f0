# objstore/hasher.py
"""
Content addressing for stored objects.

An object's oid is the hex digest of its bytes. The same bytes always give
the same oid, across calls and across processes.
"""

import hashlib

DEFAULT_ALGORITHM = "sha256"


def identify(data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """
    Compute the oid of an object.

    Args:
        data: Object bytes
        algorithm: hashlib algorithm name (sha256, sha3_256, blake2b, ...)

    Returns:
        Full hex digest (no truncation)
    """
    hasher = hashlib.new(algorithm)
    hasher.update(data)
    return hasher.hexdigest()


def check_algorithm(name: str) -> str:
    """
    Validate a hash algorithm name.

    Only algorithms with a fixed digest size can address content; the
    variable-length shake family is refused.
    """
    normalized = name.strip().lower().replace("-", "_")
    if normalized not in hashlib.algorithms_available:
        raise ValueError(f"Unknown hash algorithm: {name}")
    if normalized.startswith("shake_"):
        raise ValueError(f"Hash algorithm {name} has no fixed digest size")
    return normalized


class Hasher:
    """Binds an algorithm so callers only pass bytes."""

    def __init__(self, algorithm: str = DEFAULT_ALGORITHM):
        self.algorithm = check_algorithm(algorithm)

    def __call__(self, data: bytes) -> str:
        return identify(data, self.algorithm)

    def __repr__(self) -> str:
        return f"Hasher({self.algorithm!r})"
