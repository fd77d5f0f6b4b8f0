# objstore/storage.py
"""
Registry of repositories by name.

The registry lock only covers looking up or installing an entry. It is
released before the caller touches the repository, so registry and
repository locks are never held together.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from .repository import Repository

logger = logging.getLogger(__name__)


@dataclass
class StorageStats:
    """Counts across every repository."""
    repositories: int = 0
    objects: int = 0
    total_size_bytes: int = 0

    def to_dict(self) -> Dict:
        return {
            "repositories": self.repositories,
            "objects": self.objects,
            "total_size_bytes": self.total_size_bytes,
        }


class Storage:
    """
    Owns every Repository, at most one per name.

    Usage:
        storage = Storage()
        storage.repository("r1")               # None, nothing created
        repo = storage.repository("r1", create=True)
        storage.repository("r1") is repo       # True
    """

    def __init__(self):
        self._repositories: Dict[str, Repository] = {}
        self._lock = threading.Lock()

    def repository(self, name: str, create: bool = False) -> Optional[Repository]:
        """
        Look up a repository, creating it if asked.

        Concurrent creators of the same new name all get the same instance.
        An empty name never resolves and is never created.

        Args:
            name: Repository name
            create: Install an empty repository if none exists

        Returns:
            The Repository, or None if absent and not created
        """
        if not name:
            return None

        with self._lock:
            repo = self._repositories.get(name)
            if repo is None and create:
                repo = Repository(name)
                self._repositories[name] = repo
                logger.info(f"Created repository: {name}")
            return repo

    def names(self) -> List[str]:
        """Sorted snapshot of repository names."""
        with self._lock:
            return sorted(self._repositories)

    def get_stats(self) -> StorageStats:
        """Collect counts without nesting the registry and repository locks."""
        with self._lock:
            repos = list(self._repositories.values())

        stats = StorageStats(repositories=len(repos))
        for repo in repos:
            count, size = repo.stats()
            stats.objects += count
            stats.total_size_bytes += size
        return stats

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._repositories

    def __len__(self) -> int:
        with self._lock:
            return len(self._repositories)
