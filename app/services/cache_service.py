import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple
from app.core.models import VideoMetadata
from app.utils.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


class CacheInterface(ABC):
    """Interface for caching following the Dependency Inversion Principle"""

    @abstractmethod
    def lookup(self, key: str) -> Tuple[Optional[VideoMetadata], bool]:
        """
        Look up metadata in the cache.

        Args:
            key: The cache key (the source URL)

        Returns:
            A (value, found) pair; value is None when found is False
        """
        pass

    @abstractmethod
    def store(self, key: str, value: VideoMetadata) -> None:
        """
        Insert or overwrite the cache entry for a key.

        Args:
            key: The cache key (the source URL)
            value: The VideoMetadata object to cache
        """
        pass

    @abstractmethod
    def __len__(self) -> int:
        """Number of cached entries"""
        pass


class MetadataCache(CacheInterface):
    """
    Unbounded in-memory cache of resolved video metadata.

    Entries live as long as the process: no TTL, no eviction, no persistence.
    Lookups share a read lock and never block each other; a store takes the
    write lock and excludes every lookup and store while it runs.
    """

    def __init__(self):
        self._entries: Dict[str, VideoMetadata] = {}
        self._lock = ReadWriteLock()

    def lookup(self, key: str) -> Tuple[Optional[VideoMetadata], bool]:
        logger.debug(f"Checking cache for key: {key}")
        with self._lock.read_locked():
            value = self._entries.get(key)
        found = value is not None
        if found:
            logger.debug(f"Cache hit for key: {key}")
        else:
            logger.debug(f"Cache miss for key: {key}")
        return value, found

    def store(self, key: str, value: VideoMetadata) -> None:
        logger.debug(f"Storing metadata in cache for key: {key}")
        with self._lock.write_locked():
            self._entries[key] = value

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock.read_locked():
            return key in self._entries
