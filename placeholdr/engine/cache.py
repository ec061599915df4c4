"""Artifact cache — in-memory LRU keyed by request signature.

Bounded by item count and by aggregate size; entries also expire a fixed
time after insertion (checked lazily on access). Text artifacts are
charged at two bytes per character, binary artifacts at their length.
Safe to share between request handlers and worker threads.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from threading import RLock

logger = logging.getLogger(__name__)

Artifact = bytes | str


def artifact_size(artifact: Artifact) -> int:
    if isinstance(artifact, str):
        return len(artifact) * 2
    return len(artifact)


@dataclass(frozen=True)
class CacheEntry:
    artifact: Artifact
    content_type: str
    inserted_at: float
    size_bytes: int


@dataclass(frozen=True)
class CacheStats:
    count: int
    total_bytes: int
    max_items: int
    max_bytes: int


class ArtifactCache:
    """Thread-safe LRU + TTL cache of finished artifacts."""

    def __init__(
        self,
        max_items: int = 1000,
        max_bytes: int = 100 * 1024 * 1024,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_items < 1:
            raise ValueError("max_items must be >= 1")
        if max_bytes < 1:
            raise ValueError("max_bytes must be >= 1")
        self.max_items = int(max_items)
        self.max_bytes = int(max_bytes)
        self.ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._lock = RLock()
        self._data: OrderedDict[str, CacheEntry] = OrderedDict()
        self._total_bytes = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def _expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.inserted_at >= self.ttl_seconds

    def _remove(self, signature: str) -> CacheEntry | None:
        entry = self._data.pop(signature, None)
        if entry is not None:
            self._total_bytes -= entry.size_bytes
        return entry

    def get(self, signature: str) -> CacheEntry | None:
        """Entry for ``signature``, marking it most recently used.

        An expired entry is removed and reported as a miss.
        """
        with self._lock:
            entry = self._data.get(signature)
            if entry is None:
                return None
            if self._expired(entry):
                self._remove(signature)
                logger.debug("Cache entry expired: %s", signature)
                return None
            self._data.move_to_end(signature)
            return entry

    def has(self, signature: str) -> bool:
        """Presence check without touching recency."""
        with self._lock:
            entry = self._data.get(signature)
            if entry is None:
                return False
            if self._expired(entry):
                self._remove(signature)
                return False
            return True

    def put(self, signature: str, artifact: Artifact, content_type: str) -> CacheEntry | None:
        """Insert a finished artifact, evicting least recently used entries.

        Returns the stored entry, or ``None`` when the artifact alone is
        larger than the byte budget and was not cached.
        """
        size = artifact_size(artifact)
        if size > self.max_bytes:
            logger.debug("Artifact too large to cache (%d bytes): %s", size, signature)
            return None

        with self._lock:
            entry = CacheEntry(
                artifact=artifact,
                content_type=content_type,
                inserted_at=self._clock(),
                size_bytes=size,
            )
            self._remove(signature)
            while self._data and (
                len(self._data) >= self.max_items
                or self._total_bytes + size > self.max_bytes
            ):
                evicted, old = self._data.popitem(last=False)
                self._total_bytes -= old.size_bytes
                logger.debug("Evicted %s (%d bytes)", evicted, old.size_bytes)
            self._data[signature] = entry
            self._total_bytes += size
            return entry

    def delete(self, signature: str) -> bool:
        with self._lock:
            return self._remove(signature) is not None

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self._total_bytes = 0

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                count=len(self._data),
                total_bytes=self._total_bytes,
                max_items=self.max_items,
                max_bytes=self.max_bytes,
            )
