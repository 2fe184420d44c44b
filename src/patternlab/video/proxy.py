"""
Caching proxy for slow video sources.

:class:`CachingVideoSource` wraps any :class:`VideoSource` and keeps the same
``list_videos()`` / ``get_video_info(id)`` contract, so callers cannot tell a
cached answer from a fresh one.

Cache policy
------------
- The first successful answer for a key is canonical: later lookups return it
  without asking the source, even if the source has changed since.
- Populating a key never overwrites an existing entry (first wins). Two callers
  that miss the same key concurrently both reach the source; whichever stores
  first wins and both receive that value.
- Source failures propagate unchanged and are not cached, so the next call
  asks the source again. ``None`` (no such video) is not cached either.
- ``max_entries=None`` keeps every per-video entry. With a bound, the least
  recently used entry is evicted. The list slot is not counted.
- :meth:`invalidate` drops one entry, or everything.
"""

from __future__ import annotations

import threading
from collections import OrderedDict

from patternlab.core.settings import get_logger

from .models import CacheStats, Video
from .source import VideoSource

logger = get_logger(__name__)


class CachingVideoSource:
    """Memoizing stand-in for a :class:`VideoSource`."""

    def __init__(self, source: VideoSource, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive or None")
        self._source = source
        self.max_entries = max_entries
        self._entries: OrderedDict[str, Video] = OrderedDict()
        self._list: list[Video] | None = None
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Cached operations
    # ------------------------------------------------------------------ #
    def fetch_list(self) -> list[Video]:
        """Return the full catalogue, asking the source only the first time."""
        with self._lock:
            if self._list is not None:
                self._hits += 1
                logger.debug("cache hit: list")
                return list(self._list)
            self._misses += 1

        logger.debug("cache miss: list")
        fetched = self._source.list_videos()

        with self._lock:
            if self._list is None:
                self._list = list(fetched)
            return list(self._list)

    def fetch_by_id(self, video_id: str) -> Video | None:
        """Return one video, asking the source only on the first lookup of ``video_id``."""
        with self._lock:
            cached = self._entries.get(video_id)
            if cached is not None:
                self._entries.move_to_end(video_id)
                self._hits += 1
                logger.debug("cache hit: %s", video_id)
                return cached
            self._misses += 1

        logger.debug("cache miss: %s", video_id)
        fetched = self._source.get_video_info(video_id)
        if fetched is None:
            return None

        with self._lock:
            existing = self._entries.get(video_id)
            if existing is not None:
                return existing
            self._entries[video_id] = fetched
            self._evict()
            return fetched

    # The VideoSource contract, so the proxy can replace the source anywhere.
    def list_videos(self) -> list[Video]:
        return self.fetch_list()

    def get_video_info(self, video_id: str) -> Video | None:
        return self.fetch_by_id(video_id)

    # ------------------------------------------------------------------ #
    # Management
    # ------------------------------------------------------------------ #
    def invalidate(self, video_id: str | None = None) -> None:
        """Forget ``video_id``, or every entry and the list when no id is given."""
        with self._lock:
            if video_id is None:
                self._entries.clear()
                self._list = None
            else:
                self._entries.pop(video_id, None)

    def stats(self) -> CacheStats:
        """Return the current hit/miss counters and entry count."""
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                entries=len(self._entries),
                list_cached=self._list is not None,
                max_entries=self.max_entries,
            )

    def __contains__(self, video_id: object) -> bool:
        with self._lock:
            return video_id in self._entries

    def _evict(self) -> None:
        # Caller holds the lock.
        if self.max_entries is None:
            return
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("cache evict: %s", evicted)


__all__ = ["CachingVideoSource"]
