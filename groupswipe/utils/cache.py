"""
Caching Utilities
=================
In-memory page cache for infinite-scroll feeds.

Features:
- TTL (Time To Live) per entry
- LRU (Least Recently Used) eviction
- Per-session invalidation keyed by (user, group)

Usage:
    from groupswipe.utils.cache import FeedPageCache

    pages = FeedPageCache()
    pages.set(user_id, group_id, offset, items)
    pages.get(user_id, group_id, offset)

    # After a full feed refresh
    pages.clear_session(user_id, group_id)

The cache belongs to the caller of the feed, never to FeedService: the
ranking is recomputed per call, so cached pages are only valid for the
browsing session that produced them.
"""
from typing import Any, Dict, Hashable, Optional, Set, Tuple
from collections import OrderedDict
from datetime import datetime, timedelta
import logging
import os

logger = logging.getLogger(__name__)

SessionKey = Tuple[int, Optional[int]]


class CacheStore:
    """
    Simple in-memory cache with TTL and LRU eviction.
    Per-process; each worker keeps its own copy.
    """

    def __init__(self, max_size: int = 1000):
        """
        Initialize cache store.

        Args:
            max_size: Maximum number of items in cache (LRU eviction)
        """
        self._cache: OrderedDict = OrderedDict()
        self._max_size = max_size
        self._hits = 0
        self._misses = 0

    def get(self, key: Hashable) -> Optional[Any]:
        """
        Get value from cache if exists and not expired.

        Returns:
            Cached value or None if not found/expired
        """
        if key not in self._cache:
            self._misses += 1
            return None

        value, expiry = self._cache[key]

        if expiry and datetime.now() > expiry:
            del self._cache[key]
            self._misses += 1
            return None

        # Move to end (LRU)
        self._cache.move_to_end(key)
        self._hits += 1
        return value

    def set(self, key: Hashable, value: Any, ttl: Optional[int] = None) -> Optional[Hashable]:
        """
        Set value in cache with optional TTL.

        Returns:
            The key evicted to make room, if any
        """
        expiry = datetime.now() + timedelta(seconds=ttl) if ttl else None

        self._cache[key] = (value, expiry)
        self._cache.move_to_end(key)

        if len(self._cache) > self._max_size:
            oldest_key = next(iter(self._cache))
            del self._cache[oldest_key]
            logger.debug(f"Evicted cache key: {oldest_key}")
            return oldest_key
        return None

    def delete(self, key: Hashable) -> None:
        """Delete a specific cache key."""
        self._cache.pop(key, None)

    def get_stats(self) -> dict:
        total_requests = self._hits + self._misses
        hit_rate = (self._hits / total_requests * 100) if total_requests > 0 else 0

        return {
            'size': len(self._cache),
            'max_size': self._max_size,
            'hits': self._hits,
            'misses': self._misses,
            'hit_rate': f"{hit_rate:.2f}%"
        }


class FeedPageCache:
    """
    Feed pages keyed by (user_id, group_id, offset).

    Offsets index into a ranking that is recomputed on every feed call, so
    pages from one browsing session must not be served after a refresh:
    call clear_session() whenever the deck is reloaded from page 0.
    """

    DEFAULT_TTL = int(os.getenv("FEED_CACHE_TTL_SECONDS", 600))

    def __init__(self, max_size: int = 500, ttl: Optional[int] = None):
        self._store = CacheStore(max_size=max_size)
        self._ttl = self.DEFAULT_TTL if ttl is None else ttl
        self._sessions: Dict[SessionKey, Set[int]] = {}

    def get(self, user_id: int, group_id: Optional[int], offset: int) -> Optional[list]:
        items = self._store.get((user_id, group_id, offset))
        if items is None:
            # Missing or expired
            self._forget(user_id, group_id, offset)
        return items

    def set(self, user_id: int, group_id: Optional[int], offset: int, items: list) -> None:
        evicted = self._store.set((user_id, group_id, offset), items, self._ttl)
        self._sessions.setdefault((user_id, group_id), set()).add(offset)

        if evicted is not None:
            self._forget(*evicted)

    def _forget(self, user_id: int, group_id: Optional[int], offset: int) -> None:
        """Drop one offset from the session index, and the session once empty"""
        offsets = self._sessions.get((user_id, group_id))
        if offsets is None:
            return
        offsets.discard(offset)
        if not offsets:
            del self._sessions[(user_id, group_id)]

    def clear_session(self, user_id: int, group_id: Optional[int]) -> None:
        """Drop every cached page of one (user, group) browsing session"""
        offsets = self._sessions.pop((user_id, group_id), set())
        for offset in offsets:
            self._store.delete((user_id, group_id, offset))
        logger.debug(f"Cleared {len(offsets)} cached feed pages for user {user_id} (group={group_id})")

    def get_stats(self) -> dict:
        stats = self._store.get_stats()
        stats['sessions'] = len(self._sessions)
        return stats
