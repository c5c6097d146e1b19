"""
Simple In-Memory Cache
Thread-safe TTL + LRU cache, used process-wide for fund embedding vectors
"""
from typing import Optional, Any, Dict, List
from datetime import datetime, timedelta
import hashlib
import threading


class SimpleCache:
    """Simple in-memory cache guarded by a lock for concurrent population"""

    def __init__(self, max_size: int = 100, ttl_seconds: int = 3600):
        """
        Initialize simple cache

        Args:
            max_size: Maximum number of items to cache in memory
            ttl_seconds: Time-to-live in seconds
        """
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._cache: Dict[str, Dict[str, Any]] = {}
        self._access_order: List[str] = []  # For LRU eviction
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._invalidations = 0

    def _get_cache_key(self, key: str) -> str:
        """Generate cache key hash"""
        return hashlib.md5(key.encode('utf-8')).hexdigest()

    def _is_expired(self, item: Dict[str, Any]) -> bool:
        """Check if cache item is expired"""
        if 'expires_at' not in item:
            return True
        return datetime.now() > item['expires_at']

    def _evict_lru(self):
        """Evict least recently used item"""
        if len(self._cache) >= self.max_size and self._access_order:
            lru_key = self._access_order.pop(0)
            self._cache.pop(lru_key, None)

    def _touch(self, cache_key: str):
        if cache_key in self._access_order:
            self._access_order.remove(cache_key)
        self._access_order.append(cache_key)

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache

        Args:
            key: Cache key

        Returns:
            Cached value or None
        """
        cache_key = self._get_cache_key(key)

        with self._lock:
            item = self._cache.get(cache_key)
            if item is None:
                self._misses += 1
                return None

            if self._is_expired(item):
                del self._cache[cache_key]
                if cache_key in self._access_order:
                    self._access_order.remove(cache_key)
                self._misses += 1
                return None

            self._touch(cache_key)
            self._hits += 1
            return item.get('value')

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """
        Set value in cache

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time-to-live in seconds (uses default if None)
        """
        cache_key = self._get_cache_key(key)
        ttl = ttl or self.ttl_seconds

        with self._lock:
            if cache_key not in self._cache and len(self._cache) >= self.max_size:
                self._evict_lru()

            self._cache[cache_key] = {
                'value': value,
                'expires_at': datetime.now() + timedelta(seconds=ttl),
                'created_at': datetime.now()
            }
            self._touch(cache_key)

    def clear(self) -> None:
        """Drop every entry (e.g. after the corpus was replaced)"""
        with self._lock:
            self._cache.clear()
            self._access_order.clear()
            self._invalidations += 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics"""
        with self._lock:
            expired = [k for k, v in self._cache.items() if self._is_expired(v)]
            for k in expired:
                del self._cache[k]
                if k in self._access_order:
                    self._access_order.remove(k)

            return {
                'size': len(self._cache),
                'max_size': self.max_size,
                'ttl_seconds': self.ttl_seconds,
                'hits': self._hits,
                'misses': self._misses,
                'invalidations': self._invalidations
            }
