"""
Search Cache: LRU Caching with TTL and Query Frequency Tracking.

Memoises filtered result lists per (query, scope) so repeated
keystrokes and page reruns do not rescan the records:
- least-recently-used eviction once the cache is full
- per-entry expiry after a time-to-live
- counts of how often each query is searched
- a lock around every operation

Time comes from an injected clock, so each cache is an explicit
object owned by its caller rather than module state.
"""

import hashlib
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


# ─── Cache Entry ──────────────────────────────────────────────────────────────

@dataclass
class CacheEntry:
    """A single cached result list with metadata."""

    key: str
    query: str
    value: Any
    created_at: float
    last_accessed: float
    ttl_seconds: float
    hit_count: int = 0

    def is_expired(self, now: float) -> bool:
        """Whether the entry has outlived its TTL at time `now`."""
        if self.ttl_seconds <= 0:
            return False  # No expiry
        return (now - self.created_at) > self.ttl_seconds

    def touch(self, now: float):
        """Record a cache hit at time `now`."""
        self.last_accessed = now
        self.hit_count += 1


# ─── Cache Statistics ─────────────────────────────────────────────────────────

@dataclass
class CacheStats:
    """Hit, miss and eviction counters for one cache."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expired: int = 0
    max_size: int = 0
    total_entries: int = 0

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups served from the cache."""
        if self.total_requests == 0:
            return 0.0
        return self.hits / self.total_requests

    def to_dict(self) -> dict:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expired": self.expired,
            "hit_rate": round(self.hit_rate, 4),
            "total_requests": self.total_requests,
            "current_entries": self.total_entries,
            "max_size": self.max_size,
        }


# ─── Query Frequency Tracker ─────────────────────────────────────────────────

@dataclass
class QueryRecord:
    """How often and when one normalized query was seen."""

    query: str
    count: int = 0
    first_seen: float = 0.0
    last_seen: float = 0.0


class QueryFrequencyTracker:
    """
    Track how often each query is searched.

    The table is bounded: when full, queries seen at most
    `prune_threshold` times are dropped, then the least recently
    seen half if it is still full.
    """

    def __init__(
        self,
        max_tracked: int = 1_000,
        prune_threshold: int = 1,
        clock: Clock = time.monotonic,
    ):
        self._records: dict[str, QueryRecord] = {}
        self._max_tracked = max_tracked
        self._prune_threshold = prune_threshold
        self._clock = clock
        self._lock = threading.Lock()

    def record(self, query: str):
        """Record one occurrence of a query."""
        normalized = query.strip().lower()
        if not normalized:
            return
        now = self._clock()

        with self._lock:
            if normalized not in self._records:
                if len(self._records) >= self._max_tracked:
                    self._prune()
                self._records[normalized] = QueryRecord(normalized, first_seen=now)

            record = self._records[normalized]
            record.count += 1
            record.last_seen = now

    def _prune(self):
        """Free space in the table (lock must be held)."""
        for key in [k for k, r in self._records.items() if r.count <= self._prune_threshold]:
            del self._records[key]

        if len(self._records) >= self._max_tracked:
            by_age = sorted(self._records.items(), key=lambda item: item[1].last_seen)
            for key, _ in by_age[: len(self._records) - self._max_tracked // 2]:
                del self._records[key]

    def top_queries(self, limit: int = 10) -> list[tuple[str, int]]:
        """Most frequent queries as (query, count), most frequent first."""
        with self._lock:
            ranked = sorted(self._records.values(), key=lambda r: r.count, reverse=True)
            return [(r.query, r.count) for r in ranked[:limit]]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def clear(self):
        with self._lock:
            self._records.clear()


# ─── LRU Search Cache ────────────────────────────────────────────────────────

def make_cache_key(query: str, **scope) -> str:
    """
    Deterministic cache key from a query and scope values.

    The query is lowercased and trimmed; scope values that are None
    are ignored.
    """
    parts = [query.strip().lower()]
    for key in sorted(scope):
        if scope[key] is not None:
            parts.append(f"{key}={scope[key]}")
    raw = "|".join(parts)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()[:32]


class SearchCache:
    """
    Result cache keyed by normalized query and scope.

    Usage:
        cache = SearchCache(max_entries=256, default_ttl=300)
        laws = cache.get_or_compute(
            "identity theft",
            lambda: search_laws("identity theft", LAWS),
            scope="laws",
        )
    """

    def __init__(
        self,
        max_entries: int = 256,
        default_ttl: float = 300.0,
        track_queries: bool = True,
        clock: Clock = time.monotonic,
    ):
        """
        Args:
            max_entries: Entries held before the least recently used is evicted.
            default_ttl: Seconds an entry stays valid; 0 keeps entries forever.
            track_queries: Count queries for top_queries().
            clock: Returns the current time in seconds.
        """
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        if default_ttl < 0:
            raise ValueError("default_ttl must be non-negative")

        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._max_entries = max_entries
        self._default_ttl = default_ttl
        self._clock = clock
        self._lock = threading.RLock()
        self._stats = CacheStats(max_size=max_entries)
        self._tracker = QueryFrequencyTracker(clock=clock) if track_queries else None

    def get(self, query: str, **scope) -> Optional[Any]:
        """Cached value for (query, scope), or None if absent or expired."""
        key = make_cache_key(query, **scope)
        now = self._clock()
        if self._tracker is not None:
            self._tracker.record(query)

        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._stats.misses += 1
                return None

            if entry.is_expired(now):
                del self._cache[key]
                self._stats.expired += 1
                self._stats.misses += 1
                self._stats.total_entries = len(self._cache)
                return None

            entry.touch(now)
            self._cache.move_to_end(key)
            self._stats.hits += 1
            return entry.value

    def put(self, query: str, value: Any, ttl: Optional[float] = None, **scope):
        """Store a value for (query, scope), evicting the LRU entry if full."""
        key = make_cache_key(query, **scope)
        now = self._clock()
        entry = CacheEntry(
            key=key,
            query=query.strip().lower(),
            value=value,
            created_at=now,
            last_accessed=now,
            ttl_seconds=self._default_ttl if ttl is None else ttl,
        )

        with self._lock:
            if key in self._cache:
                self._cache[key] = entry
                self._cache.move_to_end(key)
            else:
                while len(self._cache) >= self._max_entries:
                    self._evict_one(now)
                self._cache[key] = entry
            self._stats.total_entries = len(self._cache)

    def get_or_compute(self, query: str, compute: Callable[[], Any], **scope) -> Any:
        """
        Return the cached value, computing and storing it on a miss.

        A cached None is indistinguishable from a miss and is recomputed.
        """
        value = self.get(query, **scope)
        if value is None:
            value = compute()
            self.put(query, value, **scope)
        return value

    def _evict_one(self, now: float):
        """Evict an expired entry if any, else the LRU one (lock must be held)."""
        for key, entry in self._cache.items():
            if entry.is_expired(now):
                del self._cache[key]
                self._stats.expired += 1
                return

        key, _ = self._cache.popitem(last=False)
        self._stats.evictions += 1
        logger.debug("Evicted cache entry %s", key)

    def invalidate(self, query: str, **scope):
        """Drop the entry for (query, scope), if present."""
        key = make_cache_key(query, **scope)
        with self._lock:
            self._cache.pop(key, None)
            self._stats.total_entries = len(self._cache)

    def invalidate_by_prefix(self, query_prefix: str) -> int:
        """Remove all entries whose query starts with a prefix. Returns the count."""
        prefix = query_prefix.strip().lower()
        with self._lock:
            doomed = [k for k, e in self._cache.items() if e.query.startswith(prefix)]
            for key in doomed:
                del self._cache[key]
            self._stats.total_entries = len(self._cache)
        return len(doomed)

    def purge_expired(self) -> int:
        """Remove all expired entries. Returns the count."""
        now = self._clock()
        with self._lock:
            doomed = [k for k, e in self._cache.items() if e.is_expired(now)]
            for key in doomed:
                del self._cache[key]
            self._stats.expired += len(doomed)
            self._stats.total_entries = len(self._cache)
        return len(doomed)

    def clear(self):
        """Drop every entry; statistics are kept."""
        with self._lock:
            self._cache.clear()
            self._stats.total_entries = 0

    def get_stats(self) -> dict:
        with self._lock:
            return self._stats.to_dict()

    def top_queries(self, limit: int = 10) -> list[tuple[str, int]]:
        """Most frequently searched queries (empty if tracking is off)."""
        if self._tracker is not None:
            return self._tracker.top_queries(limit)
        return []

    @property
    def capacity(self) -> int:
        return self._max_entries

    def __contains__(self, query: str) -> bool:
        """Whether an unscoped query is cached (does not update access time)."""
        if not isinstance(query, str):
            return False
        key = make_cache_key(query)
        with self._lock:
            entry = self._cache.get(key)
            return entry is not None and not entry.is_expired(self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __repr__(self) -> str:
        return (
            f"SearchCache(entries={len(self)}/{self._max_entries}, "
            f"hit_rate={self._stats.hit_rate:.1%})"
        )
