"""
Resolution Cache

Memoizes resolved instruction text per raw URL string. A cached absence is
a real entry, distinct from a miss. No eviction, no TTL: entries live until
clear() is called.
"""

import threading
from typing import Dict, Optional, Tuple

from .models import ResolutionStats


class ResolutionCache:
    """URL -> resolved text (or None) memo table"""

    def __init__(self):
        self._entries: Dict[str, Optional[str]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def lookup(self, url: str) -> Tuple[bool, Optional[str]]:
        """Return (hit, value); value is None for a cached absence"""
        with self._lock:
            if url in self._entries:
                self.hits += 1
                return True, self._entries[url]
            self.misses += 1
            return False, None

    def put(self, url: str, value: Optional[str]):
        with self._lock:
            self._entries[url] = value

    def __contains__(self, url: str) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self):
        """Drop all entries; hit/miss counters are kept"""
        with self._lock:
            self._entries.clear()

    def get_stats(self) -> ResolutionStats:
        return ResolutionStats(hits=self.hits, misses=self.misses, entries=len(self._entries))
