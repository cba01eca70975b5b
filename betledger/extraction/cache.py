"""
In-memory cache of analysis results.

Keyed by a hash of the exact image bytes. Entries never expire; when
the cache is full the least recently used entry is dropped.
"""

import hashlib
from collections import OrderedDict
from typing import Optional

from betledger.models import AnalysisResult


def image_key(image: bytes) -> str:
    """Cache key of an image: SHA-256 of its content."""
    return hashlib.sha256(image).hexdigest()


class AnalysisCache:
    """Capacity-bounded map of image key -> analysis result."""

    def __init__(self, capacity: int = 256) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: OrderedDict[str, AnalysisResult] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, image: bytes) -> bool:
        return image_key(image) in self._entries

    def get(self, image: bytes) -> Optional[AnalysisResult]:
        """Cached result for an image, or None."""
        key = image_key(image)
        result = self._entries.get(key)
        if result is not None:
            self._entries.move_to_end(key)
        return result

    def put(self, image: bytes, result: AnalysisResult) -> None:
        """Store a result, evicting the least recently used entry if full."""
        key = image_key(image)
        self._entries[key] = result
        self._entries.move_to_end(key)
        while len(self._entries) > self.capacity:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()
