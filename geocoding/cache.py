from __future__ import annotations

from collections import OrderedDict
from typing import Generic, Hashable, Optional, TypeVar

V = TypeVar("V")


class GeocodeCache(Generic[V]):
    """
    Write-once memo store for geocoding answers.

    Bounded LRU when max_entries > 0 (least recently used key is dropped
    first); max_entries == 0 keeps every entry for the life of the object.
    A key that is already present is never overwritten.
    """

    def __init__(self, max_entries: int = 512):
        if max_entries < 0:
            raise ValueError("max_entries must be >= 0")
        self.max_entries = max_entries
        self._entries: OrderedDict[Hashable, V] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable) -> Optional[V]:
        if key not in self._entries:
            self.misses += 1
            return None
        self.hits += 1
        self._entries.move_to_end(key)
        return self._entries[key]

    def put(self, key: Hashable, value: V) -> None:
        if key in self._entries:
            return
        self._entries[key] = value
        if self.max_entries and len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
