"""Transposition table for the game solver.

Unbounded by default: a solve proves exact values and every entry may be
needed again. Passing ``max_entries`` switches on LRU eviction for
memory-limited runs; evicted subgames are simply re-solved.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum


class Bound(str, Enum):
    """How a stored value relates to the true game value."""
    EXACT = "exact"
    LOWER = "lower"
    UPPER = "upper"


@dataclass(frozen=True, slots=True)
class TableEntry:
    value: int
    bound: Bound = Bound.EXACT


class TranspositionTable:
    """Solved positions keyed by ``(canonical key, player to move)``.

    With ``max_entries`` set, the least recently read or written position
    is dropped once the table is full.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        self._entries: OrderedDict[Hashable, TableEntry] = OrderedDict()
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    @property
    def bounded(self) -> bool:
        return self.max_entries is not None

    @property
    def lookups(self) -> int:
        return self.hits + self.misses

    def get(self, key: Hashable) -> TableEntry | None:
        """Stored entry for ``key``, or None. Counts a hit or a miss."""
        try:
            entry = self._entries[key]
        except KeyError:
            self.misses += 1
            return None
        self.hits += 1
        self._touch(key)
        return entry

    def put(self, key: Hashable, entry: TableEntry) -> None:
        """Store ``entry``, replacing any older result for the same position."""
        if key in self._entries:
            self._touch(key)
        elif self.bounded and len(self._entries) >= self.max_entries:
            self._entries.popitem(last=False)
            self.evictions += 1
        self._entries[key] = entry

    def _touch(self, key: Hashable) -> None:
        # Recency only matters when something can be evicted.
        if self.bounded:
            self._entries.move_to_end(key)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def items(self):
        return self._entries.items()

    def clear(self) -> None:
        self._entries.clear()
        self.hits = self.misses = self.evictions = 0

    def stats(self) -> dict:
        """Size and hit/miss counters, for logging at the end of a solve."""
        return {
            "entries": len(self),
            "max_entries": self.max_entries,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hits / self.lookups if self.lookups else 0.0,
        }
