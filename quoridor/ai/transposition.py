from collections import OrderedDict
from enum import Enum
from typing import Hashable, NamedTuple, Optional

from .constants import DEFAULT_TABLE_SIZE


class BoardFlag(Enum):
    EXACT = "exact"
    LOWER_BOUND = "lowerbound"
    UPPER_BOUND = "upperbound"


class BoardInfo(NamedTuple):
    value: float  # from the perspective of the side to move
    depth: int
    flag: BoardFlag


class TranspositionTable:
    """Memo of search results keyed by board, bounded with least-recently-used eviction."""

    def __init__(self, max_entries: int = DEFAULT_TABLE_SIZE):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._entries: 'OrderedDict[Hashable, BoardInfo]' = OrderedDict()
        self.hits = 0
        self.evictions = 0

    def get(self, key: Hashable) -> Optional[BoardInfo]:
        info = self._entries.get(key)
        if info is not None:
            self._entries.move_to_end(key)
            self.hits += 1
        return info

    def put(self, key: Hashable, info: BoardInfo) -> None:
        self._entries[key] = info
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
            self.evictions += 1

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.evictions = 0

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
