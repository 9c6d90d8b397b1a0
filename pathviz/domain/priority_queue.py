"""Priority queue for the search frontier with deterministic tie-breaking."""

import heapq
import itertools
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .types import CellIndex


@dataclass(order=True)
class FrontierEntry:
    """
    Item in the frontier heap.

    Comparison order:
    1. f_cost (lower is better)
    2. g_cost (lower is better)
    3. sequence (insertion order, for reproducible runs)
    """
    f_cost: float
    g_cost: float
    sequence: int
    index: CellIndex = field(compare=False)
    removed: bool = field(default=False, compare=False)


class FrontierQueue:
    """
    Binary heap keyed on (f_cost, g_cost, insertion order).
    Updated priorities are handled by lazy deletion of the stale entry.
    """

    def __init__(self):
        self._heap: List[FrontierEntry] = []
        self._entry_finder: dict[CellIndex, FrontierEntry] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._entry_finder)

    def __contains__(self, index: CellIndex) -> bool:
        return index in self._entry_finder

    def is_empty(self) -> bool:
        """Check if the queue is empty."""
        return not self._entry_finder

    def put(self, index: CellIndex, f_cost: float, g_cost: float):
        """
        Add a cell or update its priority.
        An existing entry with an equal or better priority is kept.
        """
        existing = self._entry_finder.get(index)
        if existing is not None:
            if (existing.f_cost, existing.g_cost) <= (f_cost, g_cost):
                return
            existing.removed = True

        entry = FrontierEntry(f_cost, g_cost, next(self._counter), index)
        self._entry_finder[index] = entry
        heapq.heappush(self._heap, entry)

    def pop(self) -> Optional[FrontierEntry]:
        """
        Remove and return the entry with the lowest priority.
        Returns None if the queue is empty.
        """
        while self._heap:
            entry = heapq.heappop(self._heap)
            if not entry.removed:
                del self._entry_finder[entry.index]
                return entry
        return None

    def peek(self) -> Optional[FrontierEntry]:
        """Look at the next entry without removing it."""
        while self._heap:
            entry = self._heap[0]
            if not entry.removed:
                return entry
            heapq.heappop(self._heap)
        return None

    def get_cost(self, index: CellIndex) -> Optional[float]:
        """Get the f_cost of a queued cell, or None if not present."""
        entry = self._entry_finder.get(index)
        return entry.f_cost if entry is not None else None

    def clear(self):
        """Remove all items from the queue."""
        self._heap.clear()
        self._entry_finder.clear()
        self._counter = itertools.count()

    def items(self) -> List[Tuple[CellIndex, float]]:
        """All live (index, f_cost) pairs, in heap order. Useful for visualization."""
        return [(entry.index, entry.f_cost) for entry in self._heap if not entry.removed]
