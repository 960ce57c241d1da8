"""
Bounded top-k collection of scored labels.

Order is score descending, then label ascending. A min-heap keeps the worst
held entry at the root so each candidate costs O(log k).
"""

import heapq
from typing import Iterable, List

from .types import ScoredLabel


class _Ranked:
    """Heap entry ordered so that the worst-ranked entry compares smallest."""

    __slots__ = ("item",)

    def __init__(self, item: ScoredLabel):
        self.item = item

    def __lt__(self, other: "_Ranked") -> bool:
        if self.item.score != other.item.score:
            return self.item.score < other.item.score
        # equal scores: the later label in lexicographic order ranks worse
        return self.item.label > other.item.label


class TopK:
    """Keeps the k best ScoredLabels pushed into it."""

    def __init__(self, k: int):
        if k < 0:
            raise ValueError(f"k must be >= 0, got {k}")
        self.k = k
        self._heap: List[_Ranked] = []

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, label: str, score: float) -> bool:
        """Offer a candidate. Returns True if it is now among the top k."""
        if self.k == 0:
            return False

        entry = _Ranked(ScoredLabel(label, score))
        if len(self._heap) < self.k:
            heapq.heappush(self._heap, entry)
            return True

        # Full: admit only if strictly better than the current worst
        if self._heap[0] < entry:
            heapq.heapreplace(self._heap, entry)
            return True
        return False

    def extend(self, candidates: Iterable[ScoredLabel]) -> None:
        for candidate in candidates:
            self.push(candidate.label, candidate.score)

    def results(self) -> List[ScoredLabel]:
        """Held entries, best first."""
        return [entry.item for entry in sorted(self._heap, reverse=True)]

    def labels(self) -> List[str]:
        return [item.label for item in self.results()]


def top_k(candidates: Iterable[ScoredLabel], k: int) -> List[ScoredLabel]:
    """Select the k best candidates, best first."""
    collector = TopK(k)
    collector.extend(candidates)
    return collector.results()
