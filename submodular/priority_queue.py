"""Binary min-heap of cached marginal gains for lazy greedy selection."""

import heapq
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class QueueEntry:
    """Cached (negated) marginal gain of a candidate.

    Attributes:
        neg_gain: Negated marginal gain, so the largest gain sorts first
        iteration_tag: Iteration in which the gain was computed
        candidate_index: Index of the candidate in the input list
    """
    neg_gain: float
    iteration_tag: int
    candidate_index: int

    def __lt__(self, other: "QueueEntry") -> bool:
        # Largest gain first, then lowest candidate index, then oldest tag
        if self.neg_gain != other.neg_gain:
            return self.neg_gain < other.neg_gain
        if self.candidate_index != other.candidate_index:
            return self.candidate_index < other.candidate_index
        return self.iteration_tag < other.iteration_tag

    @property
    def gain(self) -> float:
        return -self.neg_gain


class LazyPriorityQueue:
    """Min-heap of QueueEntry ordered by QueueEntry.__lt__."""

    def __init__(self):
        self._heap: List[QueueEntry] = []

    def push(self, entry: QueueEntry) -> None:
        heapq.heappush(self._heap, entry)

    def pop(self) -> Optional[QueueEntry]:
        """Remove and return the smallest entry, or None if the queue is empty."""
        if not self._heap:
            return None
        return heapq.heappop(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
