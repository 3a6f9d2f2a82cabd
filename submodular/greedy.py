"""Greedy maximization of the coverage objective under a cardinality limit.

Two selectors produce the same selection:
- LazyGreedySelector: keeps cached gains in a priority queue and only
  recomputes a gain when its entry resurfaces at the top of the queue
- EagerGreedySelector: recomputes every remaining candidate's gain every round

Because the objective is submodular, a cached gain is always an upper bound on
the candidate's current gain. An entry that is popped with a gain computed in
the current round therefore beats every other candidate, and recomputation can
be deferred safely. Both selectors carry the standard (1 - 1/e) approximation
guarantee of greedy submodular maximization.

Ties are broken towards the lowest candidate index in both selectors.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from .objective import CoverageObjective
from .priority_queue import LazyPriorityQueue, QueueEntry

logger = logging.getLogger(__name__)


@dataclass
class GreedySelection:
    """Outcome of one greedy run.

    Attributes:
        indices: Selected candidate indices in commit order
        gain_evaluations: Number of marginal gains computed
        shortcut: True if the degenerate shortcut was taken (no optimization)
    """
    indices: List[int] = field(default_factory=list)
    gain_evaluations: int = 0
    shortcut: bool = False


def _shortcut(n: int, k: int):
    """Selection for degenerate inputs, or None if optimization is needed."""
    if k <= 0 or n == 0:
        return GreedySelection(shortcut=True)
    if n <= k:
        return GreedySelection(indices=list(range(n)), shortcut=True)
    return None


class LazyGreedySelector:
    """Lazy greedy selector driven by a min-heap of negated gains.

    Example:
        >>> selector = LazyGreedySelector()
        >>> result = selector.select(embeddings, relevance, k=3, alpha=0.3)
        >>> result.indices
        [2, 0, 5]
    """

    name = "lazy"

    def select(
        self,
        embeddings: Sequence[np.ndarray],
        relevance: Sequence[float],
        k: int,
        alpha: float = 0.3
    ) -> GreedySelection:
        """Select up to k candidates maximizing coverage.

        Args:
            embeddings: One vector per candidate
            relevance: Cosine similarity of each candidate to the query
            k: Number of candidates to select
            alpha: Weight of the relevance floor (0-1)

        Returns:
            GreedySelection with indices in commit order. If k >= n, all
            indices in original order; if k <= 0, nothing.
        """
        shortcut = _shortcut(len(embeddings), k)
        if shortcut is not None:
            return shortcut

        objective = CoverageObjective(embeddings, relevance, alpha)
        queue = LazyPriorityQueue()
        evaluations = 0

        for i in range(objective.n):
            queue.push(QueueEntry(-objective.marginal_gain(i), 0, i))
            evaluations += 1

        for iteration in range(k):
            committed = False
            while queue:
                entry = queue.pop()

                if entry.iteration_tag == iteration:
                    objective.commit(entry.candidate_index)
                    committed = True
                    logger.debug(
                        "Lazy greedy iteration %d selected %d (gain=%.4f)",
                        iteration, entry.candidate_index, entry.gain
                    )
                    break

                gain = objective.marginal_gain(entry.candidate_index)
                evaluations += 1
                queue.push(QueueEntry(-gain, iteration, entry.candidate_index))

            if not committed:
                break

        return GreedySelection(indices=objective.selected, gain_evaluations=evaluations)


class EagerGreedySelector:
    """Plain greedy selector that rescans all remaining candidates every round."""

    name = "eager"

    def select(
        self,
        embeddings: Sequence[np.ndarray],
        relevance: Sequence[float],
        k: int,
        alpha: float = 0.3
    ) -> GreedySelection:
        shortcut = _shortcut(len(embeddings), k)
        if shortcut is not None:
            return shortcut

        objective = CoverageObjective(embeddings, relevance, alpha)
        remaining = list(range(objective.n))
        evaluations = 0

        while remaining and len(objective.selected) < k:
            best_gain = float("-inf")
            best_idx = -1
            for idx in remaining:
                gain = objective.marginal_gain(idx)
                evaluations += 1
                if gain > best_gain:
                    best_gain = gain
                    best_idx = idx

            objective.commit(best_idx)
            remaining.remove(best_idx)

        return GreedySelection(indices=objective.selected, gain_evaluations=evaluations)
