"""Submodular selection of diverse yet relevant query variants.

This package provides a facility-location coverage objective and greedy
maximizers for it:
- LazyGreedySelector: priority-queue lazy evaluation (default)
- EagerGreedySelector: full rescan every round (reference baseline)

Reference:
    "Submodular Optimization for Diverse Query Generation in DeepResearch"
    https://jina.ai/news/submodular-optimization-for-diverse-query-generation-in-deepresearch/

Example:
    >>> from submodular import create_selector
    >>> selector = create_selector("lazy")
    >>> result = selector.select(embeddings, relevance, k=3, alpha=0.3)
    >>> result.indices
"""

from typing import Union

from submodular.diversity import compute_selection_diversity, diversity_score
from submodular.greedy import EagerGreedySelector, GreedySelection, LazyGreedySelector
from submodular.objective import CoverageObjective
from submodular.priority_queue import LazyPriorityQueue, QueueEntry
from submodular.similarity import cosine_similarity, relevance_scores, similarity_matrix

__all__ = [
    "CoverageObjective",
    "EagerGreedySelector",
    "GreedySelection",
    "LazyGreedySelector",
    "LazyPriorityQueue",
    "QueueEntry",
    "compute_selection_diversity",
    "cosine_similarity",
    "create_selector",
    "diversity_score",
    "relevance_scores",
    "similarity_matrix",
]


SelectorType = Union[LazyGreedySelector, EagerGreedySelector]


def create_selector(strategy: str = "lazy") -> SelectorType:
    """Create a greedy selector by strategy name.

    Args:
        strategy: Selector to use. Options:
            - "lazy": LazyGreedySelector (recomputes gains only when needed)
            - "eager": EagerGreedySelector (recomputes all gains every round)

    Returns:
        Selector instance

    Raises:
        ValueError: If the strategy name is not recognized
    """
    strategy = strategy.lower().strip()

    if strategy == "lazy":
        return LazyGreedySelector()
    elif strategy == "eager":
        return EagerGreedySelector()
    else:
        raise ValueError(
            f"Unknown selector strategy: '{strategy}'. "
            f"Available options: 'lazy', 'eager'"
        )
