"""Facility-location coverage objective for diverse query selection.

For n candidates with embeddings e, relevance r (cosine to the original query)
and a weighting parameter alpha, the coverage of candidate j by a selected set
S is:

    coverage_j(S) = max(alpha * r[j], max_{s in S} cos(e_s, e_j))
    U(S) = sum_j coverage_j(S)

Marginal gains:

    gain(i | {})  = sum_j max(alpha * r[j], cos(e_i, e_j))
    gain(i | S)   = sum_j max(coverage_j(S), cos(e_i, e_j)) - U(S)

The first pick is scored as the would-be total utility of {i}, not as
U({i}) - U({}). This changes which candidate is always picked first, so it is
kept as is.

A sum of pointwise maxima over a growing set of similarity terms is monotone
and submodular: gains never increase as S grows. That is what makes the lazy
greedy selector correct.
"""

import logging
from typing import Iterable, List, Optional, Sequence

import numpy as np

from .similarity import similarity_matrix

logger = logging.getLogger(__name__)


class CoverageObjective:
    """Coverage objective with an in-place coverage state.

    The objective owns a running selected set and the per-candidate coverage
    vector for that set. ``commit`` adds an item and raises coverage in place;
    ``marginal_gain`` reads it. One instance serves exactly one selection run.

    Example:
        >>> objective = CoverageObjective(embeddings, relevance, alpha=0.3)
        >>> gains = [objective.marginal_gain(i) for i in range(len(embeddings))]
        >>> objective.commit(int(np.argmax(gains)))
        >>> objective.utility()
    """

    def __init__(
        self,
        embeddings: Sequence[np.ndarray],
        relevance: Sequence[float],
        alpha: float = 0.3
    ):
        """Initialize the objective.

        Args:
            embeddings: One vector per candidate
            relevance: Cosine similarity of each candidate to the query
            alpha: Weight of the relevance floor (0-1)

        Raises:
            ValueError: If alpha is not in [0, 1] or the inputs differ in length
        """
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"alpha must be in [0, 1], got {alpha}")
        if len(embeddings) != len(relevance):
            raise ValueError(
                f"Got {len(embeddings)} embeddings but {len(relevance)} relevance scores"
            )

        self.alpha = alpha
        self.n = len(embeddings)
        self._similarities = similarity_matrix(embeddings)
        self._floor = alpha * np.asarray(relevance, dtype=np.float64)
        self._coverage = self._floor.copy()
        self._selected: List[int] = []

    @property
    def selected(self) -> List[int]:
        """Committed candidate indices, in commit order."""
        return list(self._selected)

    @property
    def coverage(self) -> np.ndarray:
        """Copy of the current per-candidate coverage."""
        return self._coverage.copy()

    def _coverage_for(self, selected: Iterable[int]) -> np.ndarray:
        coverage = self._floor.copy()
        for s in selected:
            np.maximum(coverage, self._similarities[s], out=coverage)
        return coverage

    def marginal_gain(self, index: int, selected: Optional[Sequence[int]] = None) -> float:
        """Gain of adding a candidate to a selected set.

        Args:
            index: Candidate to evaluate
            selected: Explicit selected set to evaluate against. If None, the
                objective's own committed set and coverage state are used.

        Returns:
            The marginal gain; for an empty set, the special-cased first-pick value
        """
        if selected is None:
            selected = self._selected
            coverage = self._coverage
        else:
            coverage = self._coverage_for(selected)

        candidate_sims = self._similarities[index]
        if len(selected) == 0:
            return float(np.maximum(self._floor, candidate_sims).sum())

        return float(np.maximum(coverage, candidate_sims).sum() - coverage.sum())

    def utility(self, selected: Optional[Sequence[int]] = None) -> float:
        """Total coverage U(S) of a selected set (the committed set by default)."""
        if selected is None:
            return float(self._coverage.sum())
        return float(self._coverage_for(selected).sum())

    def commit(self, index: int) -> None:
        """Add a candidate to the selected set and update coverage in place.

        Raises:
            ValueError: If the candidate is already selected
        """
        if index in self._selected:
            raise ValueError(f"Candidate {index} is already selected")

        self._selected.append(index)
        np.maximum(self._coverage, self._similarities[index], out=self._coverage)

        logger.debug(
            "Committed candidate %d (selected=%d, utility=%.4f)",
            index, len(self._selected), self._coverage.sum()
        )
