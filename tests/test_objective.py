"""Tests for the facility-location coverage objective."""

import numpy as np
import pytest

from embedding import HashingNGramEmbedder
from submodular import CoverageObjective, cosine_similarity, relevance_scores

QUERY = "go to site"
CANDIDATES = [
    "go to site",
    "Step by step: go to site",
    "go to site. If errors occur, try alternative approaches.",
    "go to site. Verify each step before proceeding.",
    "Efficiently execute: go to site",
    "Explore and complete: go to site",
]


@pytest.fixture
def objective_inputs():
    embedder = HashingNGramEmbedder()
    embeddings = embedder.embed_documents(CANDIDATES)
    relevance = relevance_scores(embedder.embed(QUERY), embeddings)
    return embeddings, relevance


class TestCoverageObjective:
    """Test cases for CoverageObjective."""

    def test_alpha_validation(self, objective_inputs):
        """alpha outside [0, 1] raises ValueError."""
        embeddings, relevance = objective_inputs
        with pytest.raises(ValueError, match="alpha"):
            CoverageObjective(embeddings, relevance, alpha=-0.1)
        with pytest.raises(ValueError, match="alpha"):
            CoverageObjective(embeddings, relevance, alpha=1.5)

    def test_length_mismatch(self, objective_inputs):
        """Embeddings and relevance must have the same length."""
        embeddings, relevance = objective_inputs
        with pytest.raises(ValueError):
            CoverageObjective(embeddings, relevance[:-1])

    def test_initial_coverage_is_relevance_floor(self, objective_inputs):
        """Before any commit, coverage equals alpha * relevance."""
        embeddings, relevance = objective_inputs
        objective = CoverageObjective(embeddings, relevance, alpha=0.3)
        assert np.allclose(objective.coverage, 0.3 * np.asarray(relevance))
        assert objective.selected == []

    def test_first_pick_gain(self):
        """gain(i | {}) is the sum of max(alpha * r[j], cos(i, j))."""
        embeddings = [np.array([1.0, 0.0]), np.array([0.0, 1.0]), np.array([1.0, 1.0])]
        relevance = [0.9, 0.1, 0.5]
        objective = CoverageObjective(embeddings, relevance, alpha=0.5)

        # Candidate 0: cos = [1, 0, 0.7071]; floor = [0.45, 0.05, 0.25]
        expected = 1.0 + 0.05 + np.sqrt(0.5)
        assert objective.marginal_gain(0) == pytest.approx(expected)

    def test_first_pick_is_total_utility(self, objective_inputs):
        """The first-pick gain equals U({i}), not U({i}) - U({})."""
        embeddings, relevance = objective_inputs
        objective = CoverageObjective(embeddings, relevance, alpha=0.3)

        for i in range(len(embeddings)):
            gain = objective.marginal_gain(i)
            assert gain == pytest.approx(objective.utility([i]))
            assert gain > objective.utility([i]) - objective.utility([])

    def test_gain_after_commit(self):
        """gain(i | S) is the increase in total coverage."""
        embeddings = [np.array([1.0, 0.0]), np.array([0.0, 1.0]), np.array([1.0, 1.0])]
        relevance = [0.9, 0.1, 0.5]
        objective = CoverageObjective(embeddings, relevance, alpha=0.5)
        objective.commit(0)

        before = objective.utility()
        expected = objective.utility([0, 1]) - before
        assert objective.marginal_gain(1) == pytest.approx(expected)
        # Coverage of 1 rises from 0.05 to 1, coverage of 2 from 0.7071 stays
        assert objective.marginal_gain(1) == pytest.approx(0.95)

    def test_commit_updates_coverage_in_place(self, objective_inputs):
        """Committing raises coverage to the similarity with the new item."""
        embeddings, relevance = objective_inputs
        objective = CoverageObjective(embeddings, relevance, alpha=0.3)
        before = objective.coverage

        objective.commit(2)

        after = objective.coverage
        assert objective.selected == [2]
        for j in range(len(embeddings)):
            assert after[j] == pytest.approx(max(before[j], cosine_similarity(embeddings[2], embeddings[j])))

    def test_coverage_monotone(self, objective_inputs):
        """Per-candidate coverage never decreases across commits."""
        embeddings, relevance = objective_inputs
        objective = CoverageObjective(embeddings, relevance, alpha=0.3)
        previous = objective.coverage
        for i in [3, 0, 5, 1]:
            objective.commit(i)
            current = objective.coverage
            assert np.all(current >= previous)
            previous = current

    def test_commit_twice_raises(self, objective_inputs):
        """A candidate cannot be committed twice."""
        embeddings, relevance = objective_inputs
        objective = CoverageObjective(embeddings, relevance)
        objective.commit(1)
        with pytest.raises(ValueError, match="already selected"):
            objective.commit(1)

    def test_selected_item_has_zero_gain(self, objective_inputs):
        """An already selected item adds nothing."""
        embeddings, relevance = objective_inputs
        objective = CoverageObjective(embeddings, relevance)
        objective.commit(4)
        assert objective.marginal_gain(4) == pytest.approx(0.0, abs=1e-12)

    def test_explicit_set_does_not_touch_state(self, objective_inputs):
        """Evaluating against an explicit set leaves the running state alone."""
        embeddings, relevance = objective_inputs
        objective = CoverageObjective(embeddings, relevance)
        objective.commit(0)
        coverage = objective.coverage

        objective.marginal_gain(3, [1, 2])

        assert objective.selected == [0]
        assert np.array_equal(objective.coverage, coverage)


class TestDiminishingReturns:
    """gain(i | S1) >= gain(i | S2) whenever S1 is a subset of S2."""

    def test_nested_sets_from_hashing_embeddings(self, objective_inputs):
        """Gains shrink along a chain of nested sets, starting from the empty set."""
        embeddings, relevance = objective_inputs
        objective = CoverageObjective(embeddings, relevance, alpha=0.3)
        chain = [[], [1], [1, 4], [1, 4, 2], [1, 4, 2, 5]]

        for i in range(len(embeddings)):
            gains = [objective.marginal_gain(i, s) for s in chain]
            for smaller, larger in zip(gains, gains[1:]):
                assert smaller >= larger - 1e-9

    @pytest.mark.parametrize("seed", range(20))
    def test_random_subsets(self, seed):
        """Random nested subsets on random non-negative embeddings."""
        rng = np.random.default_rng(seed)
        n = int(rng.integers(4, 12))
        embeddings = [rng.random(16) for _ in range(n)]
        query = rng.random(16)
        relevance = relevance_scores(query, embeddings)
        objective = CoverageObjective(embeddings, relevance, alpha=float(rng.random()))

        order = [int(x) for x in rng.permutation(n)]
        cut1 = int(rng.integers(0, n))
        cut2 = int(rng.integers(cut1, n + 1))
        s1, s2 = order[:cut1], order[:cut2]

        for i in range(n):
            assert objective.marginal_gain(i, s1) >= objective.marginal_gain(i, s2) - 1e-9


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
