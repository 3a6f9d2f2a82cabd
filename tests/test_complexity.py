"""Tests for query complexity estimation."""

import pytest

from complexity import QueryComplexity, estimate_query_complexity


class TestEstimateQueryComplexity:
    """Test cases for estimate_query_complexity."""

    def test_simple_query(self):
        """A short navigation request is simple and gets k=3."""
        result = estimate_query_complexity("go to a page")
        assert isinstance(result, QueryComplexity)
        assert result.complexity_score < 0.3
        assert result.complexity_score == pytest.approx(4 / 30)
        assert result.recommended_k == 3

    def test_complex_query(self):
        """A multi-action extraction request is complex and gets k=7."""
        result = estimate_query_complexity(
            "find the product, extract the price, and then compare it with "
            "three other sites, verifying each value"
        )
        assert result.complexity_score >= 0.6
        assert result.recommended_k == 7

    def test_score_capped_at_one(self):
        """The score never exceeds 1."""
        result = estimate_query_complexity(
            "first find, then extract, then analyze, then compare, and verify, "
            "and validate, and submit, and complete if needed"
        )
        assert result.complexity_score == 1.0
        assert result.recommended_k == 7

    def test_medium_query(self):
        """One conjunction, one complex verb and three words land in the middle band."""
        result = estimate_query_complexity("search and compare")
        # 0.15 (and) + 0.1 (compare) + 3/30
        assert result.complexity_score == pytest.approx(0.35)
        assert result.recommended_k == 5

    def test_step_markers(self):
        """Step markers add 0.2."""
        result = estimate_query_complexity("Step by step: go")
        assert result.complexity_score == pytest.approx(0.2 + 4 / 30)
        assert result.recommended_k == 5

    def test_conditional_markers_are_substrings(self):
        """Conditional markers match inside words."""
        plain = estimate_query_complexity("open the page")
        conditional = estimate_query_complexity("open the page afterwards")
        assert conditional.complexity_score == pytest.approx(
            plain.complexity_score + 0.15 + 1 / 30
        )

    def test_commas_between_words_count_as_conjunctions(self):
        """Only commas with a word character on both sides count as conjunctions."""
        packed = estimate_query_complexity("a,b,c")
        assert packed.complexity_score == pytest.approx(2 * 0.15 + 1 / 30)

        spaced = estimate_query_complexity("a, b, c")
        assert spaced.complexity_score == pytest.approx(3 / 30)

    def test_comma_separated_request_stays_simple(self):
        """Ordinary comma-separated steps do not raise k on their own."""
        result = estimate_query_complexity("open the site, log in, go to cart")
        assert result.complexity_score == pytest.approx(8 / 30)
        assert result.recommended_k == 3

    def test_conjunctions_are_whole_words(self):
        """'and' inside a word is not a conjunction."""
        result = estimate_query_complexity("android brand")
        assert result.complexity_score == pytest.approx(2 / 30)

    def test_complex_verbs_are_whole_words(self):
        """Complex verbs only count as whole words."""
        result = estimate_query_complexity("findings")
        assert result.complexity_score == pytest.approx(1 / 30)

    def test_case_insensitive(self):
        """Markers match regardless of case."""
        lower = estimate_query_complexity("find and compare")
        upper = estimate_query_complexity("FIND AND COMPARE")
        assert lower == upper

    def test_word_count_capped(self):
        """Word count contributes at most 0.4."""
        result = estimate_query_complexity(" ".join(["page"] * 60))
        assert result.complexity_score == pytest.approx(0.4)
        assert result.recommended_k == 5

    def test_empty_query(self):
        """An empty query is a single empty token."""
        result = estimate_query_complexity("")
        assert result.complexity_score == pytest.approx(1 / 30)
        assert result.recommended_k == 3

    def test_edge_whitespace_counts_as_tokens(self):
        """Leading and trailing whitespace each add an empty token."""
        padded = estimate_query_complexity("  go to site ")
        assert padded.complexity_score == pytest.approx(5 / 30)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
