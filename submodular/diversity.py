"""Diversity metrics for a selected set of query variants."""

from typing import Dict, List, Sequence

import numpy as np

from .similarity import cosine_similarity


def pairwise_similarities(embeddings: Sequence[np.ndarray]) -> List[float]:
    """Cosine similarity of every pair (i < j), in row-major order."""
    similarities = []
    for i in range(len(embeddings)):
        for j in range(i + 1, len(embeddings)):
            similarities.append(cosine_similarity(embeddings[i], embeddings[j]))
    return similarities


def diversity_score(embeddings: Sequence[np.ndarray]) -> float:
    """Mean pairwise dissimilarity (1 - cosine) of a set of embeddings.

    Args:
        embeddings: Embeddings of the selected items

    Returns:
        Mean of 1 - cos(e_i, e_j) over all pairs i < j, or 0.0 for fewer
        than two items
    """
    similarities = pairwise_similarities(embeddings)
    if not similarities:
        return 0.0
    return sum(1.0 - sim for sim in similarities) / len(similarities)


def compute_selection_diversity(
    embeddings: Sequence[np.ndarray],
    relevance: Sequence[float]
) -> Dict[str, float]:
    """Compute diversity metrics for a selected set.

    Args:
        embeddings: Embeddings of the selected items
        relevance: Relevance of each selected item to the original query

    Returns:
        Dictionary with diversity metrics:
            - diversity_score: Mean pairwise dissimilarity
            - avg_pairwise_similarity: Mean cosine similarity between pairs
            - max_pairwise_similarity: Highest similarity between any pair
            - avg_relevance: Mean relevance of the selected items
    """
    similarities = pairwise_similarities(embeddings)
    avg_relevance = sum(relevance) / len(relevance) if len(relevance) else 0.0

    if not similarities:
        return {
            "diversity_score": 0.0,
            "avg_pairwise_similarity": 0.0,
            "max_pairwise_similarity": 0.0,
            "avg_relevance": round(avg_relevance, 4)
        }

    return {
        "diversity_score": round(diversity_score(embeddings), 4),
        "avg_pairwise_similarity": round(sum(similarities) / len(similarities), 4),
        "max_pairwise_similarity": round(max(similarities), 4),
        "avg_relevance": round(avg_relevance, 4)
    }
