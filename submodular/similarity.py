"""Cosine similarity helpers.

Norms are always recomputed, even though the embedders hand out unit vectors,
and any zero-norm vector has similarity 0 with everything.
"""

from typing import List, Sequence

import numpy as np


def cosine_similarity(vec1: np.ndarray, vec2: np.ndarray) -> float:
    """Calculate cosine similarity between two vectors.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Cosine similarity in range [-1, 1], or 0.0 if either vector is zero
    """
    norm1 = np.linalg.norm(vec1)
    norm2 = np.linalg.norm(vec2)

    if norm1 == 0 or norm2 == 0:
        return 0.0

    return float(np.dot(vec1, vec2) / (norm1 * norm2))


def similarity_matrix(embeddings: Sequence[np.ndarray]) -> np.ndarray:
    """Compute the matrix of pairwise cosine similarities.

    Args:
        embeddings: n vectors of equal length

    Returns:
        (n, n) float64 matrix; rows and columns of zero vectors are all 0
    """
    if len(embeddings) == 0:
        return np.zeros((0, 0), dtype=np.float64)

    matrix = np.asarray(embeddings, dtype=np.float64)
    norms = np.linalg.norm(matrix, axis=1)
    safe_norms = np.where(norms == 0, 1.0, norms)
    unit = matrix / safe_norms[:, None]
    return unit @ unit.T


def relevance_scores(query_embedding: np.ndarray, embeddings: Sequence[np.ndarray]) -> List[float]:
    """Cosine similarity of every candidate embedding to the query embedding."""
    return [cosine_similarity(query_embedding, emb) for emb in embeddings]
