"""Model-free text embeddings for query diversity.

The hashing embedder maps character n-grams into a fixed number of buckets,
giving a cheap deterministic stand-in for a semantic embedding model:

    1. Lowercase and strip the text
    2. Count every contiguous character n-gram of length 1, 2 and 3
    3. Bucket each distinct n-gram by the sum of its character codes modulo D
    4. L2-normalize the bucket counts (the all-zero vector is left as is)

Example:
    >>> embedder = HashingNGramEmbedder(dim=128)
    >>> vec = embedder.embed("go to site")
    >>> vec.shape
    (128,)
"""

import logging
from abc import ABC, abstractmethod
from collections import Counter
from typing import List

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_DIM = 128


class Embedder(ABC):
    """Capability interface: text in, fixed-length vector out.

    The selection algorithm only ever talks to this interface, so a trained
    embedding model can replace the hashing embedder without touching it.
    """

    dim: int

    @abstractmethod
    def embed_documents(self, texts: List[str]) -> List[np.ndarray]:
        """Embed a batch of texts, one vector per input text."""

    def embed(self, text: str) -> np.ndarray:
        """Embed a single text."""
        return self.embed_documents([text])[0]

    def __call__(self, texts: List[str]) -> List[np.ndarray]:
        return self.embed_documents(texts)


def l2_normalize(vector: np.ndarray) -> np.ndarray:
    """Scale a vector to unit length, leaving the zero vector untouched."""
    norm = np.linalg.norm(vector)
    if norm == 0:
        return vector
    return vector / norm


class HashingNGramEmbedder(Embedder):
    """Character n-gram hashing embedder.

    Same input always yields the same output: there is no randomness and no
    model. Texts sharing many short character sequences end up with a high
    cosine similarity, which is all the diversity objective needs.

    Attributes:
        dim: Number of hash buckets (embedding dimension)
        ngram_range: Inclusive (min, max) n-gram lengths
    """

    def __init__(self, dim: int = DEFAULT_EMBEDDING_DIM, ngram_range: tuple = (1, 3)):
        """Initialize the embedder.

        Args:
            dim: Embedding dimension, must be positive
            ngram_range: Inclusive (min, max) character n-gram lengths

        Raises:
            ValueError: If dim is not positive or ngram_range is invalid
        """
        if dim <= 0:
            raise ValueError(f"dim must be positive, got {dim}")
        min_n, max_n = ngram_range
        if min_n < 1 or max_n < min_n:
            raise ValueError(f"Invalid ngram_range: {ngram_range}")

        self.dim = dim
        self.ngram_range = (min_n, max_n)

    def _count_ngrams(self, text: str) -> Counter:
        normalized = text.lower().strip()
        min_n, max_n = self.ngram_range
        counts: Counter = Counter()
        for n in range(min_n, max_n + 1):
            for i in range(len(normalized) - n + 1):
                counts[normalized[i:i + n]] += 1
        return counts

    def _bucket(self, gram: str) -> int:
        return sum(ord(char) for char in gram) % self.dim

    def embed(self, text: str) -> np.ndarray:
        """Embed a single text into an L2-normalized vector of length dim.

        Args:
            text: Input text (any length, may be empty)

        Returns:
            float64 vector; all zeros for empty or whitespace-only text
        """
        vector = np.zeros(self.dim, dtype=np.float64)
        for gram, count in self._count_ngrams(text).items():
            vector[self._bucket(gram)] += count
        return l2_normalize(vector)

    def embed_documents(self, texts: List[str]) -> List[np.ndarray]:
        return [self.embed(text) for text in texts]
