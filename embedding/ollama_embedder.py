"""Ollama-backed embedder.

Drop-in replacement for the hashing embedder when a real semantic model is
available. Texts are sent in batches to the Ollama ``/api/embed`` endpoint.
"""

import logging
from typing import List

import httpx
import numpy as np

from .embedder import Embedder, l2_normalize

logger = logging.getLogger(__name__)


class OllamaEmbedder(Embedder):
    """Embedder that calls an Ollama embedding model over HTTP.

    A batch that fails is logged and replaced with zero vectors. Zero vectors
    have similarity 0 with everything, so selection still completes, it just
    loses the signal for the affected candidates.

    Example:
        >>> embedder = OllamaEmbedder(
        ...     model_name="nomic-embed-text",
        ...     url="http://localhost:11434",
        ...     dim=768
        ... )
        >>> vectors = embedder(["Step by step: go to site", "go to site"])
    """

    def __init__(
        self,
        model_name: str,
        url: str,
        dim: int = 768,
        batch_size: int = 32,
        timeout: float = 60.0
    ):
        """Initialize the Ollama embedder.

        Args:
            model_name: Name of the Ollama embedding model
            url: Base URL for Ollama API
            dim: Dimension of the model's vectors, used for zero-filling failures
            batch_size: Number of texts to embed in a single API call
            timeout: HTTP request timeout in seconds

        Raises:
            ValueError: If model_name is empty or dim/batch_size are not positive
        """
        if not model_name or not model_name.strip():
            raise ValueError("model_name cannot be empty")
        if dim <= 0:
            raise ValueError(f"dim must be positive, got {dim}")
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        self.model_name = model_name
        self.url = url.rstrip("/")
        self.dim = dim
        self.batch_size = batch_size
        self.timeout = timeout
        self.api_url = f"{self.url}/api/embed"

        logger.info("Initialized OllamaEmbedder with model=%s, dim=%d", model_name, dim)

    def embed_documents(self, texts: List[str]) -> List[np.ndarray]:
        """Embed texts in batches.

        Args:
            texts: List of text strings to embed

        Returns:
            List of L2-normalized vectors (one per input text)
        """
        if not texts:
            return []

        batches = [
            texts[i:i + self.batch_size]
            for i in range(0, len(texts), self.batch_size)
        ]

        all_embeddings: List[np.ndarray] = []

        with httpx.Client(timeout=self.timeout) as client:
            for i, batch in enumerate(batches):
                try:
                    response = client.post(
                        self.api_url,
                        json={
                            "model": self.model_name,
                            "input": batch
                        }
                    )
                    response.raise_for_status()
                    vectors = self._parse_response(response.json())
                    if len(vectors) != len(batch):
                        raise ValueError(
                            f"Expected {len(batch)} embeddings, got {len(vectors)}"
                        )
                    if any(len(v) != self.dim for v in vectors):
                        raise ValueError(f"Model returned vectors not of dimension {self.dim}")
                    all_embeddings.extend(
                        l2_normalize(np.asarray(v, dtype=np.float64)) for v in vectors
                    )
                except (httpx.HTTPError, ValueError) as e:
                    logger.warning("Error embedding batch %d: %s", i, e)
                    all_embeddings.extend(
                        np.zeros(self.dim, dtype=np.float64) for _ in batch
                    )

        return all_embeddings

    @staticmethod
    def _parse_response(data: dict) -> List[List[float]]:
        if "embeddings" in data:
            embeddings = data["embeddings"]
            if embeddings and isinstance(embeddings[0], list):
                return embeddings
            return [embeddings]
        return [data.get("embedding", [])]
