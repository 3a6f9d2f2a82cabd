"""Text embedders for diverse query selection.

This package provides the ``Embedder`` capability interface and two
implementations:
- HashingNGramEmbedder: deterministic, model-free character n-gram hashing
- OllamaEmbedder: semantic embeddings from an Ollama server

Example:
    >>> from embedding import create_embedder
    >>> embedder = create_embedder("hashing", dim=128)
    >>> vectors = embedder(["go to site", "Step by step: go to site"])
"""

from embedding.embedder import (
    DEFAULT_EMBEDDING_DIM,
    Embedder,
    HashingNGramEmbedder,
    l2_normalize,
)
from embedding.ollama_embedder import OllamaEmbedder

__all__ = [
    "DEFAULT_EMBEDDING_DIM",
    "Embedder",
    "HashingNGramEmbedder",
    "OllamaEmbedder",
    "l2_normalize",
    "create_embedder",
]


def create_embedder(name: str = "hashing", **kwargs) -> Embedder:
    """Create an embedder by name.

    Args:
        name: Embedder to use. Options:
            - "hashing": HashingNGramEmbedder (dim=128)
            - "ollama": OllamaEmbedder (requires model_name and url)
        **kwargs: Passed to the embedder constructor

    Returns:
        Embedder instance

    Raises:
        ValueError: If the embedder name is not recognized
    """
    name = name.lower().strip()

    if name == "hashing":
        return HashingNGramEmbedder(**kwargs)
    elif name == "ollama":
        return OllamaEmbedder(**kwargs)
    else:
        raise ValueError(
            f"Unknown embedder: '{name}'. "
            f"Available options: 'hashing', 'ollama'"
        )
