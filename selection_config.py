import os
from dataclasses import dataclass, field, replace
from typing import Literal, Mapping, Optional

OLLAMA_BASE_URL = "http://localhost:11434"

MODELS = {
    "embeddings": {
        "name": "nomic-embed-text",
        "dim": 768,
    },
}

# Available greedy selectors
SelectorStrategy = Literal[
    "lazy",    # Lazy greedy with priority queue (default)
    "eager",   # Full rescan every round, reference baseline
]

# Available embedders
EmbedderName = Literal[
    "hashing",  # Character n-gram hashing, offline and deterministic
    "ollama",   # Semantic embeddings from an Ollama server
]

@dataclass
class SelectionConfig:
    """Diverse query selection configuration model.

    Attributes:
        enabled: Whether submodular optimization is enabled. When disabled,
            the first k candidates are returned in original order.
        alpha: Weight of the relevance floor (0-1). Higher values favour
            candidates close to the original query over diverse ones.
        k: Number of variants to select. None means adaptive k from the
            query complexity estimate.
        strategy: Greedy selector to use. Options: "lazy", "eager"
        embedder: Embedder to use. Options: "hashing", "ollama"
        embedding_dim: Embedding dimension for the hashing embedder
        ollama_base_url: URL of the Ollama server (ollama embedder only)
        embedding_model: Ollama embedding model name (ollama embedder only)
        ollama_embedding_dim: Vector width of the Ollama model (ollama embedder only)
        embedding_timeout: HTTP timeout in seconds (ollama embedder only)
        metrics_enabled: Whether to attach selection metrics to results
            (relevance, complexity, gain evaluations, latency)

    Example:
        >>> config = SelectionConfig(
        ...     enabled=True,
        ...     alpha=0.3,
        ...     k=None,
        ...     strategy="lazy",
        ...     embedder="hashing",
        ...     embedding_dim=128,
        ...     metrics_enabled=True
        ... )
    """
    enabled: bool = field(default=True)
    alpha: float = field(default=0.3)
    k: Optional[int] = field(default=None)
    strategy: SelectorStrategy = field(default="lazy")
    embedder: EmbedderName = field(default="hashing")
    embedding_dim: int = field(default=128)
    ollama_base_url: str = field(default=OLLAMA_BASE_URL)
    embedding_model: str = field(default=MODELS["embeddings"]["name"])
    ollama_embedding_dim: int = field(default=MODELS["embeddings"]["dim"])
    embedding_timeout: float = field(default=60.0)
    metrics_enabled: bool = field(default=True)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional["SelectionConfig"] = None
    ) -> "SelectionConfig":
        """Build a config from environment variables.

        Recognized variables:
            USE_SUBMODULAR_OPTIMIZATION: "false" disables optimization
            SUBMODULAR_ALPHA: float alpha
            SUBMODULAR_K: int k (empty means adaptive)
            SUBMODULAR_STRATEGY: "lazy" or "eager"

        Args:
            environ: Mapping to read from (defaults to os.environ)
            base: Config to start from (defaults to SELECTION_CONFIG_DEFAULT)

        Returns:
            A new SelectionConfig; neither base nor any global is modified

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        environ = os.environ if environ is None else environ
        overrides = {}

        if environ.get("USE_SUBMODULAR_OPTIMIZATION", "").strip().lower() == "false":
            overrides["enabled"] = False
        if environ.get("SUBMODULAR_ALPHA"):
            overrides["alpha"] = float(environ["SUBMODULAR_ALPHA"])
        if environ.get("SUBMODULAR_K"):
            overrides["k"] = int(environ["SUBMODULAR_K"])
        if environ.get("SUBMODULAR_STRATEGY"):
            overrides["strategy"] = environ["SUBMODULAR_STRATEGY"].strip().lower()

        return replace(base or SELECTION_CONFIG_DEFAULT, **overrides)

SELECTION_CONFIG_DEFAULT = SelectionConfig(
    enabled=True,                # Submodular optimization on
    alpha=0.3,                   # Balance relevance and diversity
    k=None,                      # Adaptive k from query complexity
    strategy="lazy",             # Lazy greedy for fewer gain recomputations
    embedder="hashing",          # Offline, deterministic embeddings
    embedding_dim=128,
    metrics_enabled=True,        # Attach selection metrics by default
)


# Presets for different use cases
SELECTION_CONFIG_BASELINE = SelectionConfig(
    enabled=False,               # No optimization, original order prefix
    alpha=0.3,
    k=None,
    strategy="lazy",
    embedder="hashing",
    embedding_dim=128,
    metrics_enabled=True,        # Keep metrics for baseline comparison
)

SELECTION_CONFIG_RELEVANCE = SelectionConfig(
    enabled=True,
    alpha=0.7,                   # Higher alpha for more relevance focus
    k=None,
    strategy="lazy",
    embedder="hashing",
    embedding_dim=128,
    metrics_enabled=False,       # Minimal overhead
)
