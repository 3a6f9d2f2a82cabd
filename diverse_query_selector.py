import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from complexity import QueryComplexity, estimate_query_complexity
from embedding import Embedder, create_embedder
from selection_config import SELECTION_CONFIG_DEFAULT, SelectionConfig
from submodular import (
    GreedySelection,
    compute_selection_diversity,
    create_selector,
    diversity_score,
    relevance_scores,
)

logger = logging.getLogger(__name__)

EventSink = Callable[[str, Dict[str, Any]], None]


@dataclass(frozen=True, eq=False)
class Candidate:
    """One query variant with its embedding and relevance to the original query."""
    index: int
    text: str
    embedding: np.ndarray
    relevance: float


@dataclass
class SelectionResult:
    """Result of a diverse selection.

    Attributes:
        query: The original query
        candidates: All candidates, in input order
        selected_indices: Indices of selected candidates, in selection order
        diversity_score: Mean pairwise dissimilarity of the selected set
        metrics: Selection metrics (empty when metrics are disabled)
    """
    query: str
    candidates: List[Candidate]
    selected_indices: List[int]
    diversity_score: float
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def selected(self) -> List[str]:
        """Selected candidate texts, in selection order."""
        return [self.candidates[i].text for i in self.selected_indices]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a dictionary for JSON serialization."""
        return {
            "query": self.query,
            "candidates": [c.text for c in self.candidates],
            "selected_indices": list(self.selected_indices),
            "selected": self.selected,
            "diversity_score": round(self.diversity_score, 4),
            "metrics": dict(self.metrics),
        }


class DiverseQuerySelector:
    """Selects a small, relevant and mutually dissimilar subset of query variants.

    Given the original user query and a list of textual variants of it (from a
    template or LLM expansion step), the selector embeds everything, scores
    each variant's relevance to the original query and greedily maximizes a
    submodular coverage objective to pick k variants. The result also reports
    how diverse the picked variants are.

    Features:
        - Lazy greedy maximization (same picks as eager greedy, fewer gain evaluations)
        - Adaptive k from the query complexity estimate
        - Swappable embedder (offline hashing by default, Ollama optional)
        - Explicit on/off switch for baseline comparison
        - Optional event sink for telemetry, never consulted for control flow

    Each call owns its own coverage state and queue, so one instance can be
    shared between threads.

    Example:
        >>> selector = DiverseQuerySelector()
        >>> result = selector.select(
        ...     "go to site",
        ...     ["go to site", "Step by step: go to site",
        ...      "go to site. Verify each step before proceeding."],
        ...     k=2
        ... )
        >>> result.selected, result.diversity_score
    """

    def __init__(
        self,
        config: Optional[SelectionConfig] = None,
        embedder: Optional[Embedder] = None,
        event_sink: Optional[EventSink] = None,
    ):
        """Initialize the selector.

        Args:
            config: Selection configuration (uses default if not provided)
            embedder: Embedder to use instead of the one named in the config
            event_sink: Optional callable receiving (event_name, payload)
                after every selection

        Raises:
            ValueError: If configuration parameters are invalid
        """
        self.config = config or SELECTION_CONFIG_DEFAULT
        self.event_sink = event_sink

        self._validate_config()

        self._embedder = embedder or self._initialize_embedder()
        self._selector = create_selector(self.config.strategy)

        logger.info(
            "Initialized DiverseQuerySelector (enabled=%s, strategy=%s, embedder=%s, alpha=%.2f, k=%s)",
            self.config.enabled,
            self.config.strategy,
            type(self._embedder).__name__,
            self.config.alpha,
            self.config.k if self.config.k is not None else "adaptive"
        )

    def _validate_config(self) -> None:
        """Validate selection configuration parameters.

        Raises:
            ValueError: If configuration parameters are invalid
        """
        if not 0.0 <= self.config.alpha <= 1.0:
            raise ValueError(f"alpha must be in [0, 1], got {self.config.alpha}")
        if self.config.embedding_dim <= 0:
            raise ValueError(f"embedding_dim must be positive, got {self.config.embedding_dim}")
        if self.config.strategy not in ("lazy", "eager"):
            raise ValueError(
                f"Unknown selector strategy: '{self.config.strategy}'. "
                f"Available options: 'lazy', 'eager'"
            )

    def _initialize_embedder(self) -> Embedder:
        """Create the embedder named in the configuration."""
        if self.config.embedder == "ollama":
            return create_embedder(
                "ollama",
                model_name=self.config.embedding_model,
                url=self.config.ollama_base_url,
                dim=self.config.ollama_embedding_dim,
                timeout=self.config.embedding_timeout,
            )
        return create_embedder(self.config.embedder, dim=self.config.embedding_dim)

    def _build_candidates(self, query: str, texts: List[str]) -> List[Candidate]:
        vectors = self._embedder.embed_documents([query] + list(texts))
        query_embedding, embeddings = vectors[0], vectors[1:]
        relevance = relevance_scores(query_embedding, embeddings)
        return [
            Candidate(index=i, text=text, embedding=emb, relevance=rel)
            for i, (text, emb, rel) in enumerate(zip(texts, embeddings, relevance))
        ]

    def _resolve_k(self, k: Optional[int], complexity: QueryComplexity) -> int:
        if k is not None:
            return k
        if self.config.k is not None:
            return self.config.k
        return complexity.recommended_k

    def select(
        self,
        query: str,
        candidates: List[str],
        k: Optional[int] = None,
        alpha: Optional[float] = None
    ) -> SelectionResult:
        """Select a diverse yet relevant subset of candidate query variants.

        Args:
            query: The original user query
            candidates: Query variants to choose from
            k: Number of variants to select. If None, the configured k is used,
               or the query complexity estimate when that is None too.
               Values <= 0 select nothing.
            alpha: Relevance weight (0-1); defaults to the configured alpha

        Returns:
            SelectionResult with selected indices in selection order

        Raises:
            ValueError: If alpha is not in [0, 1]
        """
        start_time = time.time()
        alpha = self.config.alpha if alpha is None else alpha
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"alpha must be in [0, 1], got {alpha}")

        complexity = estimate_query_complexity(query)
        final_k = self._resolve_k(k, complexity)

        built = self._build_candidates(query, candidates) if candidates else []
        embeddings = [c.embedding for c in built]

        if self.config.enabled:
            selection = self._selector.select(
                embeddings, [c.relevance for c in built], final_k, alpha
            )
        else:
            count = max(0, min(final_k, len(built)))
            selection = GreedySelection(indices=list(range(count)), shortcut=True)

        selected_embeddings = [embeddings[i] for i in selection.indices]
        score = diversity_score(selected_embeddings)
        latency_ms = round((time.time() - start_time) * 1000, 2)

        metrics: Dict[str, Any] = {}
        if self.config.metrics_enabled:
            diversity = compute_selection_diversity(
                selected_embeddings, [built[i].relevance for i in selection.indices]
            )
            metrics = {
                "avg_relevance": diversity["avg_relevance"],
                "max_pairwise_similarity": diversity["max_pairwise_similarity"],
                "complexity_score": round(complexity.complexity_score, 4),
                "recommended_k": complexity.recommended_k,
                "k_used": final_k,
                "adaptive_k": k is None and self.config.k is None,
                "candidate_count": len(built),
                "selected_count": len(selection.indices),
                "selection_ratio": round(len(selection.indices) / len(built), 3) if built else 0.0,
                "gain_evaluations": selection.gain_evaluations,
                "strategy": self.config.strategy,
                "optimized": self.config.enabled and not selection.shortcut,
                "latency_ms": latency_ms,
            }

        logger.info(
            "Diverse selection complete: selected %d of %d candidates (k=%d, diversity=%.3f, %.2fms)",
            len(selection.indices), len(built), final_k, score, latency_ms
        )

        self._emit_event("diverse_selection_complete", {
            "original_query": query[:100],
            "candidate_count": len(built),
            "selected_count": len(selection.indices),
            "diversity_score": score,
            "duration_ms": latency_ms,
            "alpha": alpha,
            "k_used": final_k,
            "strategy": self.config.strategy,
            "optimized": self.config.enabled,
        })

        return SelectionResult(
            query=query,
            candidates=built,
            selected_indices=selection.indices,
            diversity_score=score,
            metrics=metrics,
        )

    def _emit_event(self, name: str, payload: Dict[str, Any]) -> None:
        """Send an event to the sink; sink failures are logged and ignored."""
        if self.event_sink is None:
            return
        try:
            self.event_sink(name, payload)
        except Exception as e:
            logger.warning("Event sink failed for %s: %s", name, e)


def select(
    query: str,
    candidates: List[str],
    k: Optional[int] = None,
    alpha: Optional[float] = None,
    config: Optional[SelectionConfig] = None
) -> SelectionResult:
    """Select a diverse yet relevant subset of candidates in one call.

    Args:
        query: The original user query
        candidates: Query variants to choose from
        k: Number of variants to select (None = adaptive)
        alpha: Relevance weight (0-1). None uses the config's alpha, which
            is 0.3 for the default config.
        config: Optional configuration (uses default if not provided)

    Returns:
        SelectionResult
    """
    return DiverseQuerySelector(config=config).select(query, candidates, k=k, alpha=alpha)
