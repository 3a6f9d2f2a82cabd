"""Query complexity estimation used to pick the number of variants to select."""

from complexity.estimator import QueryComplexity, estimate_query_complexity

__all__ = ["QueryComplexity", "estimate_query_complexity"]
