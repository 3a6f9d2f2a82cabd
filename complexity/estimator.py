"""Query complexity estimation for adaptive selection size.

More complex requests benefit from more diverse variants, so the number of
variants to keep (k) grows with an estimated complexity score:

    score = min(1, 0.15 * conjunctions
                   + 0.2  * has_step_markers
                   + 0.15 * has_conditionals
                   + 0.1  * complex_verbs
                   + min(word_count / 30, 0.4))

    k = 3 if score < 0.3, 5 if score < 0.6, else 7
"""

import re
from dataclasses import dataclass

CONJUNCTION_PATTERN = re.compile(r"\b(?:and|then|also|plus|,)\b")
COMPLEX_VERB_PATTERN = re.compile(
    r"\b(?:find|extract|analyze|compare|verify|validate|submit|complete)\b"
)
WHITESPACE_PATTERN = re.compile(r"\s+")
STEP_MARKERS = ("step", "first", "second")
CONDITIONAL_MARKERS = ("if", "when", "after")

CONJUNCTION_WEIGHT = 0.15
STEP_WEIGHT = 0.2
CONDITIONAL_WEIGHT = 0.15
COMPLEX_VERB_WEIGHT = 0.1
WORD_COUNT_DIVISOR = 30
WORD_COUNT_CAP = 0.4

SIMPLE_THRESHOLD = 0.3
MEDIUM_THRESHOLD = 0.6
SIMPLE_K = 3
MEDIUM_K = 5
COMPLEX_K = 7


@dataclass(frozen=True)
class QueryComplexity:
    """Complexity estimate for a query.

    Attributes:
        complexity_score: Score in [0, 1]
        recommended_k: Number of variants to select (3, 5 or 7)
    """
    complexity_score: float
    recommended_k: int


def estimate_query_complexity(query: str) -> QueryComplexity:
    """Estimate how complex a query is and how many variants it deserves.

    Markers are matched case-insensitively. Step and conditional markers are
    substring checks, so "verifying" counts as a conditional ("if"). A comma
    only counts as a conjunction between two word characters ("a,b" but not
    "a, b"). Words are the pieces left after splitting on whitespace runs, so
    "" is one word and edge whitespace adds empty words.

    Args:
        query: Raw user query

    Returns:
        QueryComplexity with score and recommended k
    """
    normalized = query.lower()

    conjunctions = len(CONJUNCTION_PATTERN.findall(normalized))
    has_steps = any(marker in normalized for marker in STEP_MARKERS)
    has_conditionals = any(marker in normalized for marker in CONDITIONAL_MARKERS)
    complex_verbs = len(COMPLEX_VERB_PATTERN.findall(normalized))
    word_count = len(WHITESPACE_PATTERN.split(query))

    score = min(
        1.0,
        conjunctions * CONJUNCTION_WEIGHT
        + (STEP_WEIGHT if has_steps else 0.0)
        + (CONDITIONAL_WEIGHT if has_conditionals else 0.0)
        + complex_verbs * COMPLEX_VERB_WEIGHT
        + min(word_count / WORD_COUNT_DIVISOR, WORD_COUNT_CAP)
    )

    if score < SIMPLE_THRESHOLD:
        recommended_k = SIMPLE_K
    elif score < MEDIUM_THRESHOLD:
        recommended_k = MEDIUM_K
    else:
        recommended_k = COMPLEX_K

    return QueryComplexity(complexity_score=score, recommended_k=recommended_k)
