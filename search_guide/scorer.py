"""
Keyword relevance scoring for guide sections.

One scorer serves both corpora. Each corpus passes a ScoringWeights table
and, optionally, extra signals (such as the code-example bonus of the data
guide). Signals are additive:

- exact query phrase in the title
- each query word in the title
- exact query phrase in the body
- every occurrence of each query word in the body

Matching is substring-based: "call" also counts inside "toolCall" and
"recall".
"""

from typing import Callable, List, Sequence

from .models import MIN_WORD_LENGTH, Section, ScoringWeights

ExtraSignal = Callable[[Section], int]

CODE_FENCE = "```"
CODE_EXAMPLE_BONUS = 15


def normalize_query(query: str) -> str:
    """Lower-case and trim the query for phrase matching."""
    # Stripped, unlike a bare lower-case: "abc d " still phrase-matches "abc d"
    return query.lower().strip()


def query_words(query: str) -> List[str]:
    """
    Split a query into scoring words.

    Words of MIN_WORD_LENGTH characters or fewer are dropped. Duplicates
    are kept, so a repeated word counts once per repetition.
    """
    return [word for word in query.lower().split() if len(word) > MIN_WORD_LENGTH]


def count_occurrences(text: str, word: str) -> int:
    """Count non-overlapping literal occurrences of word in text."""
    if not word:
        return 0
    return text.count(word)


def code_example_bonus(section: Section) -> int:
    """Bonus for sections that carry a fenced code example."""
    return CODE_EXAMPLE_BONUS if CODE_FENCE in section.body else 0


def score_section(
    section: Section,
    query: str,
    weights: ScoringWeights,
    extra_signals: Sequence[ExtraSignal] = ()
) -> int:
    """
    Compute the relevance of one section for one query.

    Args:
        section: Section to score
        query: Raw query string as supplied by the caller
        weights: Corpus weights table
        extra_signals: Additional per-section signals; they only apply to
            sections that already matched the query

    Returns:
        Non-negative relevance score (0 means "not relevant")
    """
    phrase = normalize_query(query)
    # Too short to match anything
    if len(phrase) <= MIN_WORD_LENGTH:
        return 0
    words = query_words(query)

    title_lower = section.title.lower()
    body_lower = section.body.lower()
    relevance = 0

    if phrase in title_lower:
        relevance += weights.title_phrase

    for word in words:
        if word in title_lower:
            relevance += weights.title_word

    if phrase in body_lower:
        relevance += weights.body_phrase

    for word in words:
        relevance += weights.body_occurrence * count_occurrences(body_lower, word)

    if relevance == 0:
        return 0

    for signal in extra_signals:
        relevance += signal(section)

    return relevance
