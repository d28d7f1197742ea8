"""
Ordering of scored sections into search results.
"""

from typing import Iterable, List, Tuple

from .models import Section, SearchResult


def rank(scored: Iterable[Tuple[Section, int]]) -> List[SearchResult]:
    """
    Drop irrelevant sections and order the rest by relevance.

    Args:
        scored: (section, relevance) pairs in document order

    Returns:
        Results with relevance > 0, highest first. Ties keep document
        order (sorted() is stable). No truncation happens here.
    """
    results = [
        SearchResult(
            title=f"{section.heading_marker} {section.title}",
            content=section.body,
            relevance=relevance
        )
        for section, relevance in scored
        if relevance > 0
    ]
    return sorted(results, key=lambda result: result.relevance, reverse=True)
