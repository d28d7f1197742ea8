"""
Section title suggestions for queries that matched nothing.

Keyword search is exact (substring based), so a misspelled query like
"usechta" returns no results. Rather than changing the search itself, the
no-results message lists the section titles closest to the query so the
caller can retry with a better term.

Uses RapidFuzz for speed - section titles are short strings, no embedding
model needed.
"""

from typing import List, Tuple

from rapidfuzz import fuzz, process, utils

from .models import MAX_SUGGESTIONS, MIN_WORD_LENGTH, SUGGESTION_FLOOR, Section


class TitleMatcher:
    """
    Suggests section titles that resemble a query.

    Titles are deduplicated (guides repeat headings such as "Before" /
    "After") while keeping document order.
    """

    def __init__(self, sections: List[Section]):
        """
        Args:
            sections: Sections of one guide, in document order
        """
        self._titles = list(dict.fromkeys(section.title for section in sections))

    def suggest(
        self,
        query: str,
        limit: int = MAX_SUGGESTIONS,
        floor: float = SUGGESTION_FLOOR
    ) -> List[Tuple[str, float]]:
        """
        Find the titles most similar to the query.

        Args:
            query: Query that produced no results
            limit: Maximum number of suggestions
            floor: Minimum WRatio score (0-100) for a title to be suggested

        Returns:
            List of (title, score) tuples, best first
        """
        if not self._titles or len(query.strip()) <= MIN_WORD_LENGTH:
            return []

        results = process.extract(
            query,
            self._titles,
            scorer=fuzz.WRatio,
            processor=utils.default_process,
            limit=limit,
            score_cutoff=floor
        )
        return [(title, score) for title, score, _ in results]
