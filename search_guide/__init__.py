"""
Search Guide - Keyword search over the AI SDK 5 migration guides.

Public API for searching the code migration guide ("guide") and the data
migration guide ("data-guide"). Each guide is read once per process and
split into heading-delimited sections that are ranked against the query.
"""

from typing import Dict, List, Literal

from .engine import CORPUS_CONFIGS, CorpusConfig, GuideSearchEngine
from .formatters import format_no_results, format_results
from .matcher import TitleMatcher
from .models import (
    CORPORA,
    DocumentLoadError,
    GuideCorpus,
    SearchResult,
    Section,
    UnknownCorpusError,
)

__all__ = [
    'search',
    'search_guide',
    'search_data_guide',
    'search_documentation',
    'get_engine',
    'get_full_guide',
    'get_full_data_guide',
    'GuideSearchEngine',
    'CorpusConfig',
    'SearchResult',
    'Section',
    'DocumentLoadError',
    'UnknownCorpusError',
]

# One engine (and so one document cache) per corpus for the process lifetime
_engines: Dict[str, GuideSearchEngine] = {
    name: GuideSearchEngine(config) for name, config in CORPUS_CONFIGS.items()
}


def get_engine(corpus: str) -> GuideSearchEngine:
    """
    Return the process-wide engine of a corpus.

    Raises:
        UnknownCorpusError: If corpus is not "guide" or "data-guide"
    """
    if corpus not in _engines:
        raise UnknownCorpusError(corpus, list(CORPORA))
    return _engines[corpus]


def search(corpus: GuideCorpus, query: str) -> List[SearchResult]:
    """
    Rank the sections of a guide against a query.

    Args:
        corpus: "guide" or "data-guide"
        query: Free-text query (any string, including empty)

    Returns:
        Sections with relevance > 0, highest first; ties in document order

    Raises:
        UnknownCorpusError: If the corpus doesn't exist
        DocumentLoadError: If the guide file cannot be read
    """
    return get_engine(corpus).search(query)


def search_guide(query: str) -> List[SearchResult]:
    """Search the code migration guide (h2, h3, h4 are separate results)."""
    return search("guide", query)


def search_data_guide(query: str) -> List[SearchResult]:
    """Search the data migration guide (split at Phase/Step headings only)."""
    return search("data-guide", query)


def get_full_guide() -> str:
    return get_engine("guide").full_text()


def get_full_data_guide() -> str:
    return get_engine("data-guide").full_text()


async def search_documentation(
    corpus: GuideCorpus,
    query: str,
    limit: int = 3,
    response_format: Literal["markdown", "json"] = "markdown"
) -> str:
    """
    Search a guide and format the top results for an MCP client.

    This is the main entry point for the search-guide module. It runs the
    search, cuts the ranked list to the requested limit, and builds a
    distinct no-results message (with title suggestions) when nothing
    matched.

    Args:
        corpus: "guide" or "data-guide"
        query: Free-text query
        limit: Number of results to show (1-5 at the MCP boundary)
        response_format: Output format - "markdown" or "json"

    Returns:
        Formatted search results or no-results message

    Raises:
        UnknownCorpusError: If the corpus doesn't exist
        DocumentLoadError: If the guide file cannot be read

    Example:
        >>> result = await search_documentation("guide", "maxSteps", limit=2)
        >>> print(result)
    """
    engine = get_engine(corpus)
    results = engine.search(query)

    if not results:
        suggestions = TitleMatcher(engine.sections()).suggest(query)
        return format_no_results(query, corpus, suggestions, response_format)

    return format_results(results, query, corpus, limit, response_format)
