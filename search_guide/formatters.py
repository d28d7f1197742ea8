"""
Response formatting for guide search results.

Converts ranked SearchResults into markdown or JSON for MCP client
consumption. Truncation to the caller's limit happens here, not in the
ranker.
"""

import json
from typing import List, Tuple

from .models import CHARACTER_LIMIT, SearchResult

# Header of the markdown listing, per corpus
RESULT_HEADERS = {
    "guide": "Search Results",
    "data-guide": "Data Migration Guide Results",
}

# Static query ideas shown when nothing matched, per corpus
QUERY_SUGGESTIONS = {
    "guide": [
        'API names: "streamText", "useChat", "generateObject"',
        'Features: "tools", "streaming", "messages"',
        'Specific changes: "maxSteps", "message structure", "imports"',
    ],
    "data-guide": [
        'Phases: "Phase 1", "Phase 2", "runtime conversion"',
        'Steps: "conversion functions", "dual write", "schema migration"',
        'Topics: "database", "messages", "v4 to v5", "persisted data"',
    ],
}


def format_results(
    results: List[SearchResult],
    query: str,
    corpus: str,
    limit: int = 3,
    response_format: str = "markdown"
) -> str:
    """
    Format the top search results as markdown or JSON.

    Args:
        results: All ranked results (must be non-empty)
        query: Original query
        corpus: "guide" or "data-guide"
        limit: Number of results to show
        response_format: "markdown" or "json"

    Returns:
        Formatted results
    """
    top_results = results[:limit]

    if response_format == "json":
        return _format_results_json(results, top_results, query, corpus)
    return _format_results_markdown(results, top_results, query, corpus)


def format_no_results(
    query: str,
    corpus: str,
    suggestions: List[Tuple[str, float]],
    response_format: str = "markdown"
) -> str:
    """
    Format the message returned when no section matched.

    Args:
        query: Original query
        corpus: "guide" or "data-guide"
        suggestions: (title, score) tuples of similar section titles
        response_format: "markdown" or "json"

    Returns:
        Formatted message with query ideas
    """
    ideas = QUERY_SUGGESTIONS.get(corpus, [])

    if response_format == "json":
        return json.dumps({
            "error": "no_results",
            "query": query,
            "corpus": corpus,
            "message": f'No results found for "{query}"',
            "did_you_mean": [title for title, _ in suggestions],
            "suggestions": ideas
        }, indent=2)

    output = [f'No results found for "{query}".\n\n']

    if suggestions:
        output.append("**Did you mean?**\n")
        for title, score in suggestions:
            output.append(f"  - {title} (score: {score:.1f})\n")
        output.append("\n")

    output.append("Try searching for:\n")
    output.extend(f"- {idea}\n" for idea in ideas)

    return "".join(output)


def truncate_response(content: str, limit: int = CHARACTER_LIMIT) -> str:
    """Truncate content if it exceeds the character limit."""
    if len(content) <= limit:
        return content

    return (
        f"{content[:limit]}\n\n"
        f"[TRUNCATED - Response exceeds {limit:,} characters. "
        f"Original length: {len(content):,}. "
        f"Try a lower limit or a more specific query.]"
    )


# ============================================================================
# Private Formatting Functions
# ============================================================================

def _format_results_markdown(
    results: List[SearchResult],
    top_results: List[SearchResult],
    query: str,
    corpus: str
) -> str:
    """Format results as a numbered markdown listing."""
    header = RESULT_HEADERS.get(corpus, "Search Results")
    output = [f'# {header} for "{query}"\n\n']
    output.append(
        f"Found {len(results)} relevant section(s). "
        f"Showing top {len(top_results)}:\n\n"
    )
    output.append("---\n\n")

    for index, result in enumerate(top_results, start=1):
        output.append(f"## {index}. {result.title}\n\n")
        output.append(f"{result.content}\n\n")
        output.append("---\n\n")

    return truncate_response("".join(output))


def _format_results_json(
    results: List[SearchResult],
    top_results: List[SearchResult],
    query: str,
    corpus: str
) -> str:
    """Format results as JSON."""
    data = {
        "query": query,
        "corpus": corpus,
        "total": len(results),
        "showing": len(top_results),
        "results": [
            {
                "rank": index,
                "title": result.title,
                "relevance": result.relevance,
                "content": result.content
            }
            for index, result in enumerate(top_results, start=1)
        ]
    }
    return json.dumps(data, indent=2)
