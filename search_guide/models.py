"""
Internal types for search-guide module.

These types are used internally after validation has already occurred
at the MCP boundary (server.py). They are simpler dataclasses without
validation logic.
"""

import os
from dataclasses import dataclass
from typing import List, Literal


# ============================================================================
# Configurable Constants
# ============================================================================

SOURCE_MATERIAL_DIR = os.path.join(os.path.dirname(__file__), "source_material")

# Backing files for the two corpora (override to point at a newer guide)
GUIDE_PATH = os.getenv(
    "MIGRATION_GUIDE_PATH",
    os.path.join(SOURCE_MATERIAL_DIR, "migration-guide.md")
)
DATA_GUIDE_PATH = os.getenv(
    "MIGRATION_DATA_GUIDE_PATH",
    os.path.join(SOURCE_MATERIAL_DIR, "migration-guide-data.md")
)

# Minimum RapidFuzz score for a section title to be offered as a suggestion
SUGGESTION_FLOOR = int(os.getenv("MIGRATION_SUGGESTION_FLOOR", "60"))

# Query words must be longer than this to count
MIN_WORD_LENGTH = 2

# Response limits
MAX_SUGGESTIONS = 5
CHARACTER_LIMIT = 25000

GuideCorpus = Literal["guide", "data-guide"]
CORPORA = ("guide", "data-guide")


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class Section:
    """
    A titled, contiguous span of a guide.

    Attributes:
        heading_marker: Literal heading prefix, e.g. "##" or "###"
        title: Heading text without the marker
        body: Raw section text including the heading line, stripped
    """
    heading_marker: str
    title: str
    body: str


@dataclass
class SearchResult:
    """
    A section paired with its relevance for one query.

    Attributes:
        title: Heading marker and title, e.g. "### Tool Invocation Changes"
        content: Full section text
        relevance: Score (always > 0 for returned results)
    """
    title: str
    content: str
    relevance: int


@dataclass(frozen=True)
class ScoringWeights:
    """Per-corpus weights for each relevance signal."""
    title_phrase: int
    title_word: int
    body_phrase: int
    body_occurrence: int


# ============================================================================
# Custom Exceptions
# ============================================================================

class DocumentLoadError(Exception):
    """
    Raised when the backing file of a corpus cannot be read.

    Attributes:
        corpus: Corpus whose document failed to load
        path: File path that was attempted
    """
    def __init__(self, corpus: str, path: str, reason: str = ""):
        self.corpus = corpus
        self.path = path
        message = f"Could not load '{corpus}' document from {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnknownCorpusError(Exception):
    """
    Raised when a search targets a corpus that doesn't exist.

    Attributes:
        corpus: The requested corpus name
        available: Names of the corpora that can be searched
    """
    def __init__(self, corpus: str, available: List[str]):
        self.corpus = corpus
        self.available = available
        super().__init__(f"Corpus '{corpus}' not found")
