"""
Search engine wiring for the two migration guides.

A CorpusConfig bundles what differs between the guides (boundary rule,
weights, extra signals). GuideSearchEngine runs the same pipeline for any
config: load document -> segment -> score -> rank.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .cache import DocumentCache, Loader
from .models import (
    DATA_GUIDE_PATH,
    GUIDE_PATH,
    ScoringWeights,
    SearchResult,
    Section,
)
from .ranker import rank
from .scorer import ExtraSignal, code_example_bonus, score_section
from .segmenter import DATA_GUIDE_RULE, GUIDE_RULE, BoundaryRule, split_sections


@dataclass(frozen=True)
class CorpusConfig:
    """Everything that distinguishes one searchable guide from another."""
    name: str
    path: str
    rule: BoundaryRule
    weights: ScoringWeights
    extra_signals: Tuple[ExtraSignal, ...] = field(default_factory=tuple)


GUIDE_CONFIG = CorpusConfig(
    name="guide",
    path=GUIDE_PATH,
    rule=GUIDE_RULE,
    weights=ScoringWeights(
        title_phrase=100,
        title_word=50,
        body_phrase=30,
        body_occurrence=10,
    ),
)

# Procedural guide: title and body hits weigh more, code examples get a bonus
DATA_GUIDE_CONFIG = CorpusConfig(
    name="data-guide",
    path=DATA_GUIDE_PATH,
    rule=DATA_GUIDE_RULE,
    weights=ScoringWeights(
        title_phrase=100,
        title_word=60,
        body_phrase=40,
        body_occurrence=12,
    ),
    extra_signals=(code_example_bonus,),
)

CORPUS_CONFIGS: Dict[str, CorpusConfig] = {
    GUIDE_CONFIG.name: GUIDE_CONFIG,
    DATA_GUIDE_CONFIG.name: DATA_GUIDE_CONFIG,
}


class GuideSearchEngine:
    """
    Keyword search over one guide.

    Sections are rebuilt from the cached document on every call, so a
    search never mutates shared state.
    """

    def __init__(self, config: CorpusConfig, cache: Optional[DocumentCache] = None):
        """
        Args:
            config: Corpus configuration
            cache: Document cache; defaults to a file-backed cache of config.path
        """
        self.config = config
        self.cache = cache or DocumentCache(config.name, config.path)

    @classmethod
    def from_text(cls, config: CorpusConfig, text: str) -> "GuideSearchEngine":
        """Build an engine over an in-memory document."""
        return cls(config, DocumentCache(config.name, config.path, loader=lambda _path: text))

    @classmethod
    def with_loader(cls, config: CorpusConfig, loader: Loader) -> "GuideSearchEngine":
        """Build an engine whose document is read through a custom loader."""
        return cls(config, DocumentCache(config.name, config.path, loader=loader))

    def full_text(self) -> str:
        """Return the whole guide (raises DocumentLoadError if unreadable)."""
        return self.cache.load()

    def sections(self) -> List[Section]:
        """Segment the guide using the corpus boundary rule."""
        return split_sections(self.cache.load(), self.config.rule)

    def search(self, query: str) -> List[SearchResult]:
        """
        Rank the guide's sections against a free-text query.

        Args:
            query: Any string, including empty

        Returns:
            Matching sections, most relevant first (empty if nothing matched)

        Raises:
            DocumentLoadError: If the guide cannot be read
        """
        scored = [
            (section, score_section(
                section,
                query,
                self.config.weights,
                self.config.extra_signals
            ))
            for section in self.sections()
        ]
        return rank(scored)
