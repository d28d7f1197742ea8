#!/usr/bin/env python3
"""
Tests for the search_guide module.

Covers segmentation, scoring, ranking and the document cache with small
in-memory guides, plus a few checks against the bundled guides.

Run with: pytest test_search_guide.py
"""

import asyncio
import json

import pytest

from search_guide import (
    DocumentLoadError,
    UnknownCorpusError,
    get_full_data_guide,
    get_full_guide,
    search,
    search_data_guide,
    search_documentation,
    search_guide,
)
from search_guide.cache import DocumentCache
from search_guide.engine import DATA_GUIDE_CONFIG, GUIDE_CONFIG, GuideSearchEngine
from search_guide.formatters import format_no_results, format_results, truncate_response
from search_guide.matcher import TitleMatcher
from search_guide.models import Section, SearchResult
from search_guide.ranker import rank
from search_guide.scorer import (
    count_occurrences,
    query_words,
    score_section,
)
from search_guide.segmenter import (
    DATA_GUIDE_RULE,
    GUIDE_RULE,
    find_boundaries,
    slice_chunks,
    split_sections,
)


GUIDE_DOC = """# Migration Guide

Intro text that is never searched.

## Messages

About messages.

### Tool Invocation Structure Changes

Use toolInvocation here. toolInvocation again. And toolInvocation.

#### Tool State Names

States changed.
"""

STREAMING_DOC = """## Streaming
Streaming basics.
### Streaming Protocol
Protocol uses streaming SSE.
#### Streaming Parts
Parts of the stream.
"""

DATA_DOC = """# Data Guide

## Overview

Intro.

## Phase 5: Data Migration

Move the data.

#### Backfill Details

Batch the backfill.

### Step 1: Verify

Check counts.
"""


# ============================================================================
# Segmenter
# ============================================================================

def test_guide_splits_at_every_subheading():
    sections = split_sections(GUIDE_DOC, GUIDE_RULE)

    assert [(s.heading_marker, s.title) for s in sections] == [
        ("##", "Messages"),
        ("###", "Tool Invocation Structure Changes"),
        ("####", "Tool State Names"),
    ]
    assert sections[1].body.startswith("### Tool Invocation Structure Changes")
    assert sections[2].body == "#### Tool State Names\n\nStates changed."


def test_content_before_first_heading_is_dropped():
    sections = split_sections(GUIDE_DOC, GUIDE_RULE)

    assert all("Intro text" not in s.body for s in sections)
    assert all(s.title != "Migration Guide" for s in sections)


def test_chunks_cover_document_from_first_heading():
    offsets = find_boundaries(GUIDE_DOC, GUIDE_RULE)
    chunks = slice_chunks(GUIDE_DOC, offsets)

    assert "".join(chunks) == GUIDE_DOC[GUIDE_DOC.index("## Messages"):]


def test_document_without_headings_has_no_sections():
    assert split_sections("Just some prose.\n\n# Only a title\n", GUIDE_RULE) == []
    assert split_sections("", GUIDE_RULE) == []
    assert split_sections("", DATA_GUIDE_RULE) == []


def test_data_guide_keeps_level_four_heading_inside_phase():
    sections = split_sections(DATA_DOC, DATA_GUIDE_RULE)

    assert [s.title for s in sections] == ["Phase 5: Data Migration", "Step 1: Verify"]
    assert [s.heading_marker for s in sections] == ["##", "###"]
    assert "#### Backfill Details" in sections[0].body
    assert "Step 1" not in sections[0].body


def test_data_guide_ignores_non_procedural_headings():
    doc = (
        "## Phase 1: Runtime Conversion\n\nConvert.\n\n"
        "### Type Guards\n\nGuard.\n\n"
        "#### Phase 6: Deep heading\n\nNested.\n\n"
        "### Stepping Stones\n\nNot a step.\n"
    )

    sections = split_sections(doc, DATA_GUIDE_RULE)

    assert len(sections) == 1
    assert "### Type Guards" in sections[0].body
    assert "#### Phase 6: Deep heading" in sections[0].body
    assert "### Stepping Stones" in sections[0].body


# ============================================================================
# Scorer
# ============================================================================

def test_query_words_drop_short_words_and_keep_duplicates():
    assert query_words("Tool tool ab a") == ["tool", "tool"]
    assert query_words("") == []


def test_count_occurrences_is_substring_based():
    assert count_occurrences("recall toolcall call", "call") == 3
    assert count_occurrences("aaaa", "aa") == 2


def test_body_occurrences_are_counted():
    section = split_sections(GUIDE_DOC, GUIDE_RULE)[1]

    score = score_section(section, "toolInvocation", GUIDE_CONFIG.weights)

    # body phrase (30) + 3 occurrences (3 x 10)
    assert score == 60


def test_title_signals():
    section = Section("##", "Streaming", "## Streaming\nStreaming basics.")

    score = score_section(section, "streaming", GUIDE_CONFIG.weights)

    # title phrase + title word + body phrase + 2 occurrences
    assert score == 100 + 50 + 30 + 20


def test_data_guide_weights():
    section = Section("###", "Step 1: Verify", "### Step 1: Verify\n\nCheck counts.")

    score = score_section(section, "Step 1", DATA_GUIDE_CONFIG.weights, DATA_GUIDE_CONFIG.extra_signals)

    assert score == 100 + 60 + 40 + 12


def test_code_example_bonus_applies_to_data_guide_only():
    plain = Section("###", "Step 2: Dual Write", "### Step 2: Dual Write\n\nWrite both formats.")
    coded = Section(
        "###",
        "Step 2: Dual Write",
        "### Step 2: Dual Write\n\nWrite both formats.\n\n```ts\nsave()\n```"
    )

    data_plain = score_section(plain, "dual write", DATA_GUIDE_CONFIG.weights, DATA_GUIDE_CONFIG.extra_signals)
    data_coded = score_section(coded, "dual write", DATA_GUIDE_CONFIG.weights, DATA_GUIDE_CONFIG.extra_signals)
    guide_plain = score_section(plain, "dual write", GUIDE_CONFIG.weights, GUIDE_CONFIG.extra_signals)
    guide_coded = score_section(coded, "dual write", GUIDE_CONFIG.weights, GUIDE_CONFIG.extra_signals)

    assert data_coded - data_plain == 15
    assert guide_coded == guide_plain


def test_code_example_bonus_needs_a_query_match():
    coded = Section("###", "Step 3: Backfill", "### Step 3: Backfill\n\n```sql\nUPDATE x\n```")

    assert score_section(coded, "zebra", DATA_GUIDE_CONFIG.weights, DATA_GUIDE_CONFIG.extra_signals) == 0


def test_short_and_empty_queries_score_zero():
    section = Section("##", "A big heading", "## A big heading\n\na b c")

    assert score_section(section, "a", GUIDE_CONFIG.weights) == 0
    assert score_section(section, "", GUIDE_CONFIG.weights) == 0
    assert score_section(section, "   ", GUIDE_CONFIG.weights) == 0


def test_query_is_matched_literally():
    section = Section("##", "Languages", "## Languages\n\nc++ and c++ again")

    # "c++" is not treated as a regex
    assert score_section(section, "c++", GUIDE_CONFIG.weights) == 30 + 20


def test_surrounding_whitespace_does_not_block_phrase_match():
    section = Section("##", "Other", "## Other\n\nabc d")

    assert score_section(section, "abc d ", GUIDE_CONFIG.weights) == 30 + 10
    assert score_section(section, "  abc d", GUIDE_CONFIG.weights) == 30 + 10


# ============================================================================
# Ranker and engine
# ============================================================================

def test_rank_filters_and_keeps_document_order_on_ties():
    first = Section("##", "One", "## One")
    second = Section("###", "Two", "### Two")
    third = Section("##", "Three", "## Three")
    fourth = Section("####", "Four", "#### Four")

    results = rank([(first, 10), (second, 0), (third, 30), (fourth, 10)])

    assert [r.title for r in results] == ["## Three", "## One", "#### Four"]
    assert [r.relevance for r in results] == [30, 10, 10]


def test_search_returns_each_heading_level_separately():
    engine = GuideSearchEngine.from_text(GUIDE_CONFIG, STREAMING_DOC)

    results = engine.search("streaming")

    assert [r.title for r in results] == [
        "## Streaming",
        "### Streaming Protocol",
        "#### Streaming Parts",
    ]
    assert [r.relevance for r in results] == [200, 200, 190]


def test_search_scenario_tool_invocation():
    engine = GuideSearchEngine.from_text(GUIDE_CONFIG, GUIDE_DOC)

    results = engine.search("toolInvocation")

    assert len(results) == 1
    assert results[0].title == "### Tool Invocation Structure Changes"
    assert results[0].relevance >= 30


def test_search_single_character_query_is_empty():
    engine = GuideSearchEngine.from_text(GUIDE_CONFIG, GUIDE_DOC)

    assert engine.search("a") == []
    assert engine.search("") == []


def test_data_guide_step_is_its_own_result():
    engine = GuideSearchEngine.from_text(DATA_GUIDE_CONFIG, DATA_DOC)

    results = engine.search("Step 1")

    assert [r.title for r in results] == ["### Step 1: Verify"]
    assert results[0].relevance == 212
    assert results[0].content == "### Step 1: Verify\n\nCheck counts."


def test_search_is_repeatable():
    engine = GuideSearchEngine.from_text(GUIDE_CONFIG, STREAMING_DOC)

    assert engine.search("stream protocol") == engine.search("stream protocol")


def test_search_does_not_mutate_document():
    engine = GuideSearchEngine.from_text(GUIDE_CONFIG, GUIDE_DOC)

    engine.search("tool")

    assert engine.full_text() == GUIDE_DOC


# ============================================================================
# Document cache
# ============================================================================

def test_cache_reads_document_once():
    calls = []

    def loader(path):
        calls.append(path)
        return GUIDE_DOC

    engine = GuideSearchEngine.with_loader(GUIDE_CONFIG, loader)
    engine.search("tool")
    engine.search("messages")

    assert calls == [GUIDE_CONFIG.path]
    assert engine.cache.is_loaded


def test_cache_does_not_store_failed_load():
    attempts = []

    def flaky_loader(path):
        attempts.append(path)
        if len(attempts) == 1:
            raise FileNotFoundError(path)
        return GUIDE_DOC

    cache = DocumentCache("guide", "/missing/guide.md", loader=flaky_loader)

    with pytest.raises(DocumentLoadError) as exc_info:
        cache.load()

    assert exc_info.value.corpus == "guide"
    assert exc_info.value.path == "/missing/guide.md"
    assert not cache.is_loaded
    assert cache.load() == GUIDE_DOC
    assert len(attempts) == 2


def test_missing_file_fails_search(tmp_path):
    missing = str(tmp_path / "nope.md")
    engine = GuideSearchEngine(GUIDE_CONFIG, DocumentCache("guide", missing))

    with pytest.raises(DocumentLoadError):
        engine.search("tool")


def test_undecodable_file_raises_load_error(tmp_path):
    path = tmp_path / "guide.md"
    path.write_bytes(b"## Title\n\n\xff\xfe not utf-8")
    cache = DocumentCache("guide", str(path))

    with pytest.raises(DocumentLoadError) as exc_info:
        cache.load()

    assert exc_info.value.path == str(path)
    assert not cache.is_loaded


def test_file_loader_reads_utf8(tmp_path):
    path = tmp_path / "guide.md"
    path.write_text("## Café\n\nCrème brûlée.\n", encoding="utf-8")
    engine = GuideSearchEngine(GUIDE_CONFIG, DocumentCache("guide", str(path)))

    results = engine.search("crème")

    assert [r.title for r in results] == ["## Café"]


# ============================================================================
# Matcher and formatters
# ============================================================================

def test_title_matcher_suggests_close_titles():
    sections = [
        Section("###", "useChat Changes", "### useChat Changes"),
        Section("###", "StreamData Removal", "### StreamData Removal"),
        Section("####", "useChat Changes", "#### useChat Changes"),
    ]
    matcher = TitleMatcher(sections)

    suggestions = matcher.suggest("usechat chnages")

    assert suggestions[0][0] == "useChat Changes"
    assert [title for title, _ in suggestions].count("useChat Changes") == 1
    assert matcher.suggest("") == []
    assert matcher.suggest("zzzz") == []


def test_format_results_markdown():
    results = [
        SearchResult("## Streaming", "## Streaming\nbody", 200),
        SearchResult("### Streaming Protocol", "### Streaming Protocol\nbody", 200),
        SearchResult("#### Streaming Parts", "#### Streaming Parts\nbody", 190),
    ]

    text = format_results(results, "streaming", "guide", limit=2)

    assert text.startswith('# Search Results for "streaming"')
    assert "Found 3 relevant section(s). Showing top 2:" in text
    assert "## 1. ## Streaming" in text
    assert "## 2. ### Streaming Protocol" in text
    assert "Streaming Parts" not in text


def test_format_results_json():
    results = [SearchResult("### Step 1: Verify", "### Step 1: Verify\n\nCheck counts.", 212)]

    data = json.loads(format_results(results, "Step 1", "data-guide", limit=3, response_format="json"))

    assert data["corpus"] == "data-guide"
    assert data["total"] == 1
    assert data["showing"] == 1
    assert data["results"][0] == {
        "rank": 1,
        "title": "### Step 1: Verify",
        "relevance": 212,
        "content": "### Step 1: Verify\n\nCheck counts.",
    }


def test_format_no_results():
    guide_text = format_no_results("xyz", "guide", [("useChat Changes", 90.0)])
    data_text = format_no_results("xyz", "data-guide", [])

    assert guide_text.startswith('No results found for "xyz".')
    assert "**Did you mean?**" in guide_text
    assert "useChat Changes" in guide_text
    assert '"streamText"' in guide_text
    assert "Did you mean" not in data_text
    assert '"dual write"' in data_text


def test_truncate_response():
    assert truncate_response("short", limit=10) == "short"
    assert truncate_response("x" * 20, limit=10).startswith("x" * 10 + "\n\n[TRUNCATED")


# ============================================================================
# Bundled guides and public API
# ============================================================================

def test_bundled_guide_search():
    results = search_guide("toolInvocation")

    assert results
    assert results[0].title == "### Tool Invocation Structure Changes"
    relevances = [r.relevance for r in results]
    assert relevances == sorted(relevances, reverse=True)


def test_bundled_data_guide_search():
    results = search_data_guide("dual write")

    assert results
    assert results[0].title == "### Step 2: Dual Write"
    assert all(r.title.split(" ", 1)[1].startswith(("Phase", "Step")) for r in results)


def test_bundled_full_text():
    assert get_full_guide().startswith("# Migrate AI SDK 4.x to 5.0")
    assert get_full_data_guide().startswith("# Migrating Persisted Messages")


def test_unknown_corpus():
    with pytest.raises(UnknownCorpusError) as exc_info:
        search("faq", "tools")

    assert exc_info.value.available == ["guide", "data-guide"]


def test_search_documentation_formats_results():
    text = asyncio.run(search_documentation("guide", "maxTokens", limit=1))

    assert text.startswith('# Search Results for "maxTokens"')
    assert "Showing top 1:" in text


def test_search_documentation_no_results():
    text = asyncio.run(search_documentation("data-guide", "kubernetes"))

    assert text.startswith('No results found for "kubernetes".')
    assert "Try searching for:" in text
