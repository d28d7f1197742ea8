"""
Heading-aware segmentation of markdown guides.

Splits a guide into titled sections in two pure stages:
1. Locate the line-start offset of every boundary heading
2. Slice the text into contiguous ranges between consecutive offsets

Each corpus supplies its own BoundaryRule. The code guide splits at every
heading of depth 2 or more; the data guide only splits at "Phase"/"Step"
checkpoints so finer headings stay inside their procedure step.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern

from .models import Section


@dataclass(frozen=True)
class BoundaryRule:
    """
    Decides which heading lines start a new section.

    Attributes:
        name: Short label used in logs
        boundary: Pattern matching the start of a boundary line (MULTILINE)
        heading: Pattern extracting (marker, title) from a section's first line
    """
    name: str
    boundary: Pattern[str]
    heading: Pattern[str]


GUIDE_RULE = BoundaryRule(
    name="any-subheading",
    boundary=re.compile(r"^#{2,}\s", re.MULTILINE),
    heading=re.compile(r"^(#{2,})\s+(.+)$"),
)

DATA_GUIDE_RULE = BoundaryRule(
    name="phase-or-step",
    boundary=re.compile(r"^#{2,3}\s+(?:Phase|Step)\s+", re.MULTILINE),
    heading=re.compile(r"^(#{2,3})\s+(.+)$"),
)


def find_boundaries(text: str, rule: BoundaryRule) -> List[int]:
    """Return the offsets of every line that starts a section, in order."""
    return [match.start() for match in rule.boundary.finditer(text)]


def slice_chunks(text: str, offsets: List[int]) -> List[str]:
    """
    Cut text into the ranges [offsets[i], offsets[i+1]).

    Text before the first offset is not part of any chunk.
    """
    ends = offsets[1:] + [len(text)]
    return [text[start:end] for start, end in zip(offsets, ends)]


def parse_chunk(chunk: str, rule: BoundaryRule) -> Optional[Section]:
    """
    Turn one raw chunk into a Section.

    Returns None for blank chunks and for chunks whose first line is not
    a heading of the depth the rule accepts.
    """
    if not chunk.strip():
        return None

    first_line = chunk.split("\n", 1)[0]
    heading_match = rule.heading.match(first_line)
    if not heading_match:
        return None

    return Section(
        heading_marker=heading_match.group(1),
        title=heading_match.group(2).strip(),
        body=chunk.strip(),
    )


def split_sections(text: str, rule: BoundaryRule) -> List[Section]:
    """
    Partition a guide into sections at the rule's heading boundaries.

    Args:
        text: Raw markdown document
        rule: Boundary rule of the corpus

    Returns:
        Sections in document order (empty if no boundary heading exists)
    """
    sections = []
    for chunk in slice_chunks(text, find_boundaries(text, rule)):
        section = parse_chunk(chunk, rule)
        if section is not None:
            sections.append(section)
    return sections
