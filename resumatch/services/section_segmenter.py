"""Heading-based segmentation of normalized resume text.

A line is a heading when, after lower-casing, collapsing whitespace and
dropping a trailing colon, it equals one of the heading synonyms or is a short
line containing one (contact details and "Label: value" lines excepted).
Short all-uppercase lines ("PROJECTS", "VOLUNTEER WORK") also delimit
sections even when they are not in the vocabulary. A section's body runs
from the line after its heading up to the line before the next heading, or
the end of the text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from resumatch.utils.vocabulary import CORE_SECTIONS, HEADING_TERMS, TECH_TERMS

# Longer lines that merely mention a heading term are content, not headings
MAX_HEADING_WORDS = 5
MAX_UPPERCASE_HEADING_WORDS = 4

_UPPERCASE_HEADING = re.compile(r"^[A-Z][A-Z &/]{2,}[A-Z]$")
# Contact details and "Label: value" lines only mention a heading term
_INLINE_CONTENT = re.compile(r"@|://|\bwww\.|\b[\w-]+\.(?:com|org|net|io|dev|me)\b|:\s*\S")

OTHER_SECTION = "other"


@dataclass(frozen=True)
class SectionSpan:
    """Body line range of a section, ``start`` inclusive, ``end`` exclusive."""

    name: str
    heading_line: int
    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start


def normalize_heading(line: str) -> str:
    """Lower-case, collapse internal whitespace and strip a trailing colon."""
    collapsed = " ".join(line.split()).lower()
    return collapsed.rstrip(":").strip()


def _classify_heading(line: str) -> tuple[str | None, bool]:
    """Section a line introduces and whether it equals a heading synonym."""
    key = normalize_heading(line)
    if not key:
        return None, False

    for term, section in HEADING_TERMS:
        if key == term:
            return section, True

    words = key.split()
    if len(words) <= MAX_HEADING_WORDS and not _INLINE_CONTENT.search(key):
        for term, section in HEADING_TERMS:
            if re.search(rf"(?<![a-z]){re.escape(term)}(?![a-z])", key):
                return section, False

    stripped = line.strip().rstrip(":").strip()
    if (
        len(stripped.split()) <= MAX_UPPERCASE_HEADING_WORDS
        and _UPPERCASE_HEADING.match(stripped)
        and key not in TECH_TERMS
    ):
        return OTHER_SECTION, False

    return None, False


def match_heading(line: str) -> str | None:
    """Return the section a heading line introduces, or None for content lines."""
    return _classify_heading(line)[0]


def is_heading_line(line: str) -> bool:
    """True when the line names a known section heading."""
    section = match_heading(line)
    return section is not None and section != OTHER_SECTION


def segment_sections(lines: list[str]) -> dict[str, SectionSpan]:
    """Locate heading-delimited sections.

    Args:
        lines: Normalized text split into lines.

    Returns:
        dict: Section name to span, in document order. When a section heading
            occurs more than once, the first line that is exactly a heading
            synonym is kept, else the first line containing one. Delimiting
            headings outside the vocabulary are not reported.
    """
    headings: list[tuple[int, str, bool]] = []
    for index, line in enumerate(lines):
        section, exact = _classify_heading(line)
        if section is not None:
            headings.append((index, section, exact))

    chosen: dict[str, tuple[int, bool]] = {}
    for position, (_, section, exact) in enumerate(headings):
        if section == OTHER_SECTION:
            continue
        current = chosen.get(section)
        if current is None or (exact and not current[1]):
            chosen[section] = (position, exact)

    spans: dict[str, SectionSpan] = {}
    for position, _ in sorted(chosen.values()):
        index, section, _ = headings[position]
        end = headings[position + 1][0] if position + 1 < len(headings) else len(lines)
        spans[section] = SectionSpan(name=section, heading_line=index, start=index + 1, end=end)
    return spans


def section_body(lines: list[str], span: SectionSpan | None) -> str:
    """Join a span's lines back into text; no span means an empty body."""
    if span is None or span.is_empty:
        return ""
    return "\n".join(lines[span.start:span.end]).strip()


def detect_section_names(text: str) -> list[str]:
    """Sections whose heading synonyms occur anywhere in the text.

    Coarser than ``segment_sections``: used to describe a document's
    structure, not to cut it.
    """
    lowered = " ".join(text.lower().split())
    found: list[str] = []
    for term, section in HEADING_TERMS:
        if section != OTHER_SECTION and section not in found and term in lowered:
            found.append(section)
    return [name for name in CORE_SECTIONS if name in found]
