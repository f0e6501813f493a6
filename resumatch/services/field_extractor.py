"""Contact field extraction and section body cleanup.

Contact fields come from regular expressions plus positional rules (the
name sits near the top, the location within the first lines). Section bodies
are tidied after segmentation: skill lists are tokenized and rejoined, and
experience/education bodies get their bullets and dates put back on
separate lines, which PDF text layers tend to merge.

Functions return ``None`` or an empty string when nothing is found; the
profile schema turns those into "<Field> not found" placeholders.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from resumatch.services.section_segmenter import is_heading_line
from resumatch.utils.vocabulary import (
    BULLET_GLYPHS,
    COMPANY_SUFFIXES,
    EDUCATION_TERMS,
    MONTH_NAMES,
)

NAME_SCAN_LINES = 5
LOCATION_SCAN_LINES = 20
MAX_SKILL_TOKEN_CHARS = 64

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}")
# Addresses broken up by the PDF text layer, e.g. "jane . doe @ mail . com"
_SPACED_EMAIL = re.compile(
    r"[A-Za-z0-9_%+-]+(?:\s?\.\s?[A-Za-z0-9_%+-]+)*\s*@\s*[A-Za-z0-9-]+(?:\s?\.\s?(?=[a-z0-9])[A-Za-z0-9-]+)+"
)

PHONE_PATTERN = re.compile(
    r"(?<![\w+])(?:\+?\d{1,3}[\s.-]?)?(?:\(\d{2,4}\)|\d{2,4})(?:[\s.-]?\d{2,4}){2,4}(?!\w)"
)
MIN_PHONE_DIGITS = 7
MAX_PHONE_DIGITS = 15

_NAME_TOKEN = re.compile(r"^[A-Z][A-Za-z'.-]*$")
_NAME_FALLBACK = re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+\b")

LOCATION_PATTERN = re.compile(
    r"\b[A-Z][a-zA-Z]+(?: [A-Z][a-zA-Z]+)*(?:, ?| )(?:[A-Z]{2}\b|[A-Z][a-zA-Z]+(?: [A-Z][a-zA-Z]+)*)"
)

_BULLETS = re.escape(BULLET_GLYPHS)
_LEADING_MARKER = re.compile(rf"^\s*(?:[{_BULLETS}]|[-*](?=\s))\s*")
# "Jan", "Jan.", "January", "Sept"
_MONTH = "(?:sept|" + "|".join(f"{name[:3]}(?:{name[3:]})?" for name in MONTH_NAMES) + ")"
_YEAR = r"(?:19|20)\d{2}"
# "2015 2019 2021" style runs of years that the phone pattern also accepts
_YEAR_RUN = re.compile(rf"^{_YEAR}(?:[\s.-]+{_YEAR})*$")


@dataclass(frozen=True)
class ContactFields:
    full_name: str | None
    email: str | None
    phone: str | None
    location: str | None


def _line_index(lines: list[str], needle: str) -> int | None:
    for index, line in enumerate(lines):
        if needle in line:
            return index
    return None


def repair_email_spacing(line: str) -> str:
    """Close whitespace around '@' and '.' inside an email address."""
    return _SPACED_EMAIL.sub(lambda m: re.sub(r"\s+", "", m.group(0)), line)


def extract_email(lines: list[str]) -> tuple[str | None, int | None]:
    """First email address in the text and the index of its line."""
    for index, line in enumerate(lines):
        match = EMAIL_PATTERN.search(repair_email_spacing(line))
        if match:
            return match.group(0), index
    return None, None


def normalize_phone(candidate: str) -> str:
    """Reduce a phone candidate to digits with an optional leading '+'."""
    digits = re.sub(r"\D", "", candidate)
    prefix = "+" if candidate.lstrip().startswith("+") else ""
    if not prefix and len(digits) == 11 and digits.startswith("1"):
        prefix = "+"
    return prefix + digits


def extract_phone(lines: list[str]) -> tuple[str | None, int | None]:
    """Longest normalized phone candidate (first one on ties) and its line."""
    best: str | None = None
    best_line: int | None = None
    for index, line in enumerate(lines):
        for match in PHONE_PATTERN.finditer(line):
            if _YEAR_RUN.match(match.group(0).strip()):
                continue
            normalized = normalize_phone(match.group(0))
            digit_count = len(normalized.lstrip("+"))
            if not MIN_PHONE_DIGITS <= digit_count <= MAX_PHONE_DIGITS:
                continue
            if best is None or len(normalized) > len(best):
                best, best_line = normalized, index
    return best, best_line


def _looks_like_name(line: str) -> bool:
    tokens = line.split()
    return 2 <= len(tokens) <= 5 and all(_NAME_TOKEN.match(token) for token in tokens)


def extract_name(
    lines: list[str],
    text: str,
    skip_lines: set[int] | frozenset[int] = frozenset(),
) -> tuple[str | None, int | None]:
    """Find the candidate name near the top of the document.

    The first few non-empty lines are scanned, skipping contact and heading
    lines, for a line of 2-5 capitalized words. Failing that, the first pair
    of capitalized words anywhere in the text is used.
    """
    seen = 0
    for index, line in enumerate(lines):
        if not line.strip():
            continue
        seen += 1
        if seen > NAME_SCAN_LINES:
            break
        if index in skip_lines or is_heading_line(line):
            continue
        if _looks_like_name(line.strip()):
            return " ".join(line.split()), index

    match = _NAME_FALLBACK.search(text)
    if match:
        return match.group(0), _line_index(lines, match.group(0))
    return None, None


def extract_location(
    lines: list[str],
    skip_lines: set[int] | frozenset[int] = frozenset(),
) -> str | None:
    """First "City, ST" / "City Country" pattern within the first lines.

    A comma-separated match anywhere in the scanned lines beats an earlier
    space-separated one, which is often a job title. Lines mentioning schools
    or degrees, heading lines and the contact/name lines are skipped.
    """
    fallback: str | None = None
    for index, line in enumerate(lines[:LOCATION_SCAN_LINES]):
        if index in skip_lines or is_heading_line(line):
            continue
        lowered = line.lower()
        if any(term in lowered for term in EDUCATION_TERMS):
            continue
        for match in LOCATION_PATTERN.finditer(line):
            found = match.group(0).strip()
            if "," in found:
                return found
            if fallback is None:
                fallback = found
    return fallback


def extract_contact_fields(lines: list[str], text: str) -> ContactFields:
    """Extract name, email, phone and location from normalized text lines."""
    email, email_line = extract_email(lines)
    phone, phone_line = extract_phone(lines)
    contact_lines = {i for i in (email_line, phone_line) if i is not None}

    full_name, name_line = extract_name(lines, text, skip_lines=contact_lines)

    location_skip = set(contact_lines)
    if name_line is not None:
        location_skip.add(name_line)
    location = extract_location(lines, skip_lines=location_skip)

    return ContactFields(full_name=full_name, email=email, phone=phone, location=location)


def _split_skill_line(line: str) -> list[str]:
    pieces = [p for p in re.split(rf"[{_BULLETS}]|^\s*[-*]\s+", line) if p.strip()]
    tokens: list[str] = []
    for piece in pieces:
        parts = [p.strip() for p in re.split(rf"[,;|{_BULLETS}]", piece)]
        parts = [_LEADING_MARKER.sub("", p).strip() for p in parts if p.strip()]
        if len(parts) > 1:
            tokens.extend(parts)
        else:
            tokens.append(_LEADING_MARKER.sub("", piece).strip())
    return [t for t in tokens if t]


def normalize_skills(body: str) -> str:
    """Tokenize a skills section body into a comma-separated list.

    Tokens are deduplicated case-insensitively, keeping the first spelling;
    tokens of 64 characters or more (sentences, not skills) are dropped.
    """
    seen: set[str] = set()
    skills: list[str] = []
    for line in body.splitlines():
        for token in _split_skill_line(line):
            key = token.lower()
            if len(token) >= MAX_SKILL_TOKEN_CHARS or key in seen:
                continue
            seen.add(key)
            skills.append(token)
    return ", ".join(skills)


_EMBEDDED_BULLET = re.compile(rf"(?<=\S)[ \t]*(?=[{_BULLETS}])")
# Years not already part of a range ("2019 - 2021", "2019 to 2021")
_MIDLINE_YEAR = re.compile(rf"(?<=[^\s\-–—/])[ \t]+(?<!\bto )(?={_YEAR}\b)")
_MIDLINE_COMPANY = re.compile(
    r"(?<=[a-z0-9%).])[ \t]+((?:[A-Z][\w&.-]*[ \t]+){0,2}[A-Z][\w&.-]*,?[ \t]+(?:"
    + "|".join(COMPANY_SUFFIXES)
    + r")\b\.?)"
)
_SPLIT_MONTH_YEAR = re.compile(rf"(?i)\b({_MONTH})\b(\.?)[ \t]*\n[ \t]*({_YEAR})\b")
_SPLIT_RANGE = re.compile(
    rf"(?i)\b({_YEAR})[ \t]*([-–—]|to)?[ \t]*\n[ \t]*(?:[{_BULLETS}]|[-*])[ \t]*"
    rf"((?:{_MONTH})\b\.?[ \t]+{_YEAR}|present|current)\b"
)


def _join_range(match: re.Match[str]) -> str:
    dash = match.group(2) or "-"
    return f"{match.group(1)} {dash} {match.group(3)}"


def rebuild_bullets(body: str) -> str:
    """Put bullets, dates and employer names merged into one line back on their own lines.

    Breaks are inserted before embedded bullet glyphs and before mid-line
    years and "<Name> Inc/LLC/..." employer names. A month cut off from its
    year by that split is re-joined, as is a date range whose end month was
    pushed onto a following bullet line.
    """
    if not body:
        return ""
    text = _EMBEDDED_BULLET.sub("\n", body)
    text = _MIDLINE_YEAR.sub("\n", text)
    text = _MIDLINE_COMPANY.sub(lambda m: "\n" + m.group(1), text)
    text = _SPLIT_MONTH_YEAR.sub(lambda m: f"{m.group(1)}{m.group(2)} {m.group(3)}", text)
    text = _SPLIT_RANGE.sub(_join_range, text)
    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
