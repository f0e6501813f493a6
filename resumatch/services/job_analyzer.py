"""Heuristic job posting analysis.

Extracts requirement sentences, ranks keywords by weighted frequency and
computes which keywords the candidate's skills do not cover. Everything is
rule based: fixed vocabularies, regular expressions and counting.
"""

from __future__ import annotations

import logging
import re
from collections import Counter

from resumatch.core.logging import text_fingerprint
from resumatch.schemas.job import (
    MAX_KEYWORDS,
    MAX_REQUIREMENTS,
    MAX_SKILLS_GAP,
    JobAnalysis,
)
from resumatch.utils.vocabulary import BULLET_GLYPHS, PHRASE_SKILLS, STOPWORDS, TECH_TERMS

logger = logging.getLogger(__name__)

MAX_REQUIREMENT_CHARS = 260
MAX_KEYWORD_CHARS = 40
RANK_BOOST = 2

_LEADING_MARKER = re.compile(r"^\s*(?:[-*•]|\d+\.|\d+\)|\((?:[a-z]|\d)\))\s*", re.IGNORECASE)
_REQUIREMENT_HINT = re.compile(
    r"\b(?:responsibil|require|must|should|own|design|develop|implement|deliver|maintain"
    r"|optimi[sz]|improv|build|collaborat|coordinat|manag|lead)",
    re.IGNORECASE,
)
# "+", "." and "#" survive so c++, c# and node.js stay whole
_NON_TOKEN = re.compile(r"[^a-z0-9+.#\s]")
_HAS_WORD = re.compile(r"[a-z]{3,}")
_SKILL_SEPARATORS = re.compile(rf"[,;\n{re.escape(BULLET_GLYPHS)}]+")


def normalize_job_text(text: str) -> str:
    """Strip carriage returns and collapse tabs and repeated spaces."""
    text = text.replace("\r", "").replace("\t", " ")
    return re.sub(r" {2,}", " ", text)


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def format_keyword(keyword: str) -> str:
    """Display form of a ranked keyword ("machine learning" -> "Machine Learning")."""
    if " " in keyword:
        return " ".join(capitalize_first(word) for word in keyword.split(" "))
    if keyword == "api":
        return "API"
    return capitalize_first(keyword)


def extract_requirements(lines: list[str]) -> list[str]:
    """Bullet or requirement-like lines, marker stripped, first letter capitalized.

    Lines must keep more than two words and stay under 260 characters after
    the marker is removed. Duplicates are dropped; at most 25 are returned.
    """
    requirements: list[str] = []
    for line in lines:
        if not (_LEADING_MARKER.match(line) or _REQUIREMENT_HINT.search(line)):
            continue
        cleaned = _LEADING_MARKER.sub("", line).strip()
        if len(cleaned.split()) <= 2 or len(cleaned) >= MAX_REQUIREMENT_CHARS:
            continue
        requirement = capitalize_first(cleaned)
        if requirement not in requirements:
            requirements.append(requirement)
        if len(requirements) >= MAX_REQUIREMENTS:
            break
    return requirements


def tokenize_job_text(lowered: str) -> list[str]:
    """Word tokens of lower-cased job text, stopwords and noise removed."""
    tokens: list[str] = []
    for raw in _NON_TOKEN.sub(" ", lowered).split():
        token = raw.rstrip(".,;")
        if len(token) <= 1 or token in STOPWORDS:
            continue
        if token in TECH_TERMS or _HAS_WORD.search(token):
            tokens.append(token)
    return tokens


def _rank_weight(term: str, count: int) -> int:
    boost = RANK_BOOST if term in TECH_TERMS or " " in term else 0
    return count + boost


def rank_keywords(lowered: str) -> list[str]:
    """Rank job terms by frequency, boosting technology terms and phrases.

    Phrase skills found in the text add ``words + 1`` to their count. Ties
    keep first-seen order. Returns at most 20 raw (lower-case) keywords.
    """
    counts: Counter[str] = Counter(tokenize_job_text(lowered))
    for phrase in PHRASE_SKILLS:
        if phrase in lowered:
            counts[phrase] += len(phrase.split(" ")) + 1

    ranked = sorted(counts.items(), key=lambda item: -_rank_weight(*item))
    keywords: list[str] = []
    for term, _count in ranked:
        if len(term) > MAX_KEYWORD_CHARS or term in keywords:
            continue
        keywords.append(term)
        if len(keywords) >= MAX_KEYWORDS:
            break
    return keywords


def tokenize_candidate_skills(candidate_skills: str) -> list[str]:
    """Lower-cased skill tokens split on commas, semicolons, newlines and bullets."""
    tokens = (t.strip() for t in _SKILL_SEPARATORS.split(candidate_skills.lower()))
    return [t for t in tokens if t]


def _is_covered(keyword: str, candidate_tokens: list[str]) -> bool:
    return any(token in keyword or keyword in token for token in candidate_tokens)


def compute_skills_gap(keywords: list[str], candidate_skills: str) -> list[str]:
    """Ranked keywords with no matching candidate skill (at most 10).

    A keyword is covered when a candidate token equals it, is contained in it
    or contains it.
    """
    candidate_tokens = tokenize_candidate_skills(candidate_skills)
    gap = [k for k in keywords if not _is_covered(k, candidate_tokens)]
    return gap[:MAX_SKILLS_GAP]


def analyze_job_description(job_description: str, candidate_skills: str = "") -> JobAnalysis:
    """Analyze a job posting against the candidate's skills.

    Args:
        job_description: Job posting text. Empty text yields an empty analysis.
        candidate_skills: Candidate skill text; may be empty.

    Returns:
        JobAnalysis: Display-formatted keywords, requirement sentences and
            skill gap.
    """
    if not job_description or not job_description.strip():
        return JobAnalysis()

    normalized = normalize_job_text(job_description)
    lines = [line.strip() for line in re.split(r"\n+", normalized) if line.strip()]

    requirements = extract_requirements(lines)
    keywords = rank_keywords(normalized.lower())
    gap = compute_skills_gap(keywords, candidate_skills or "")

    analysis = JobAnalysis(
        keywords=[format_keyword(k) for k in keywords],
        requirements=requirements,
        skills_gap=[format_keyword(k) for k in gap],
    )

    logger.info(
        "job.analyzed",
        extra={
            "job_hash": text_fingerprint(job_description),
            "keyword_count": len(analysis.keywords),
            "requirement_count": len(analysis.requirements),
            "gap_count": len(analysis.skills_gap),
        },
    )
    return analysis
