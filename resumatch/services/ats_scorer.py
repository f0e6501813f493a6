"""Weighted ATS compatibility scoring.

Four category scores are computed from the candidate profile and the job
analysis and combined into one overall score:

    overall = keywords * 0.35 + sections * 0.20 + formatting * 0.20 + readability * 0.25

Each category reports the statistics it was computed from as detail strings.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

from resumatch.schemas.ats import ATSCategories, ATSReport, CategoryScore
from resumatch.schemas.job import JobAnalysis
from resumatch.schemas.profile import CandidateProfile, content_or_empty
from resumatch.utils.vocabulary import ACTION_VERBS, BULLET_GLYPHS, CORE_SECTIONS

logger = logging.getLogger(__name__)

WEIGHTS = {
    "keywords": 0.35,
    "sections": 0.20,
    "formatting": 0.20,
    "readability": 0.25,
}

MIN_SECTION_CHARS = 30

FORMATTING_BASE = 70
READABILITY_BASE = 70
READABILITY_FLOOR = 30
IDEAL_SENTENCE_WORDS = (10, 25)
MAX_AVG_LINE_CHARS = 180
LONG_EXPERIENCE_CHARS = 400

_SKILL_SPLIT = re.compile(r"[,;\n]+")
_BULLET_MARKER = re.compile(rf"[{re.escape(BULLET_GLYPHS)}]|^[ \t]*[-*](?=\s)", re.MULTILINE)
_SENTENCE_END = re.compile(r"[.!?]+")
_WORD = re.compile(r"[A-Za-z][A-Za-z'-]*")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class KeywordMatch:
    matched: list[str]
    missing: list[str]

    @property
    def total(self) -> int:
        return len(self.matched) + len(self.missing)


def match_keywords(keywords: list[str], skills: str) -> KeywordMatch:
    """Split job keywords into those found in the candidate skills and the rest.

    A keyword matches when it is a substring of, or contains, a skill token.
    """
    tokens = [t.strip() for t in _SKILL_SPLIT.split(skills.lower()) if t.strip()]
    matched: list[str] = []
    missing: list[str] = []
    for keyword in keywords:
        lowered = keyword.lower()
        if any(lowered in token or token in lowered for token in tokens):
            matched.append(keyword)
        else:
            missing.append(keyword)
    return KeywordMatch(matched=matched, missing=missing)


def score_keywords(profile: CandidateProfile, analysis: JobAnalysis) -> tuple[float, list[str]]:
    result = match_keywords(analysis.keywords, content_or_empty("skills", profile.skills))
    if not result.total:
        return 0.0, ["No job keywords to match", "Analyze a job description to score keyword coverage"]

    score = min(100.0, len(result.matched) / result.total * 100)
    details = [f"{len(result.matched)}/{result.total} job keywords found in skills"]
    if score >= 80:
        details.append("Excellent keyword coverage")
    else:
        details.append("Consider adding more relevant keywords")
    if result.missing:
        details.append("Missing: " + ", ".join(result.missing[:5]))
    return score, details


def score_sections(profile: CandidateProfile) -> tuple[float, list[str]]:
    present = [
        name
        for name in CORE_SECTIONS
        if len(content_or_empty(name, getattr(profile, name)).strip()) > MIN_SECTION_CHARS
    ]
    missing = [name for name in CORE_SECTIONS if name not in present]
    score = len(present) / len(CORE_SECTIONS) * 100

    details = [f"{len(present)}/{len(CORE_SECTIONS)} essential sections present"]
    if missing:
        details.append("Missing or too short: " + ", ".join(missing))
    else:
        details.append("All essential sections present")
    return score, details


def score_formatting(profile: CandidateProfile) -> tuple[float, list[str]]:
    experience = content_or_empty("experience", profile.experience)
    bullets = len(_BULLET_MARKER.findall(experience))
    lines = [line for line in experience.splitlines() if line.strip()]
    avg_line = sum(len(line) for line in lines) / len(lines) if lines else 0.0

    score = FORMATTING_BASE
    if bullets > 3:
        score += 10
    if lines and avg_line < MAX_AVG_LINE_CHARS:
        score += 10
    if profile.is_from_upload:
        score += 5

    details = [
        f"{bullets} bullet points in experience",
        f"Average experience line length: {avg_line:.0f} characters",
        "Parsed from uploaded document" if profile.is_from_upload else "Entered manually",
    ]
    return clamp(score, 0, 100), details


def split_sentences(text: str) -> list[str]:
    return [s.strip() for s in _SENTENCE_END.split(text) if _WORD.search(s)]


def score_readability(profile: CandidateProfile) -> tuple[float, list[str]]:
    experience = content_or_empty("experience", profile.experience)
    sentences = split_sentences(experience)
    word_counts = [len(s.split()) for s in sentences]
    avg_words = sum(word_counts) / len(word_counts) if word_counts else 0.0
    verb_count = sum(1 for word in _WORD.findall(experience.lower()) if word in ACTION_VERBS)

    low, high = IDEAL_SENTENCE_WORDS
    score = READABILITY_BASE
    score += 15 if low <= avg_words <= high else -10
    score += 10 if verb_count >= max(3, 0.3 * len(sentences)) else -5
    if len(experience) > LONG_EXPERIENCE_CHARS:
        score += 5

    details = [
        f"Average sentence length: {avg_words:.1f} words",
        f"{verb_count} action verbs across {len(sentences)} sentences",
        f"Experience section length: {len(experience)} characters",
    ]
    return clamp(score, READABILITY_FLOOR, 100), details


def _overall_summary(overall: int) -> str:
    if overall >= 80:
        return "Excellent! Your resume is highly optimized for ATS systems."
    if overall >= 60:
        return "Good score with room for improvement."
    return "Needs improvement to pass ATS filters effectively."


def score_profile(profile: CandidateProfile, analysis: JobAnalysis) -> ATSReport:
    """Score a candidate profile against a job analysis.

    Args:
        profile: Candidate profile (placeholders count as empty sections).
        analysis: Job analysis supplying the keywords to match.

    Returns:
        ATSReport: Overall score, rationale and the four category records.
    """
    keywords, keyword_details = score_keywords(profile, analysis)
    sections, section_details = score_sections(profile)
    formatting, formatting_details = score_formatting(profile)
    readability, readability_details = score_readability(profile)

    overall = round_half_up(
        keywords * WEIGHTS["keywords"]
        + sections * WEIGHTS["sections"]
        + formatting * WEIGHTS["formatting"]
        + readability * WEIGHTS["readability"]
    )
    overall = int(clamp(overall, 0, 100))

    report = ATSReport(
        overall=overall,
        summary=_overall_summary(overall),
        categories=ATSCategories(
            keywords=CategoryScore(score=round_half_up(keywords), details=keyword_details),
            formatting=CategoryScore(score=round_half_up(formatting), details=formatting_details),
            sections=CategoryScore(score=round_half_up(sections), details=section_details),
            readability=CategoryScore(score=round_half_up(readability), details=readability_details),
        ),
    )

    logger.info(
        "ats.scored",
        extra={
            "overall": report.overall,
            "keywords_score": report.categories.keywords.score,
            "sections_score": report.categories.sections.score,
            "formatting_score": report.categories.formatting.score,
            "readability_score": report.categories.readability.score,
            "from_upload": profile.is_from_upload,
        },
    )
    return report
