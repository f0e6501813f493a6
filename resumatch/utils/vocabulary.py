"""Fixed lookup vocabularies shared by the extraction and scoring stages.

Every collection here is immutable and built once at import.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# Canonical resume sections, in the order they are reported
CORE_SECTIONS: tuple[str, ...] = ("summary", "experience", "skills", "education")

# Heading synonyms per section. Headings that delimit a region we do not
# extract map to "other".
HEADING_SYNONYMS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "summary": frozenset(
            {
                "summary",
                "professional summary",
                "career summary",
                "executive summary",
                "objective",
                "career objective",
                "profile",
                "professional profile",
                "about me",
            }
        ),
        "experience": frozenset(
            {
                "experience",
                "work experience",
                "professional experience",
                "relevant experience",
                "employment",
                "employment history",
                "work history",
                "career history",
            }
        ),
        "skills": frozenset(
            {
                "skills",
                "technical skills",
                "key skills",
                "core skills",
                "competencies",
                "core competencies",
                "technologies",
                "tech stack",
            }
        ),
        "education": frozenset(
            {
                "education",
                "academic background",
                "academic",
                "academics",
                "qualifications",
                "education and training",
            }
        ),
        "other": frozenset(
            {
                "projects",
                "certifications",
                "certificates",
                "awards",
                "achievements",
                "publications",
                "languages",
                "interests",
                "hobbies",
                "references",
                "volunteer",
                "volunteering",
            }
        ),
    }
)

# (term, section) pairs, longest term first so "work experience" wins over
# "experience" and multi-word headings are matched before their parts.
HEADING_TERMS: tuple[tuple[str, str], ...] = tuple(
    sorted(
        ((term, section) for section, terms in HEADING_SYNONYMS.items() for term in terms),
        key=lambda pair: (-len(pair[0]), pair[0]),
    )
)

# Lines mentioning these belong to an education entry, not a location
EDUCATION_TERMS: frozenset[str] = frozenset(
    {
        "university",
        "college",
        "school",
        "institute",
        "academy",
        "polytechnic",
        "bachelor",
        "bachelors",
        "master",
        "masters",
        "degree",
        "diploma",
        "phd",
        "gpa",
    }
)

MONTH_NAMES: tuple[str, ...] = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

COMPANY_SUFFIXES: tuple[str, ...] = (
    "Inc",
    "LLC",
    "Ltd",
    "Limited",
    "Corp",
    "Corporation",
    "GmbH",
    "PLC",
)

STOPWORDS: frozenset[str] = frozenset(
    {
        "and", "or", "the", "a", "an", "to", "of", "in", "with", "for", "on",
        "by", "at", "as", "is", "are", "be", "will", "you", "your", "our",
        "we", "they", "from", "this", "that", "can", "ability", "etc", "into",
        "using", "use", "over", "under", "per", "via", "it", "their",
        "within", "across", "have", "has", "had", "may", "must", "should",
        "such", "than", "other", "both", "more", "less", "any", "all",
    }
)

# Multi-word skills detected by substring containment in the job text
PHRASE_SKILLS: tuple[str, ...] = (
    "machine learning",
    "deep learning",
    "artificial intelligence",
    "natural language processing",
    "project management",
    "data analysis",
    "data science",
    "continuous integration",
    "continuous deployment",
    "customer success",
    "unit testing",
    "test automation",
    "cloud computing",
    "product management",
    "software development",
    "object oriented",
    "user experience",
    "user interface",
    "version control",
    "problem solving",
)

TECH_TERMS: frozenset[str] = frozenset(
    {
        "javascript", "typescript", "react", "nextjs", "next", "node", "nodejs",
        "express", "java", "python", "go", "golang", "rust", "c++", "c#", ".net",
        "aws", "gcp", "azure", "docker", "kubernetes", "graphql", "rest", "api",
        "sql", "mysql", "postgres", "mongodb", "redis", "html", "css", "sass",
        "tailwind", "ci", "cd", "git", "github", "gitlab", "bitbucket",
        "terraform", "ansible", "linux", "bash", "shell", "kafka", "rabbitmq",
        "elasticsearch", "hadoop", "spark", "pytorch", "tensorflow", "sklearn",
        "pandas", "numpy", "jira", "agile", "scrum", "kanban", "webpack", "vite",
        "jest", "cypress", "playwright", "storybook", "redux", "zustand",
        "prisma", "sequelize",
    }
)

ACTION_VERBS: frozenset[str] = frozenset(
    {
        "achieved", "automated", "built", "collaborated", "coordinated",
        "created", "delivered", "designed", "developed", "drove", "established",
        "implemented", "improved", "increased", "launched", "led", "managed",
        "mentored", "migrated", "optimized", "organized", "reduced",
        "refactored", "resolved", "scaled", "shipped", "spearheaded",
        "streamlined", "supported", "trained",
    }
)

# Bullet glyphs emitted by word processors and PDF text layers
BULLET_GLYPHS = "•●▪◦‣∙"
