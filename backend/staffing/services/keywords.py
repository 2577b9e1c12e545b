"""
Keyword Synthesizer - Structured Records to Weighted Keyword Documents

Every searchable record (project, position, experience, employee) carries a
derived keyword document: a lowercase, punctuation-free, stop-word-free,
space-joined token string. Importance is encoded by literal repetition,
because the ranking vectorizer only sees term frequency.

Normalization Pipeline:
    fragments → join(" ") → lowercase → pad with spaces
             → strip punctuation → strip single-space-bounded function words
             → collapse whitespace → trim

Field Composition:
    project:    name + description
    position:   name x4 + description + skills (name x level*4)
    experience: name + customer x4 + position x4 + skill list x4 + description
    employee:   experience documents + preferences + skills (name x level*4)

All functions here are pure and deterministic, except
rebuild_employee_keywords, which assigns to the employee it is given.
"""

import re
from typing import Iterable, List, Optional, Protocol

from staffing.services.function_words import FUNCTION_WORDS, PUNCTUATION

GENERAL_REPEAT_MULTIPLIER = 4
SKILL_REPEAT_MULTIPLIER = 4

# Longest alternatives first so multi-character entries win
_punctuation_pattern = re.compile(
    "|".join(re.escape(p) for p in sorted(PUNCTUATION, key=len, reverse=True)),
    re.IGNORECASE,
)
# Exactly one whitespace character on each side; the trailing one is a
# lookahead so consecutive function words are all removed
_function_word_pattern = re.compile(
    r"\s("
    + "|".join(re.escape(w) for w in sorted(FUNCTION_WORDS, key=len, reverse=True))
    + r")(?=\s)",
    re.IGNORECASE,
)
_whitespace_pattern = re.compile(r"\s+")


class SkillLike(Protocol):
    name: str
    level: float


def normalize(*fragments: str) -> str:
    """
    Normalize text fragments into a keyword document.

    Args:
        *fragments: Text pieces, joined with single spaces before processing.
                    None values are treated as empty strings.

    Returns:
        Normalized keyword document (possibly empty)

    Example:
        >>> normalize("The Backend,", "and APIs!")
        'backend apis'
    """
    text = " ".join(fragment or "" for fragment in fragments).lower()
    text = f" {text} "
    text = _punctuation_pattern.sub("", text)
    text = _function_word_pattern.sub(" ", text)
    return _whitespace_pattern.sub(" ", text).strip()


def repeat(text: str, times: int) -> str:
    """Repeat text `times` times, space-separated."""
    if not text or times <= 0:
        return ""
    return " ".join([text] * times)


def skills_to_keywords(skills: Iterable[SkillLike]) -> str:
    """
    Expand skills into repeated skill names.

    Each skill name appears int(level * SKILL_REPEAT_MULTIPLIER) times,
    so a level-3 skill contributes 12 occurrences.
    """
    parts = [
        repeat(skill.name, int(skill.level * SKILL_REPEAT_MULTIPLIER))
        for skill in skills
    ]
    return " ".join(part for part in parts if part)


def project_keywords(name: str, description: str) -> str:
    # Skills live on positions, not on the project
    return normalize(name, description)


def position_keywords(name: str, description: str, skills: Iterable[SkillLike]) -> str:
    return normalize(
        repeat(name, GENERAL_REPEAT_MULTIPLIER),
        description,
        skills_to_keywords(skills),
    )


def experience_keywords(
    name: str,
    customer: str,
    position: str,
    description: str,
    skills: List[str],
) -> str:
    return normalize(
        name,
        repeat(customer, GENERAL_REPEAT_MULTIPLIER),
        repeat(position, GENERAL_REPEAT_MULTIPLIER),
        repeat(" ".join(skills), SKILL_REPEAT_MULTIPLIER),
        description,
    )


def employee_keywords(
    preferences: Optional[str],
    skills: Iterable[SkillLike],
    experience_documents: Iterable[str],
) -> str:
    """
    Build an employee's aggregate keyword document.

    Experience documents come first, already normalized and taken as-is,
    followed by the normalized preferences and skills.

    Args:
        preferences: Free-text preferences
        skills: Employee's own skills
        experience_documents: Keyword documents of all experience records

    Returns:
        Aggregate keyword document
    """
    parts = list(experience_documents)
    parts.append(normalize(preferences or "", skills_to_keywords(skills)))
    return " ".join(part for part in parts if part)


def rebuild_employee_keywords(employee) -> str:
    """
    Recompute and assign the aggregate document of a loaded employee.

    The employee's skills and experience must already be loaded.
    Shared by the async repository and the Celery worker.
    """
    employee.keywords = employee_keywords(
        employee.preferences,
        employee.skills,
        [experience.keywords for experience in employee.experience],
    )
    return employee.keywords


def contains_token(document: str, token: str) -> bool:
    """
    Check whole-token containment in a keyword document.

    The token is normalized the same way documents are, then matched with a
    single space on each side, so "java" never matches "javascript" and
    multi-word skills match as a phrase.
    """
    needle = normalize(token)
    if not needle:
        return False
    return f" {needle} " in f" {document or ''} "
