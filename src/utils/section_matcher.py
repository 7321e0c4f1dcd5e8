"""
Section matcher: per-section learning-style filtering and ranking.

Module sections carry ``learning_style_tags``. Two tags are special:
- 'everyone': the section is shown to all students
- a student preferring "General Module" sees every section

Provides:
- Match checks in AND mode (section covers all preferences) or OR mode
- Filtering, relevance scoring and sorting of sections
- Match statistics for dashboards
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..config import MATCH_MODES, config
from ..models.module_matching import get_style_tags


SECTION_STYLES_KEY = "learning_style_tags"
EVERYONE_TAG = "everyone"
GENERAL_MODULE = "General Module"

# Student preference -> section tag
LEARNING_STYLE_MAP: Mapping[str, str] = MappingProxyType(
    {
        "Visual": "visual",
        "Aural": "auditory",
        "Read/Write": "reading_writing",
        "Kinesthetic": "kinesthetic",
        GENERAL_MODULE: "all",
        "Everyone": EVERYONE_TAG,
    }
)


def _field(section: Any, name: str) -> Any:
    if isinstance(section, Mapping):
        return section.get(name)
    return getattr(section, name, None)


def _resolve_mode(match_mode: Optional[str]) -> str:
    mode = match_mode or config.matching.default_match_mode
    if not isinstance(mode, str) or mode.upper() not in MATCH_MODES:
        raise ValueError(f"match_mode must be one of {MATCH_MODES}, got {match_mode!r}")
    return mode.upper()


def _shows_everything(preferences: Optional[Sequence[str]]) -> bool:
    return not preferences or GENERAL_MODULE in preferences


def normalize_preferred_modules(preferred_modules: Iterable[str]) -> list[str]:
    """
    Convert student preferred modules to section tag format.

    Example:
        >>> normalize_preferred_modules(["Visual", "Aural", "Custom"])
        ['visual', 'auditory', 'custom']
    """
    return [
        LEARNING_STYLE_MAP.get(pref) or pref.lower()
        for pref in preferred_modules
        if isinstance(pref, str)
    ]


def section_matches_preferences(
    section: Any,
    preferences: Optional[Sequence[str]],
    match_mode: Optional[str] = None,
) -> bool:
    """
    Check if a section matches a student's learning preferences.

    Args:
        section: Module content section (dict or object)
        preferences: Student's preferred modules
        match_mode: 'AND' (every preference must be tagged) or 'OR' (any
            tag matches). Defaults to config.matching.default_match_mode.

    Returns:
        True if the section should be shown to the student

    Raises:
        ValueError: If match_mode is not 'AND' or 'OR'
    """
    mode = _resolve_mode(match_mode)
    tags = get_style_tags(section, SECTION_STYLES_KEY) or []

    if EVERYONE_TAG in tags:
        return True

    if _shows_everything(preferences):
        return True

    # Untagged sections are universal content
    if not tags:
        return True

    normalized = normalize_preferred_modules(preferences)

    if mode == "AND":
        return all(pref in tags for pref in normalized)
    return any(tag in normalized for tag in tags)


def filter_sections_by_preferences(
    sections: Iterable[Any],
    preferences: Optional[Sequence[str]],
    match_mode: Optional[str] = None,
) -> list[Any]:
    """
    Keep only the sections matching a student's preferences (order preserved).
    """
    if _shows_everything(preferences):
        return list(sections)

    return [
        section
        for section in sections
        if section_matches_preferences(section, preferences, match_mode)
    ]


def get_section_match_score(section: Any, preferences: Optional[Sequence[str]]) -> float:
    """
    Score how well a section matches a student's preferences.

    Args:
        section: Module content section
        preferences: Student's preferred modules

    Returns:
        Score from 0 to 1 (higher = better match)
    """
    tags = get_style_tags(section, SECTION_STYLES_KEY) or []

    if EVERYONE_TAG in tags:
        return 1.0

    if _shows_everything(preferences):
        return 1.0

    if not tags:
        return config.matching.universal_section_score

    normalized = normalize_preferred_modules(preferences)
    if not normalized:
        return 1.0
    matching = [tag for tag in tags if tag in normalized]

    return min(1.0, len(matching) / len(normalized))


def sort_sections_by_relevance(
    sections: Iterable[Any], preferences: Optional[Sequence[str]]
) -> list[Any]:
    """
    Sort sections by match score, best first.

    Sections with equal scores keep their original relative order.
    """
    return sorted(sections, key=lambda s: get_section_match_score(s, preferences), reverse=True)


def get_relevant_sections(
    sections: Iterable[Any],
    preferences: Optional[Sequence[str]],
    filter_strict: Optional[bool] = None,
    sort_by_relevance: Optional[bool] = None,
    match_mode: Optional[str] = None,
) -> list[Any]:
    """
    Filter and/or sort sections for a student.

    Args:
        sections: All module sections
        preferences: Student's preferred modules
        filter_strict: Only keep matching sections (default from config)
        sort_by_relevance: Sort by match score (default from config)
        match_mode: 'AND' or 'OR' (default from config)

    Returns:
        The selected sections
    """
    if filter_strict is None:
        filter_strict = config.matching.filter_strict
    if sort_by_relevance is None:
        sort_by_relevance = config.matching.sort_by_relevance

    result = list(sections)

    if filter_strict:
        result = filter_sections_by_preferences(result, preferences, match_mode)

    if sort_by_relevance:
        result = sort_sections_by_relevance(result, preferences)

    return result


def get_section_match_stats(
    sections: Sequence[Any], preferences: Optional[Sequence[str]]
) -> dict:
    """
    Get statistics about how a module's sections match a student.

    Returns:
        Dict with total/matching/non-matching counts, rounded match
        percentage and per-section score distribution

    Example:
        >>> sections = [{"id": "s1", "title": "Intro", "learning_style_tags": ["visual"]}]
        >>> get_section_match_stats(sections, ["Aural"])["match_percentage"]
        0
    """
    sections = list(sections)
    total = len(sections)
    matching = len(filter_sections_by_preferences(sections, preferences))

    # Half-up rounding
    percentage = int(math.floor(matching / total * 100 + 0.5)) if total else 0

    distribution = [
        {
            "id": _field(section, "id"),
            "title": _field(section, "title"),
            "score": get_section_match_score(section, preferences),
            "tags": get_style_tags(section, SECTION_STYLES_KEY),
        }
        for section in sections
    ]

    return {
        "total_sections": total,
        "matching_sections": matching,
        "non_matching_sections": total - matching,
        "match_percentage": percentage,
        "score_distribution": distribution,
    }
