"""
VARK questionnaire - derives a student's preferred modules from self-ratings.

Students rate 20 statements (five per learning style) from 1 (strongly
disagree) to 5 (strongly agree). Ratings are summed per style; every style
reaching the preference threshold becomes a preferred module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from ..config import config
from .module_matching import STYLE_TO_MODULE_MAP

logger = logging.getLogger(__name__)

# Questionnaire order; ties between styles resolve to the later one
VARK_STYLES = ("visual", "auditory", "reading_writing", "kinesthetic")

LEARNING_TYPES = {
    1: "Unimodal",
    2: "Bimodal",
    3: "Trimodal",
    4: "Multimodal",
}


@dataclass(frozen=True)
class LearningStatement:
    """A single questionnaire statement."""

    id: int
    statement: str
    category: str


LEARNING_STATEMENTS: tuple[LearningStatement, ...] = (
    LearningStatement(1, "I prefer to learn through animations and videos that illustrate mitosis and meiosis.", "visual"),
    LearningStatement(2, "I prefer to learn by listening to someone's instruction and explanation rather than reading about cellular reproduction.", "auditory"),
    LearningStatement(3, "I prefer to learn when I can participate and actively involve in the discussion.", "kinesthetic"),
    LearningStatement(4, "I prefer to learn through reading detailed discussions about cellular reproduction.", "reading_writing"),
    LearningStatement(5, "I prefer to watch video presentations with step-by-step explanations to visualize and understand the concept of cellular reproduction clearly.", "visual"),
    LearningStatement(6, "I prefer to learn using a recorded discussion as a learning material.", "auditory"),
    LearningStatement(7, "I prefer to learn through hands-on digital activities like virtual simulations.", "kinesthetic"),
    LearningStatement(8, "I prefer to take down notes and use them as a learning material.", "reading_writing"),
    LearningStatement(9, "I prefer to use diagrams and concept maps in learning complex concepts like cellular reproduction.", "visual"),
    LearningStatement(10, "I prefer to use verbal and audio instructions to guide my learning about cellular reproduction.", "auditory"),
    LearningStatement(11, "I prefer to learn by doing online tasks that allow me to apply concepts in real-time.", "kinesthetic"),
    LearningStatement(12, "I prefer to learn when I'm able to read on my own and explore complex topics in detail.", "reading_writing"),
    LearningStatement(13, "I prefer to learn using interactive charts that visually demonstrate biological processes like cellular reproduction.", "visual"),
    LearningStatement(14, "I prefer to learn biology topics through a question-and-answer discussion.", "auditory"),
    LearningStatement(15, "I prefer to learn through various activities that engage my senses and movement to reinforce concepts.", "kinesthetic"),
    LearningStatement(16, "I prefer to learn through reading and writing activities.", "reading_writing"),
    LearningStatement(17, "I prefer to use colored contents and images materials in learning biological processes.", "visual"),
    LearningStatement(18, "I prefer to discuss or share my knowledge with others to deepen my understanding of the concepts.", "auditory"),
    LearningStatement(19, "I prefer to learn through exploring and manipulating various materials to understand cellular reproduction better.", "kinesthetic"),
    LearningStatement(20, "I prefer to learn and engage with the discussion through text-based explanations.", "reading_writing"),
)


@dataclass
class VARKResult:
    """
    Outcome of a completed VARK questionnaire.

    Attributes:
        scores: Summed rating per learning style
        dominant_style: Highest-scoring learning style tag
        preferred_modules: Preferred module names ("Visual", "Aural", ...)
        learning_type: Unimodal / Bimodal / Trimodal / Multimodal
    """
    scores: Dict[str, int]
    dominant_style: str
    preferred_modules: List[str] = field(default_factory=list)
    learning_type: str = "Unimodal"

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary."""
        return {
            "scores": dict(self.scores),
            "dominant_style": self.dominant_style,
            "preferred_modules": list(self.preferred_modules),
            "learning_type": self.learning_type,
        }


def score_responses(answers: Mapping[int, int]) -> Dict[str, int]:
    """
    Sum ratings per learning style.

    Args:
        answers: Statement id (int or str) -> rating. Unanswered statements
            count as 0, ids outside the questionnaire are ignored.

    Returns:
        Dict mapping each learning style to its total score

    Raises:
        ValueError: If a rating is not an integer or is outside the
            configured scale
    """
    low, high = config.vark.rating_min, config.vark.rating_max
    scores = {style: 0 for style in VARK_STYLES}

    for statement in LEARNING_STATEMENTS:
        # JSON payloads arrive with string keys
        rating = answers.get(statement.id, answers.get(str(statement.id)))
        if rating is None:
            continue
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise ValueError(
                f"Rating for statement {statement.id} must be an integer, got {rating!r}"
            )
        if not (low <= rating <= high):
            raise ValueError(
                f"Rating for statement {statement.id} must be in [{low}, {high}], got {rating}"
            )
        scores[statement.category] += rating

    return scores


def dominant_style(scores: Mapping[str, int]) -> str:
    """Return the highest-scoring style (later style wins ties)."""
    best = VARK_STYLES[0]
    for style in VARK_STYLES:
        if scores.get(style, 0) >= scores.get(best, 0):
            best = style
    return best


def preferred_modules(scores: Mapping[str, int], threshold: Optional[int] = None) -> List[str]:
    """
    Determine preferred modules from style scores.

    Args:
        scores: Learning style -> total score
        threshold: Minimum score for a preference (default from config)

    Returns:
        Module names for every style at or above the threshold, or the
        dominant style's module if none qualifies
    """
    if threshold is None:
        threshold = config.vark.preference_threshold

    modules = [
        STYLE_TO_MODULE_MAP[style]
        for style in VARK_STYLES
        if scores.get(style, 0) >= threshold
    ]

    if not modules:
        modules.append(STYLE_TO_MODULE_MAP[dominant_style(scores)])

    return modules


def learning_type(num_preferences: int) -> str:
    """Classify a learner by how many preferred modules they have."""
    return LEARNING_TYPES.get(num_preferences, "Unimodal")


def evaluate_vark(answers: Mapping[int, int], threshold: Optional[int] = None) -> VARKResult:
    """
    Score a completed questionnaire.

    Args:
        answers: Statement id -> rating
        threshold: Preference threshold override

    Returns:
        VARKResult

    Example:
        >>> answers = {s.id: 5 if s.category == "visual" else 2 for s in LEARNING_STATEMENTS}
        >>> evaluate_vark(answers).preferred_modules
        ['Visual']
    """
    scores = score_responses(answers)
    modules = preferred_modules(scores, threshold)
    result = VARKResult(
        scores=scores,
        dominant_style=dominant_style(scores),
        preferred_modules=modules,
        learning_type=learning_type(len(modules)),
    )
    logger.debug("VARK result: %s", result.to_dict())
    return result
