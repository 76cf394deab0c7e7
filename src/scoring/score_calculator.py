"""
Priority score calculation.

Score (0-1) = clamp(intent sub-score x urgency weight x timeframe weight)

The intent sub-score starts at 0.5 and moves with each yes/no answer:

    needs_financing           +0.25 / -0.10
    will_finalize_paperwork   +0.20 / -0.15
    wants_warranty            +0.15 / -0.05
    needs_appraisal           +0.10 / -0.05

Unanswered questions leave the sub-score untouched. Because the weights
multiply, a low urgency or a distant timeframe suppresses even a strong
purchase signal.
"""

import logging

from src.schemas.customer_schema import PriorityLevel
from src.schemas.intake_schema import IntakeResponse, Timeframe, UrgencyLevel
from src.utils import clamp01

logger = logging.getLogger(__name__)

BASE_INTENT_SCORE = 0.5

# field -> (weight when True, weight when False)
BRANCHING_WEIGHTS: dict[str, tuple[float, float]] = {
    "needs_financing": (0.25, -0.10),
    "will_finalize_paperwork": (0.20, -0.15),
    "wants_warranty": (0.15, -0.05),
    "needs_appraisal": (0.10, -0.05),
}

URGENCY_WEIGHTS: dict[UrgencyLevel, float] = {
    UrgencyLevel.HIGH: 1.0,
    UrgencyLevel.MEDIUM: 0.6,
    UrgencyLevel.LOW: 0.3,
}
DEFAULT_URGENCY_WEIGHT = 0.3

TIMEFRAME_WEIGHTS: dict[Timeframe, float] = {
    Timeframe.TODAY: 1.0,
    Timeframe.THIS_WEEK: 0.7,
    Timeframe.THIS_MONTH: 0.4,
    Timeframe.NO_RUSH: 0.2,
}
DEFAULT_TIMEFRAME_WEIGHT = 0.5

# Inclusive lower bounds, checked top-down
PRIORITY_BANDS: list[tuple[float, PriorityLevel]] = [
    (0.8, PriorityLevel.CRITICAL),
    (0.6, PriorityLevel.HIGH),
    (0.4, PriorityLevel.MEDIUM),
    (0.2, PriorityLevel.LOW),
]


def calculate_intent_score(intake: IntakeResponse) -> float:
    """Intent sub-score in [0, 1] from the branching answers."""
    score = BASE_INTENT_SCORE
    for name, (yes_weight, no_weight) in BRANCHING_WEIGHTS.items():
        answer = getattr(intake, name)
        if answer is True:
            score += yes_weight
        elif answer is False:
            score += no_weight
    return clamp01(score)


def compute_score(intake: IntakeResponse) -> float:
    """Compute the priority score for an intake response."""
    intent_score = calculate_intent_score(intake)
    urgency_weight = URGENCY_WEIGHTS.get(intake.urgency_level, DEFAULT_URGENCY_WEIGHT)
    timeframe_weight = TIMEFRAME_WEIGHTS.get(
        intake.preferred_timeframe, DEFAULT_TIMEFRAME_WEIGHT
    )
    score = clamp01(intent_score * urgency_weight * timeframe_weight)
    logger.debug(
        "Score for '%s': %.3f (intent=%.2f urgency=%.1f timeframe=%.1f)",
        intake.name, score, intent_score, urgency_weight, timeframe_weight,
    )
    return score


def get_priority_level(score: float) -> PriorityLevel:
    """Map a score to its display label."""
    for lower_bound, level in PRIORITY_BANDS:
        if score >= lower_bound:
            return level
    return PriorityLevel.VERY_LOW
