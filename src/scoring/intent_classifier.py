"""
Intent classification for showroom intake responses.

Two classification policies exist and are kept separate:

- ``branching``: the visit reason decides, with test drives promoted to a
  purchase when financing or paperwork is on the table. This is the default.
- ``indicator``: counts yes/no answers across the high- and medium-intent
  questions and applies ordered rules.

Time allocation always follows the branching schema. Unanswered questions
(``None``) are neither yes nor no and fall through every check.

Usage:
    intent, allocation = classify_intent(intake)
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from src.config import CLASSIFICATION_POLICIES, settings
from src.schemas.customer_schema import IntentType, TimeAllocation
from src.schemas.intake_schema import IntakeResponse, VisitReason
from src.scoring.score_calculator import calculate_intent_score

logger = logging.getLogger(__name__)

HIGH_INTENT_FIELDS = ("needs_financing", "wants_test_drive", "wants_multiple_cars")
MEDIUM_INTENT_FIELDS = ("has_trade_in", "needs_appraisal")
LOW_INTENT_FIELDS = (
    "needs_appraisal",
    "needs_financing",
    "wants_test_drive",
    "wants_multiple_cars",
    "has_trade_in",
)

# Labels for the breakdown view, keyed by intake field
INDICATOR_LABELS: dict[str, tuple[str, str]] = {
    "needs_financing": ("Needs Financing", "No Financing Needed"),
    "will_finalize_paperwork": ("Will Finalize Paperwork", "No Paperwork"),
    "wants_warranty": ("Wants Warranty", "No Warranty Interest"),
    "needs_appraisal": ("Needs Appraisal", "No Appraisal Needed"),
}
BREAKDOWN_HIGH_FIELDS = ("needs_financing", "will_finalize_paperwork", "wants_warranty")
BREAKDOWN_MEDIUM_FIELDS = ("needs_appraisal",)

HIGH_CONFIDENCE_SCORE = 0.7
MEDIUM_CONFIDENCE_SCORE = 0.4

_REASON_TO_INTENT: dict[VisitReason, IntentType] = {
    VisitReason.PURCHASE: IntentType.PURCHASE,
    VisitReason.TRADE_IN: IntentType.TRADE_IN,
    VisitReason.BROWSING: IntentType.BROWSING,
}


@dataclass
class IntentBreakdown:
    """Detailed intent analysis shown next to a queue entry."""

    intent_score: float
    intent_type: IntentType
    time_allocation: TimeAllocation
    confidence: str
    high_intent: list[str] = field(default_factory=list)
    medium_intent: list[str] = field(default_factory=list)
    low_intent: list[str] = field(default_factory=list)


def _count(intake: IntakeResponse, fields: tuple[str, ...], answer: bool) -> int:
    return sum(1 for name in fields if getattr(intake, name) is answer)


def _classify_by_branching(intake: IntakeResponse) -> IntentType:
    reason = intake.visit_reason
    if reason in _REASON_TO_INTENT:
        return _REASON_TO_INTENT[reason]
    if reason == VisitReason.TEST_DRIVE:
        if intake.needs_financing is True or intake.will_finalize_paperwork is True:
            return IntentType.PURCHASE
        return IntentType.BROWSING
    return IntentType.OTHER


def _classify_by_indicators(intake: IntakeResponse) -> IntentType:
    high = _count(intake, HIGH_INTENT_FIELDS, True)
    medium = _count(intake, MEDIUM_INTENT_FIELDS, True)
    low = _count(intake, LOW_INTENT_FIELDS, False)

    if high >= 2:
        return IntentType.PURCHASE
    if high == 1 and medium >= 1:
        return IntentType.PURCHASE
    if intake.has_trade_in is True and intake.needs_appraisal is True:
        return IntentType.TRADE_IN
    if medium >= 2:
        return IntentType.SERVICE
    if low >= 3:
        return IntentType.BROWSING
    return IntentType.OTHER


def calculate_intent_type(
    intake: IntakeResponse, policy: Optional[str] = None
) -> IntentType:
    """
    Classify why the customer is visiting.

    Args:
        intake: Validated intake response.
        policy: ``"branching"`` or ``"indicator"``; defaults to the configured policy.

    Raises:
        ValueError: If the policy name is unknown.
    """
    policy = (policy or settings.scoring.classification_policy).lower()
    if policy == "branching":
        return _classify_by_branching(intake)
    if policy == "indicator":
        return _classify_by_indicators(intake)
    raise ValueError(
        f"Unknown classification policy {policy!r}. Valid: {list(CLASSIFICATION_POLICIES)}"
    )


def calculate_time_allocation(intake: IntakeResponse) -> TimeAllocation:
    """Estimate the appointment length bucket."""
    financing = intake.needs_financing is True
    paperwork = intake.will_finalize_paperwork is True

    if intake.visit_reason == VisitReason.BROWSING and not financing and not paperwork:
        return TimeAllocation.SHORT
    if financing or paperwork or intake.wants_warranty is True:
        return TimeAllocation.EXTENDED
    return TimeAllocation.STANDARD


def classify_intent(
    intake: IntakeResponse, policy: Optional[str] = None
) -> tuple[IntentType, TimeAllocation]:
    """Return ``(intent_type, time_allocation)`` for an intake response."""
    intent = calculate_intent_type(intake, policy)
    allocation = calculate_time_allocation(intake)
    logger.debug(
        "Classified '%s' as %s / %s", intake.name, intent.value, allocation.value
    )
    return intent, allocation


def get_intent_breakdown(
    intake: IntakeResponse, policy: Optional[str] = None
) -> IntentBreakdown:
    """Explain a classification: sub-score, confidence, and the answers behind it."""
    intent_score = calculate_intent_score(intake)
    if intent_score > HIGH_CONFIDENCE_SCORE:
        confidence = "High"
    elif intent_score > MEDIUM_CONFIDENCE_SCORE:
        confidence = "Medium"
    else:
        confidence = "Low"

    return IntentBreakdown(
        intent_score=intent_score,
        intent_type=calculate_intent_type(intake, policy),
        time_allocation=calculate_time_allocation(intake),
        confidence=confidence,
        high_intent=[
            INDICATOR_LABELS[name][0]
            for name in BREAKDOWN_HIGH_FIELDS
            if getattr(intake, name) is True
        ],
        medium_intent=[
            INDICATOR_LABELS[name][0]
            for name in BREAKDOWN_MEDIUM_FIELDS
            if getattr(intake, name) is True
        ],
        low_intent=[
            labels[1] for name, labels in INDICATOR_LABELS.items()
            if getattr(intake, name) is False
        ],
    )
